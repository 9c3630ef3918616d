"""Mail bodies for moderators, subscribers and commenters.

User supplied values are HTML-escaped before they are placed in the HTML
part.
"""

from html import escape
from typing import Optional

from commentary.domain.model.comment import Comment
from commentary.domain.model.outcome import status_label
from commentary.domain.service.mail import MailMessage
from commentary.domain.value import CommentStatus


def _button(url: str, label: str) -> str:
    return (
        f'<a href="{escape(url)}" style="display: inline-block; padding: 10px 20px; '
        f'background: #0d6efd; color: #fff; text-decoration: none; border-radius: 4px;">'
        f"{escape(label)}</a>"
    )


def _layout(headline: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>{escape(headline)}</title></head>
<body style="font-family: sans-serif; line-height: 1.5; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
<h1 style="font-size: 20px;">{escape(headline)}</h1>
{body}
</body>
</html>
"""


def _quote(comment: Comment) -> str:
    return (
        f'<blockquote style="border-left: 3px solid #ddd; margin: 15px 0; padding-left: 10px;">'
        f"<p><strong>{escape(comment.author)}</strong></p>"
        f"<p>{escape(comment.text)}</p>"
        f"</blockquote>"
    )


def new_comment_for_moderators(
    comment: Comment,
    recipients: list[str],
    publish_url: Optional[str],
    spam_url: str,
) -> MailMessage:
    """Mail to moderators for a freshly submitted comment.

    ``publish_url`` is None when the comment was published right away.
    """
    headline = "A new comment has been submitted"
    buttons = []
    lines = [
        headline,
        "",
        f"Author: {comment.author} <{comment.email}>",
        "",
        comment.text,
        "",
    ]
    if publish_url:
        buttons.append(_button(publish_url, "Publish the comment"))
        lines.append(f"Publish the comment: {publish_url}")
    buttons.append(_button(spam_url, "Mark this comment as SPAM"))
    lines.append(f"Mark this comment as SPAM: {spam_url}")

    status_text = (
        "pending approval"
        if comment.status == CommentStatus.PENDING_APPROVAL
        else status_label(comment.status)
    )
    body = (
        f"<p>Status: {escape(status_text)}</p>"
        f"<p>Author: {escape(comment.author)} &lt;{escape(comment.email)}&gt;</p>"
        f"{_quote(comment)}"
        f'<p>{"&nbsp;".join(buttons)}</p>'
    )
    return MailMessage(
        recipients=recipients,
        subject=headline,
        html=_layout(headline, body),
        text="\n".join(lines),
    )


def reply_notification(
    comment: Comment,
    recipient: str,
    comment_url: str,
    unsubscribe_url: str,
) -> MailMessage:
    """Mail to a subscriber about a new published comment."""
    headline = "A new reply has been posted"
    body = (
        f"<p>You are receiving this email because you have agreed to be "
        f"notified when a new reply has been posted.</p>"
        f"{_quote(comment)}"
        f"<p>{_button(comment_url, 'View the comment')}</p>"
        f"<p style=\"color: #666; font-size: 13px;\">If you do not want to "
        f"receive further mails about new replies, please click the link "
        f'below.<br><a href="{escape(unsubscribe_url)}">Stop sending me '
        f"further notification mails</a></p>"
    )
    text = "\n".join(
        [
            headline,
            "",
            f"{comment.author} wrote:",
            comment.text,
            "",
            f"View the comment: {comment_url}",
            "",
            "If you do not want to receive further mails about new replies, "
            "please open the link below:",
            unsubscribe_url,
        ]
    )
    return MailMessage(
        recipients=[recipient],
        subject=headline,
        html=_layout(headline, body),
        text=text,
    )


def status_change(comment: Comment, comment_url: Optional[str]) -> MailMessage:
    """Mail to the commenter after a moderator reviewed the comment."""
    headline = "The status of your comment has been changed by a moderator"
    label = status_label(comment.status)
    body = (
        f"<p>We would like to inform you that the following comment you "
        f"wrote has now been reviewed by a moderator:</p>"
        f"{_quote(comment)}"
        f"<p>Comment status: <strong>{escape(label)}</strong></p>"
    )
    lines = [
        headline,
        "",
        "We would like to inform you that the following comment you wrote "
        "has now been reviewed by a moderator:",
        "",
        comment.text,
        "",
        f"Comment status: {label}",
    ]
    if comment_url:
        body += (
            f"<p>Your comment is now published and visible to all.</p>"
            f"<p>{_button(comment_url, 'To the comment')}</p>"
        )
        lines += ["", "Your comment is now published and visible to all.", comment_url]
    return MailMessage(
        recipients=[comment.email],
        subject=f"Your comment status has been changed to {label}",
        html=_layout(headline, body),
        text="\n".join(lines),
    )
