"""Absolute links embedded in mails."""

from typing import Optional
from urllib.parse import urlencode

from commentary.domain.model.comment import Comment
from commentary.domain.value import CommentStatus, NotificationPreference


class LinkBuilder:
    """Builds remote links and "jump to comment" links.

    Remote links point at the ``/remote`` endpoint of this service. Comment
    links point at the public page that embeds the thread.
    """

    def __init__(self, api_base_url: str, public_url: str, page_path_template: str):
        self.api_base_url = api_base_url.rstrip("/")
        self.public_url = public_url.rstrip("/")
        self.page_path_template = page_path_template

    def remote_status(self, comment: Comment, status: CommentStatus) -> str:
        """Single-use link that sets the comment status."""
        value = "approve" if status == CommentStatus.APPROVED else "spam"
        return self._remote({"code": str(comment.code), "status": value})

    def unsubscribe(self, comment: Comment) -> str:
        """Idempotent link that turns notifications off for a comment."""
        return self._remote(
            {
                "code": str(comment.code),
                "notification": int(NotificationPreference.NONE),
            }
        )

    def comment(self, comment: Comment, page: Optional[int] = None) -> str:
        """Link to the page showing the comment, anchored on it."""
        path = self.page_path_template.format(
            page_id=comment.page_id, field_id=comment.field_id
        )
        query = f"?{urlencode({'page': page})}" if page else ""
        return f"{self.public_url}{path}{query}#comment-{comment.id}"

    def _remote(self, params: dict) -> str:
        return f"{self.api_base_url}/remote?{urlencode(params)}"
