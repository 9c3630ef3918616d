"""Typed results of comment operations.

Expected business outcomes (already voted, rejected remote link, invalid
form) are returned as values instead of being raised.
"""

from datetime import timedelta
from enum import Enum
from typing import Optional, Union

from commentary.domain.model.comment import Comment
from commentary.domain.model.common import DomainModel
from commentary.domain.value import CommentId, CommentStatus, VoteDirection


class VoteAccepted(DomainModel):
    """The vote was recorded. ``tally`` is the new counter value."""

    comment_id: CommentId
    direction: VoteDirection
    tally: int


class AlreadyVoted(DomainModel):
    """The same identity voted on this comment within the cooldown window."""

    comment_id: CommentId
    cooldown_remaining: timedelta


VoteOutcome = Union[VoteAccepted, AlreadyVoted]


class RemoteLinkRejection(str, Enum):
    """Why a remote link was refused."""

    UNKNOWN_CODE = "unknown_code"
    INVALID_STATUS = "invalid_status"
    ALREADY_USED = "already_used"


_REJECTION_MESSAGES = {
    RemoteLinkRejection.UNKNOWN_CODE: (
        "Unfortunately, no matching comment was found for this code."
    ),
    RemoteLinkRejection.INVALID_STATUS: (
        "The requested status is not a valid moderation status."
    ),
    RemoteLinkRejection.ALREADY_USED: (
        "Unfortunately, the status of this comment has already been changed "
        "via remote link."
    ),
}


class RemoteLinkRejected(DomainModel):
    """A remote link was refused. Nothing was changed."""

    reason: RemoteLinkRejection

    @property
    def message(self) -> str:
        return _REJECTION_MESSAGES[self.reason]


class StatusChanged(DomainModel):
    """A moderation transition was applied.

    Attributes:
        comment_id: The moderated comment
        old_status: Status before the change
        new_status: Stored status, SPAM_WITH_REPLIES when spam had replies
        mail_sent: Whether the commenter was informed by mail
        page: Page the comment is shown on, for approvals
    """

    comment_id: CommentId
    old_status: CommentStatus
    new_status: CommentStatus
    mail_sent: bool = False
    page: Optional[int] = None

    @property
    def message(self) -> str:
        label = status_label(self.new_status)
        text = f"The status of the comment has been changed to: {label}."
        if self.mail_sent:
            text += (
                " In addition, an email was sent to the commenter to inform "
                "them of the status change."
            )
        return text


StatusChangeOutcome = Union[StatusChanged, RemoteLinkRejected]


class NotificationsCancelled(DomainModel):
    """Notification preference was set to none. Repeating it is harmless."""

    comment_id: CommentId
    already_cancelled: bool = False

    @property
    def message(self) -> str:
        if self.already_cancelled:
            return (
                "You have already canceled the receiving of reply "
                "notification mails for this comment."
            )
        return (
            "You have successfully canceled the receiving of reply "
            "notification mails."
        )


CancelOutcome = Union[NotificationsCancelled, RemoteLinkRejected]


class SubmissionAccepted(DomainModel):
    """The comment was stored.

    ``message`` is the one-time confirmation for the submitter, ``page``
    the page the comment is shown on when it was published right away.
    """

    comment: Comment
    message: str
    page: Optional[int] = None


class SubmissionInvalid(DomainModel):
    """The form was rejected, nothing was stored. Errors are keyed by field."""

    errors: dict[str, str]


SubmissionOutcome = Union[SubmissionAccepted, SubmissionInvalid]


class DeletionResult(str, Enum):
    """Outcome of deleting a comment."""

    DELETED = "deleted"
    REFUSED_HAS_REPLIES = "refused_has_replies"
    NOT_FOUND = "not_found"


class DispatchReport(DomainModel):
    """Result of one notification queue drain.

    ``skipped`` counts entries dropped without sending because their
    comment is gone or the recipient unsubscribed.
    """

    sent: int = 0
    failed: int = 0
    skipped: int = 0


def status_label(status: CommentStatus) -> str:
    """Human readable status name used in messages and mails."""
    return {
        CommentStatus.PENDING_APPROVAL: "pending approval",
        CommentStatus.APPROVED: "approved",
        CommentStatus.SPAM: "spam",
        CommentStatus.SPAM_WITH_REPLIES: "spam",
    }[status]
