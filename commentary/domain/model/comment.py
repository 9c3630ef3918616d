"""Comment entity.

Comments form a forest per thread: ``parent_id`` 0 marks a top-level
comment, any other value references an earlier comment of the same thread.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from commentary.domain.model.common import DomainModel
from commentary.domain.value import (
    ROOT_PARENT_ID,
    CommentId,
    CommentStatus,
    FieldId,
    NotificationPreference,
    PageId,
    RemoteCode,
    ThreadKey,
    UserId,
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Comment(DomainModel):
    """Comment entity.

    ``id`` is None until the comment has been stored. ``upvotes`` and
    ``downvotes`` only ever grow. ``remote_change_used`` flips to True the
    first time a remote status link is used and never flips back.
    """

    id: Optional[CommentId] = None
    parent_id: CommentId = ROOT_PARENT_ID
    page_id: PageId
    field_id: FieldId
    author: str = Field(min_length=1, max_length=128)
    email: str = Field(max_length=255)
    website: Optional[str] = Field(default=None, max_length=255)
    text: str = Field(min_length=1, max_length=1024)
    stars: Optional[int] = Field(default=None, ge=1, le=5)
    status: CommentStatus = CommentStatus.PENDING_APPROVAL
    upvotes: int = Field(default=0, ge=0)
    downvotes: int = Field(default=0, ge=0)
    notification: NotificationPreference = NotificationPreference.NONE
    created_at: datetime = Field(default_factory=utcnow)
    sort_index: int = Field(default=0, ge=0)
    remote_change_used: bool = False
    code: RemoteCode = Field(default_factory=RemoteCode.generate)
    user_id: UserId = UserId(0)
    ip: str = ""
    user_agent: str = ""
    spam_marked_at: Optional[datetime] = None

    @property
    def thread(self) -> ThreadKey:
        """The thread instance this comment belongs to."""
        return ThreadKey(page_id=self.page_id, field_id=self.field_id)

    @property
    def is_top_level(self) -> bool:
        return self.parent_id == ROOT_PARENT_ID

    @property
    def is_displayable(self) -> bool:
        return self.status.is_displayable

    def with_status(self, status: CommentStatus, now: datetime) -> "Comment":
        """Return a copy with the new status.

        ``spam_marked_at`` is stamped when the comment is marked as spam and
        cleared for every other status.
        """
        return self.model_copy(
            update={
                "status": status,
                "spam_marked_at": now if status.is_spam else None,
            }
        )


def sort_key(comment: Comment) -> tuple[int, int]:
    """Deterministic sibling order: insertion index, then id."""
    return (comment.sort_index, comment.id or 0)
