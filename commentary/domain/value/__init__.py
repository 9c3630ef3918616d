"""Domain value objects for Commentary."""

from commentary.domain.value.identifiers import (
    ROOT_PARENT_ID,
    CommentId,
    FieldId,
    PageId,
    QueueEntryId,
    UserId,
    VoteId,
)
from commentary.domain.value.types import (
    DISPLAYABLE_STATUSES,
    MODERATION_TARGETS,
    CommentForm,
    CommentStatus,
    NotificationPreference,
    RemoteCode,
    ThreadKey,
    VoteDirection,
    VoterIdentity,
)

__all__ = [
    # Identifiers
    "CommentId",
    "VoteId",
    "QueueEntryId",
    "PageId",
    "FieldId",
    "UserId",
    "ROOT_PARENT_ID",
    # Types
    "CommentForm",
    "CommentStatus",
    "DISPLAYABLE_STATUSES",
    "MODERATION_TARGETS",
    "NotificationPreference",
    "VoteDirection",
    "ThreadKey",
    "VoterIdentity",
    "RemoteCode",
]
