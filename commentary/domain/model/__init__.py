"""Domain model entities for Commentary."""

from commentary.domain.model.comment import Comment, sort_key
from commentary.domain.model.notification import NotificationQueueEntry
from commentary.domain.model.outcome import (
    AlreadyVoted,
    CancelOutcome,
    DeletionResult,
    DispatchReport,
    NotificationsCancelled,
    RemoteLinkRejected,
    RemoteLinkRejection,
    StatusChanged,
    StatusChangeOutcome,
    SubmissionAccepted,
    SubmissionInvalid,
    SubmissionOutcome,
    VoteAccepted,
    VoteOutcome,
    status_label,
)
from commentary.domain.model.page import PageWindow, RatingSummary, ThreadPage
from commentary.domain.model.tree import CommentNode, OrderedForest
from commentary.domain.model.vote import Vote

__all__ = [
    "Comment",
    "Vote",
    "NotificationQueueEntry",
    "CommentNode",
    "OrderedForest",
    "PageWindow",
    "RatingSummary",
    "ThreadPage",
    # Outcomes
    "VoteAccepted",
    "AlreadyVoted",
    "VoteOutcome",
    "StatusChanged",
    "RemoteLinkRejected",
    "RemoteLinkRejection",
    "StatusChangeOutcome",
    "NotificationsCancelled",
    "CancelOutcome",
    "SubmissionAccepted",
    "SubmissionInvalid",
    "SubmissionOutcome",
    "DeletionResult",
    "DispatchReport",
    "status_label",
    "sort_key",
]
