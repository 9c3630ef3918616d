"""Repository interfaces for the Commentary domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from commentary.domain.repository.comment import CommentRepository
from commentary.domain.repository.notification import NotificationQueueRepository
from commentary.domain.repository.vote import VoteRepository

__all__ = [
    "CommentRepository",
    "VoteRepository",
    "NotificationQueueRepository",
]
