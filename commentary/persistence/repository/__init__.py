"""PostgreSQL repository implementations."""

from commentary.persistence.repository.comment import PostgresCommentRepository
from commentary.persistence.repository.notification import (
    PostgresNotificationQueueRepository,
)
from commentary.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresCommentRepository",
    "PostgresVoteRepository",
    "PostgresNotificationQueueRepository",
]
