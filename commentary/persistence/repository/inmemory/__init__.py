"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .notification import InMemoryNotificationQueueRepository
from .store import InMemoryStore
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryNotificationQueueRepository",
    "InMemoryStore",
    "InMemoryVoteRepository",
]
