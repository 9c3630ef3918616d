"""Mock persistence providers for testing."""

from dishka import Scope, provide

from commentary.domain.repository import (
    CommentRepository,
    NotificationQueueRepository,
    VoteRepository,
)
from commentary.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryNotificationQueueRepository,
    InMemoryStore,
    InMemoryVoteRepository,
)
from commentary.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    The store lives as long as the container, so every request of one test
    sees the same data. Each test builds its own container.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_store(self) -> InMemoryStore:
        """Provide the shared in-memory tables."""
        return InMemoryStore()

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, store: InMemoryStore) -> CommentRepository:
        """Provide in-memory comment repository."""
        return InMemoryCommentRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_vote_repository(self, store: InMemoryStore) -> VoteRepository:
        """Provide in-memory vote repository."""
        return InMemoryVoteRepository(store)

    @provide(scope=Scope.REQUEST)
    def get_notification_queue_repository(
        self, store: InMemoryStore
    ) -> NotificationQueueRepository:
        """Provide in-memory notification queue repository."""
        return InMemoryNotificationQueueRepository(store)
