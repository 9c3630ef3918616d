"""In-memory notification queue repository for testing."""

from typing import Optional, Sequence

from commentary.domain.model.notification import NotificationQueueEntry
from commentary.domain.repository.notification import NotificationQueueRepository
from commentary.domain.value import CommentId, QueueEntryId

from .store import InMemoryStore


class InMemoryNotificationQueueRepository(NotificationQueueRepository):
    """In-memory implementation of NotificationQueueRepository for testing."""

    def __init__(self, store: Optional[InMemoryStore] = None) -> None:
        self.store = store or InMemoryStore()

    async def add_many(
        self, entries: Sequence[NotificationQueueEntry]
    ) -> list[NotificationQueueEntry]:
        """Append entries to the queue."""
        for entry in entries:
            key = (entry.triggering_comment_id, entry.recipient_email.lower())
            if key in self._keys():
                raise ValueError(f"Duplicate queue entry: {key}")

        saved = []
        for entry in entries:
            entry_id = self.store.next_queue_id()
            stored = entry.model_copy(update={"id": entry_id})
            self.store.queue[entry_id] = stored
            saved.append(stored)
        return saved

    async def find_recipients(self, triggering_comment_id: CommentId) -> set[str]:
        """Find the recipients already queued for a comment."""
        return {
            e.recipient_email.lower()
            for e in self.store.queue.values()
            if e.triggering_comment_id == triggering_comment_id
        }

    async def find_pending(self, limit: int = 100) -> list[NotificationQueueEntry]:
        """Find the oldest queued entries."""
        return [self.store.queue[key] for key in sorted(self.store.queue)][:limit]

    async def delete(self, entry_id: QueueEntryId) -> None:
        """Delete one entry."""
        self.store.queue.pop(entry_id, None)

    async def delete_by_triggering_comment(self, comment_id: CommentId) -> int:
        """Drop every entry triggered by a comment."""
        doomed = [
            key
            for key, entry in self.store.queue.items()
            if entry.triggering_comment_id == comment_id
        ]
        for key in doomed:
            del self.store.queue[key]
        return len(doomed)

    def _keys(self) -> set[tuple[CommentId, str]]:
        return {
            (e.triggering_comment_id, e.recipient_email.lower())
            for e in self.store.queue.values()
        }
