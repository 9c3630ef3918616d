"""Notification queue repository interface."""

from abc import ABC, abstractmethod
from typing import List, Sequence, Set

from commentary.domain.model.notification import NotificationQueueEntry
from commentary.domain.value import CommentId, QueueEntryId


class NotificationQueueRepository(ABC):
    """Repository for pending reply notifications.

    Inserts are append-only. Entries are removed after a successful send.
    """

    @abstractmethod
    async def add_many(
        self, entries: Sequence[NotificationQueueEntry]
    ) -> List[NotificationQueueEntry]:
        """Append entries to the queue.

        Args:
            entries: Entries to store

        Returns:
            The stored entries with ids assigned
        """
        pass

    @abstractmethod
    async def find_recipients(self, triggering_comment_id: CommentId) -> Set[str]:
        """Find the recipients already queued for a comment.

        Args:
            triggering_comment_id: The new comment

        Returns:
            Lowercased recipient emails
        """
        pass

    @abstractmethod
    async def find_pending(self, limit: int = 100) -> List[NotificationQueueEntry]:
        """Find the oldest queued entries.

        Args:
            limit: Maximum number of entries

        Returns:
            Entries ordered by id
        """
        pass

    @abstractmethod
    async def delete(self, entry_id: QueueEntryId) -> None:
        """Delete one entry after its mail was sent.

        Args:
            entry_id: The entry ID
        """
        pass

    @abstractmethod
    async def delete_by_triggering_comment(self, comment_id: CommentId) -> int:
        """Drop every entry triggered by a comment.

        Args:
            comment_id: The triggering comment

        Returns:
            Number of entries removed
        """
        pass
