"""PostgreSQL implementation of the notification queue repository."""

from typing import List, Sequence, Set

from sqlalchemy import func, select

from commentary.domain.model import NotificationQueueEntry
from commentary.domain.repository import NotificationQueueRepository
from commentary.domain.value import CommentId, QueueEntryId
from commentary.persistence.mappers import queue_entry_to_dict, row_to_queue_entry
from commentary.persistence.tables import notification_queue_table

from .base import PostgresRepository


class PostgresNotificationQueueRepository(
    PostgresRepository, NotificationQueueRepository
):
    """PostgreSQL implementation of NotificationQueueRepository."""

    async def add_many(
        self, entries: Sequence[NotificationQueueEntry]
    ) -> List[NotificationQueueEntry]:
        """Append entries to the queue."""
        if not entries:
            return []
        stmt = (
            notification_queue_table.insert()
            .values([queue_entry_to_dict(entry) for entry in entries])
            .returning(*notification_queue_table.c)
        )
        result = await self._execute(stmt, "enqueue_notifications")
        return [row_to_queue_entry(row._asdict()) for row in result.fetchall()]

    async def find_recipients(self, triggering_comment_id: CommentId) -> Set[str]:
        """Find the recipients already queued for a comment."""
        stmt = select(func.lower(notification_queue_table.c.recipient_email)).where(
            notification_queue_table.c.triggering_comment_id == triggering_comment_id
        )
        result = await self._execute(stmt, "find_queued_recipients")
        return set(result.scalars().all())

    async def find_pending(self, limit: int = 100) -> List[NotificationQueueEntry]:
        """Find the oldest queued entries."""
        stmt = (
            select(notification_queue_table)
            .order_by(notification_queue_table.c.id)
            .limit(limit)
        )
        result = await self._execute(stmt, "find_pending_notifications")
        return [row_to_queue_entry(row._asdict()) for row in result.fetchall()]

    async def delete(self, entry_id: QueueEntryId) -> None:
        """Delete one entry."""
        stmt = notification_queue_table.delete().where(
            notification_queue_table.c.id == entry_id
        )
        await self._execute(stmt, "delete_notification")

    async def delete_by_triggering_comment(self, comment_id: CommentId) -> int:
        """Drop every entry triggered by a comment."""
        stmt = notification_queue_table.delete().where(
            notification_queue_table.c.triggering_comment_id == comment_id
        )
        result = await self._execute(stmt, "drop_notifications")
        return result.rowcount or 0
