"""Notification queue entry entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from commentary.domain.model.comment import utcnow
from commentary.domain.model.common import DomainModel
from commentary.domain.value import CommentId, FieldId, PageId, QueueEntryId


class NotificationQueueEntry(DomainModel):
    """A pending reply notification for one recipient.

    Entries are written when a comment is published and deleted once the
    mail has been sent, or when the triggering comment is deleted or
    marked as spam.
    """

    id: Optional[QueueEntryId] = None
    parent_comment_id: CommentId
    triggering_comment_id: CommentId
    recipient_email: str
    page_id: PageId
    field_id: FieldId
    created_at: datetime = Field(default_factory=utcnow)
