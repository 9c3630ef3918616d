"""Dispatch notifications use case."""

from pydantic import BaseModel, Field

from commentary.application.usecase.base import BaseUseCase
from commentary.domain.service import NotificationService


class DispatchNotificationsRequest(BaseModel):
    """Dispatch request."""

    limit: int = Field(default=100, ge=1)


class DispatchNotificationsResponse(BaseModel):
    """Counts of one queue drain."""

    sent: int
    failed: int
    skipped: int


class DispatchNotificationsUseCase(BaseUseCase):
    """Use case for draining the reply notification queue."""

    def __init__(self, notification_service: NotificationService) -> None:
        """Initialize dispatch use case.

        Args:
            notification_service: Notification domain service
        """
        self.notification_service = notification_service

    async def execute(
        self, request: DispatchNotificationsRequest
    ) -> DispatchNotificationsResponse:
        """Send up to ``limit`` queued notifications.

        Args:
            request: Dispatch request

        Returns:
            Counts of sent, failed and dropped entries
        """
        report = await self.notification_service.dispatch_pending(request.limit)
        return DispatchNotificationsResponse(
            sent=report.sent, failed=report.failed, skipped=report.skipped
        )
