"""Notification use cases."""

from .dispatch_notifications import (
    DispatchNotificationsRequest,
    DispatchNotificationsResponse,
    DispatchNotificationsUseCase,
)

__all__ = [
    "DispatchNotificationsRequest",
    "DispatchNotificationsResponse",
    "DispatchNotificationsUseCase",
]
