"""Moderation use cases."""

from .remote_action import (
    RemoteActionRequest,
    RemoteActionResponse,
    RemoteActionUseCase,
)
from .set_status import SetStatusRequest, SetStatusResponse, SetStatusUseCase

__all__ = [
    "RemoteActionRequest",
    "RemoteActionResponse",
    "RemoteActionUseCase",
    "SetStatusRequest",
    "SetStatusResponse",
    "SetStatusUseCase",
]
