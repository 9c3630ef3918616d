"""Domain services."""

from .base import Service
from .clock import Clock, FixedClock, SystemClock
from .comment_service import CommentService
from .links import LinkBuilder
from .mail import MailMessage, MailSender
from .moderation_service import ModerationService
from .notification_service import NotificationService
from .thread_service import ThreadService
from .tree_builder import CommentTreeBuilder
from .vote_service import VoteService

__all__ = [
    "Clock",
    "CommentService",
    "CommentTreeBuilder",
    "FixedClock",
    "LinkBuilder",
    "MailMessage",
    "MailSender",
    "ModerationService",
    "NotificationService",
    "Service",
    "SystemClock",
    "ThreadService",
    "VoteService",
]
