"""Outgoing mail adapter."""

from .client import MockMailSender, SmtpMailSender

__all__ = ["SmtpMailSender", "MockMailSender"]
