"""Domain models and pure helpers."""

from mailnotifier.domain.entities import MailMessage, NotificationPayload
from mailnotifier.domain.errors import (
    ConfigError,
    MailNotifierError,
    ParseError,
    PersistenceError,
    TransportError,
)
from mailnotifier.domain.fetch_window import FetchWindow, compute_window
from mailnotifier.domain.truncate import truncate_body

__all__ = [
    "MailMessage",
    "NotificationPayload",
    "FetchWindow",
    "compute_window",
    "truncate_body",
    "MailNotifierError",
    "ConfigError",
    "TransportError",
    "ParseError",
    "PersistenceError",
]
