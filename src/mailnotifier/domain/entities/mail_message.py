from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

DATE_FORMAT = "%Y-%m-%d %H:%M"


@dataclass(frozen=True)
class MailMessage:
    uid: int
    sender: str
    subject: str
    received_at: Optional[datetime]
    raw_body: Optional[bytes] = None  # full RFC 822 bytes, only when bodies are fetched


@dataclass(frozen=True)
class NotificationPayload:
    sender: str
    subject: str
    date: str
    body: str

    @classmethod
    def from_message(cls, msg: MailMessage, body: str) -> "NotificationPayload":
        date = msg.received_at.strftime(DATE_FORMAT) if msg.received_at else ""
        return cls(sender=msg.sender, subject=msg.subject, date=date, body=body)
