from __future__ import annotations
import sys
from typing import TextIO

from mailnotifier.application.ports.notifier import Notifier
from mailnotifier.domain.entities.mail_message import NotificationPayload

SEPARATOR = "─" * 41


class ConsolePrinter(Notifier):
    """Echo every announced message to stdout."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream

    def notify(self, payload: NotificationPayload, *, expire_after_ms: int = 0) -> None:
        out = self.stream or sys.stdout
        out.write(f"{SEPARATOR}\n")
        out.write(
            f"From: {payload.sender}\nDate: {payload.date}\nSubject: {payload.subject}\n\n{payload.body}\n"
        )
        out.flush()
