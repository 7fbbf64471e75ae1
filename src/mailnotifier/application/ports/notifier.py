from __future__ import annotations
from typing import Protocol

from mailnotifier.domain.entities.mail_message import NotificationPayload


class Notifier(Protocol):
    def notify(self, payload: NotificationPayload, *, expire_after_ms: int) -> None: ...
