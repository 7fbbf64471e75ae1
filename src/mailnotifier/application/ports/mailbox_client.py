from __future__ import annotations
from typing import Protocol

from mailnotifier.domain.entities.mail_message import MailMessage
from mailnotifier.domain.fetch_window import FetchWindow


class MailboxClient(Protocol):
    """Transport used by a single check of the mailbox.

    connect/select/fetch_range raise TransportError; disconnect never raises.
    """

    def connect(self) -> None: ...
    def select(self, folder: str) -> int: ...
    def fetch_range(self, window: FetchWindow, want_body: bool) -> list[MailMessage]: ...
    def disconnect(self) -> None: ...
