"""Shared fixtures and in-memory stand-ins for the ports."""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

import pytest
from loguru import logger

from mailnotifier.application.ports.cursor_store import Cursor
from mailnotifier.domain.entities.mail_message import MailMessage, NotificationPayload
from mailnotifier.domain.errors import TransportError
from mailnotifier.domain.fetch_window import FetchWindow


def build_rfc822(
    *bodies: str,
    sender: str = "Alice <alice@example.com>",
    subject: str = "Hello",
    date: str = "Tue, 14 Oct 2025 09:30:00 +0000",
) -> bytes:
    """Multipart/mixed message with one text/plain part per body."""
    msg = MIMEMultipart()
    msg["From"] = sender
    msg["Subject"] = subject
    msg["Date"] = date
    for body in bodies:
        msg.attach(MIMEText(body, "plain", "utf-8"))
    return msg.as_bytes()


class FakeMailboxClient:
    """Mailbox of `size` messages whose UIDs equal their positions times `uid_step`."""

    def __init__(self, size: int = 0, uid_step: int = 1, fail_on: Optional[str] = None):
        self.size = size
        self.uid_step = uid_step
        self.fail_on = fail_on
        self.calls: list[tuple] = []
        self.connected = False

    def _maybe_fail(self, op: str) -> None:
        if self.fail_on == op:
            raise TransportError(f"{op} failed")

    def connect(self) -> None:
        self.calls.append(("connect",))
        self._maybe_fail("connect")
        self.connected = True

    def select(self, folder: str) -> int:
        self.calls.append(("select", folder))
        self._maybe_fail("select")
        return self.size

    def fetch_range(self, window: FetchWindow, want_body: bool) -> list[MailMessage]:
        self.calls.append(("fetch", window, want_body))
        self._maybe_fail("fetch")
        messages = []
        # newest first, the use case must not rely on server order
        for pos in range(window.end, window.start - 1, -1):
            uid = pos * self.uid_step
            raw = build_rfc822(f"body {uid}", subject=f"Subject {uid}") if want_body else None
            messages.append(
                MailMessage(
                    uid=uid,
                    sender="alice@example.com",
                    subject=f"Subject {uid}",
                    received_at=datetime(2025, 10, 14, 9, 30, tzinfo=timezone.utc),
                    raw_body=raw,
                )
            )
        return messages

    def disconnect(self) -> None:
        self.calls.append(("disconnect",))
        self.connected = False


class RecordingNotifier:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent: list[tuple[NotificationPayload, int]] = []

    def notify(self, payload: NotificationPayload, *, expire_after_ms: int) -> None:
        if self.fail:
            raise RuntimeError("notification daemon gone")
        self.sent.append((payload, expire_after_ms))


class MemoryCursorStore:
    def __init__(self, last_seen_id: int = 0):
        self.value = last_seen_id
        self.saves: list[int] = []

    def load(self) -> Cursor:
        return Cursor(last_seen_id=self.value)

    def save(self, last_seen_id: int) -> None:
        self.value = last_seen_id
        self.saves.append(last_seen_id)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run from an empty directory with no mailnotifier variables set."""
    for name in (
        "GMAIL_USER",
        "GMAIL_READER",
        "IMAP_HOST",
        "IMAP_PORT",
        "IMAP_FOLDER",
        "POLL_INTERVAL_SECONDS",
        "POLL_FETCH_COUNT",
        "BODY_LENGTH",
        "CURSOR_PATH",
        "NOTIFICATION_APP_NAME",
        "NOTIFICATION_EXPIRE_MS",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)

    from mailnotifier.infrastructure.settings import get_settings

    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _reset_loguru():
    """The CLI reconfigures loguru; put a plain stderr sink back afterwards."""
    yield
    logger.remove()
    logger.add(sys.__stderr__)
