"""Check the mailbox once and announce what is new."""

from __future__ import annotations

from typing import Iterator, Optional

from loguru import logger

from mailnotifier.application.ports.cursor_store import CursorStore
from mailnotifier.application.ports.mailbox_client import MailboxClient
from mailnotifier.application.ports.notifier import Notifier
from mailnotifier.domain.entities.mail_message import MailMessage, NotificationPayload
from mailnotifier.domain.errors import TransportError
from mailnotifier.domain.fetch_window import compute_window
from mailnotifier.domain.truncate import truncate_body
from mailnotifier.infrastructure.email.rfc822 import extract_plain_text


class CheckMailboxUseCase:
    """One fetch/filter/notify cycle.

    Flow:
    1. Connect and select the folder (any TransportError abandons the cycle)
    2. Fetch the last `count` messages in peek mode
    3. With a cursor store: drop messages at or below the cursor, persist
       each new UID before announcing it. An empty cursor only records the
       newest UID so historical mail is never announced on first launch.
    4. Without a cursor store: announce everything, oldest first
    """

    def __init__(
        self,
        client: MailboxClient,
        notifier: Notifier,
        console: Optional[Notifier] = None,
        folder: str = "INBOX",
        body_length: int = 500,
        expire_after_ms: int = 10_000,
    ) -> None:
        """Initialize the use case.

        Args:
            client: Mailbox transport
            notifier: Desktop notification sink
            console: Optional second sink that echoes every payload (stdout)
            folder: Folder to watch
            body_length: Max body length in the payload; 0 skips bodies entirely
            expire_after_ms: How long the desktop notification stays up
        """
        if body_length < 0:
            raise ValueError(f"body_length must be >= 0, got {body_length}")
        self.client = client
        self.notifier = notifier
        self.console = console
        self.folder = folder
        self.body_length = body_length
        self.expire_after_ms = expire_after_ms

    @property
    def want_body(self) -> bool:
        return self.body_length > 0

    def run(self, count: int, cursor_store: Optional[CursorStore] = None) -> int:
        """Run a single check. Returns the number of messages announced."""
        try:
            messages = self._fetch(count)
        except TransportError as e:
            logger.warning(f"Mailbox check skipped: {e}")
            return 0
        finally:
            self.client.disconnect()

        if cursor_store is None:
            for msg in messages:
                self._announce(msg)
            return len(messages)

        announced = 0
        for msg in self._new_messages(messages, cursor_store):
            self._announce(msg)
            announced += 1

        if announced:
            logger.info(f"Announced {announced} new message(s) from {self.folder}")
        return announced

    def _fetch(self, count: int) -> list[MailMessage]:
        self.client.connect()
        size = self.client.select(self.folder)

        window = compute_window(size, count)
        if window is None:
            logger.debug(f"{self.folder} is empty")
            return []

        logger.debug(f"Fetching {self.folder} positions {window.as_sequence_set()}")
        messages = self.client.fetch_range(window, want_body=self.want_body)
        return sorted(messages, key=lambda m: m.uid)

    def _new_messages(self, messages: list[MailMessage], store: CursorStore) -> Iterator[MailMessage]:
        """Yield unseen messages, saving each UID right before it is yielded.

        The cursor is at most one message ahead of the notifications sent.
        """
        if not messages:
            return

        cursor = store.load()
        if not cursor.has_history:
            newest = messages[-1].uid
            store.save(newest)
            logger.info(f"No history yet, starting after UID {newest}")
            return

        last_seen = cursor.last_seen_id
        for msg in messages:
            if msg.uid <= last_seen:
                continue
            last_seen = msg.uid
            store.save(last_seen)
            yield msg

    def _build_payload(self, msg: MailMessage) -> NotificationPayload:
        body = ""
        if self.want_body:
            body = truncate_body(extract_plain_text(msg.raw_body), self.body_length)
        return NotificationPayload.from_message(msg, body)

    def _announce(self, msg: MailMessage) -> None:
        payload = self._build_payload(msg)
        sinks = [self.console, self.notifier] if self.console else [self.notifier]
        for sink in sinks:
            try:
                sink.notify(payload, expire_after_ms=self.expire_after_ms)
            except Exception as e:
                logger.error(f"Failed to deliver notification for UID {msg.uid}: {e}")
