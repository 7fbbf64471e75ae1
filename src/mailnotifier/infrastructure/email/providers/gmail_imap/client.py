from __future__ import annotations
import imaplib
from dataclasses import dataclass
from typing import Optional

from loguru import logger

from mailnotifier.application.ports.mailbox_client import MailboxClient
from mailnotifier.domain.entities.mail_message import MailMessage
from mailnotifier.domain.errors import TransportError
from mailnotifier.domain.fetch_window import FetchWindow
from mailnotifier.infrastructure.email.providers.gmail_imap.auth import (
    GMAIL_IMAP_HOST,
    GMAIL_IMAP_PORT,
    GmailImapAuthenticator,
    GmailImapCredentials,
)
from mailnotifier.infrastructure.email.providers.gmail_imap.mapper import fetch_response_to_messages

# PEEK keeps the \Seen flag untouched on the server
FETCH_WITH_BODY = "(UID BODY.PEEK[])"
FETCH_HEADERS_ONLY = "(UID BODY.PEEK[HEADER])"


@dataclass
class GmailImapConfig:
    email: str
    password: str
    host: str = GMAIL_IMAP_HOST
    port: int = GMAIL_IMAP_PORT


class GmailImapMailboxClient(MailboxClient):
    def __init__(self, cfg: GmailImapConfig) -> None:
        self.cfg = cfg
        self._auth = GmailImapAuthenticator(
            GmailImapCredentials(email=cfg.email, password=cfg.password),
            host=cfg.host,
            port=cfg.port,
        )
        self._conn: Optional[imaplib.IMAP4_SSL] = None

    def _require_conn(self) -> imaplib.IMAP4_SSL:
        if self._conn is None:
            raise TransportError("Not connected")
        return self._conn

    def connect(self) -> None:
        if self._conn is None:
            self._conn = self._auth.login()
            logger.debug(f"Logged in to {self.cfg.host} as {self.cfg.email}")

    def disconnect(self) -> None:
        if self._conn:
            try:
                self._conn.logout()
            except Exception:
                pass
            self._conn = None

    def select(self, folder: str) -> int:
        """Select `folder` read-only and return its message count."""
        conn = self._require_conn()
        try:
            typ, data = conn.select(folder, readonly=True)
        except (OSError, imaplib.IMAP4.error) as e:
            raise TransportError(f"Failed to select folder {folder}: {e}") from e
        if typ != "OK":
            raise TransportError(f"Failed to select folder {folder}")

        try:
            return int(data[0])
        except (IndexError, TypeError, ValueError) as e:
            raise TransportError(f"Unexpected SELECT response for {folder}: {data!r}") from e

    def fetch_range(self, window: FetchWindow, want_body: bool) -> list[MailMessage]:
        conn = self._require_conn()
        items = FETCH_WITH_BODY if want_body else FETCH_HEADERS_ONLY
        try:
            typ, data = conn.fetch(window.as_sequence_set(), items)
        except (OSError, imaplib.IMAP4.error) as e:
            raise TransportError(f"FETCH {window.as_sequence_set()} failed: {e}") from e
        if typ != "OK":
            raise TransportError(f"FETCH {window.as_sequence_set()} failed")

        messages = fetch_response_to_messages(data, want_body)
        logger.debug(f"Fetched {len(messages)} message(s)")
        return messages
