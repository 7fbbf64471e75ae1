from __future__ import annotations
from dataclasses import dataclass
import imaplib

from mailnotifier.domain.errors import TransportError

GMAIL_IMAP_HOST = "imap.gmail.com"
GMAIL_IMAP_PORT = 993


@dataclass(frozen=True)
class GmailImapCredentials:
    """
    Represents credentials for a single Gmail mailbox (address + app password).
    """
    email: str
    password: str


class GmailImapAuthenticator:
    """
    Responsible ONLY for establishing an authenticated IMAP connection.
    No folder logic, no fetching, no parsing.
    """

    def __init__(
        self,
        creds: GmailImapCredentials,
        host: str = GMAIL_IMAP_HOST,
        port: int = GMAIL_IMAP_PORT,
    ) -> None:
        self.creds = creds
        self.host = host
        self.port = port

    def login(self) -> imaplib.IMAP4_SSL:
        """
        Returns an authenticated IMAP4_SSL connection.
        Gmail only accepts IMAPS on 993 and requires an app password.
        """
        try:
            conn = imaplib.IMAP4_SSL(host=self.host, port=self.port)
        except (OSError, imaplib.IMAP4.error) as e:
            raise TransportError(f"Could not connect to {self.host}:{self.port}: {e}") from e

        try:
            conn.login(self.creds.email, self.creds.password)
        except (OSError, imaplib.IMAP4.error) as e:
            try:
                conn.shutdown()
            except OSError:
                pass
            raise TransportError(f"Login failed for {self.creds.email}: {e}") from e
        return conn
