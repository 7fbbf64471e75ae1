from mailnotifier.infrastructure.email.providers.gmail_imap.client import (
    GmailImapConfig,
    GmailImapMailboxClient,
)

__all__ = ["GmailImapConfig", "GmailImapMailboxClient"]
