from mailnotifier.application.ports.cursor_store import Cursor, CursorStore
from mailnotifier.application.ports.mailbox_client import MailboxClient
from mailnotifier.application.ports.notifier import Notifier

__all__ = ["Cursor", "CursorStore", "MailboxClient", "Notifier"]
