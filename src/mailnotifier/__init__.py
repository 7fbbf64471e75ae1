"""Desktop notifications for new mail in an IMAP mailbox."""

__version__ = "0.1.0"
