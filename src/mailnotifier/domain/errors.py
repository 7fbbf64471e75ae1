"""Error hierarchy for mailnotifier.

Only ConfigError ever ends the process. The others are raised at the edges
(IMAP, cursor file, MIME parsing) and recovered close to where they happen.
"""

from __future__ import annotations


class MailNotifierError(Exception):
    """Base exception for all mailnotifier errors."""


class ConfigError(MailNotifierError):
    """Required configuration is missing or invalid. Fatal at startup."""


class TransportError(MailNotifierError):
    """Connecting, authenticating, selecting or fetching failed.

    The current tick is abandoned and the next tick starts from scratch.
    """


class ParseError(MailNotifierError):
    """A body part could not be decoded."""


class PersistenceError(MailNotifierError):
    """The cursor file could not be read or written."""
