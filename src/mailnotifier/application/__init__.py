"""Application layer - ports and the mailbox check use case."""

from mailnotifier.application.use_cases.check_mailbox import CheckMailboxUseCase

__all__ = ["CheckMailboxUseCase"]
