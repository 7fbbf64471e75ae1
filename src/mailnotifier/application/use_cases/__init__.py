from mailnotifier.application.use_cases.check_mailbox import CheckMailboxUseCase

__all__ = ["CheckMailboxUseCase"]
