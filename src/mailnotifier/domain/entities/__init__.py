from mailnotifier.domain.entities.mail_message import MailMessage, NotificationPayload

__all__ = ["MailMessage", "NotificationPayload"]
