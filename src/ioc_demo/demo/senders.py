import logging

from ioc_demo.demo.contracts import IMessageSender

logger = logging.getLogger(__name__)


class EmailSender(IMessageSender):
    """Sends notifications by email (simulated)."""

    @property
    def sender_type(self) -> str:
        return "Email"

    def send(self, message: str) -> str:
        logger.info("Sending email message: %s", message)
        result = f"✉️ Email sent: {message}"
        logger.info("Email sent successfully")
        return result


class SmsSender(IMessageSender):
    """Sends notifications by SMS (simulated)."""

    @property
    def sender_type(self) -> str:
        return "SMS"

    def send(self, message: str) -> str:
        logger.info("Sending SMS message: %s", message)
        result = f"📱 SMS sent: {message}"
        logger.info("SMS sent successfully")
        return result
