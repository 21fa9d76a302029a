import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Type

from ioc_demo.demo.contracts import IMessageSender
from ioc_demo.demo.senders import EmailSender, SmsSender

logger = logging.getLogger(__name__)


class MessageSenderType(str, Enum):
    """Available notification channels."""

    EMAIL = "email"
    SMS = "sms"

    def __str__(self) -> str:
        return self.value


class IMessageSenderFactory(ABC):
    """Creates message senders at runtime, so the channel can change without re-wiring."""

    @abstractmethod
    def create_sender(self, sender_type: MessageSenderType) -> IMessageSender:
        """Create a new sender for the given channel."""

    @abstractmethod
    def set_default_sender(self, sender_type: MessageSenderType) -> None:
        """Change the channel used by ``get_default_sender``."""

    @abstractmethod
    def get_default_sender(self) -> IMessageSender:
        """Create a sender for the current default channel."""


class MessageSenderFactory(IMessageSenderFactory):
    """Default factory mapping each MessageSenderType to a sender class.

    The default channel starts as EMAIL.
    """

    SENDERS: Dict[MessageSenderType, Type[IMessageSender]] = {
        MessageSenderType.EMAIL: EmailSender,
        MessageSenderType.SMS: SmsSender,
    }

    def __init__(self) -> None:
        self._default_type = MessageSenderType.EMAIL

    @property
    def default_type(self) -> MessageSenderType:
        return self._default_type

    def create_sender(self, sender_type: MessageSenderType) -> IMessageSender:
        try:
            sender_class = self.SENDERS[MessageSenderType(sender_type)]
        except (KeyError, ValueError) as e:
            raise ValueError(f"Unsupported sender type: {sender_type}") from e
        return sender_class()

    def set_default_sender(self, sender_type: MessageSenderType) -> None:
        self._default_type = MessageSenderType(sender_type)
        logger.debug("Default sender type set to %s", self._default_type)

    def get_default_sender(self) -> IMessageSender:
        return self.create_sender(self._default_type)
