"""
Demo services - an order workflow wired through the container.

Shows constructor injection, interchangeable implementations behind one
contract, and the three lifetimes.
"""

from .contracts import IMessageSender, IOrderRepository
from .order_service import DynamicOrderService, OrderService
from .registration import (
    add_core_services,
    add_core_with_email,
    add_core_with_sms,
    add_email_sender,
    add_message_sender,
    add_sms_sender,
)
from .repository import InMemoryOrderRepository
from .sender_factory import IMessageSenderFactory, MessageSenderFactory, MessageSenderType
from .senders import EmailSender, SmsSender

__all__ = [
    # Contracts
    "IMessageSender",
    "IOrderRepository",
    "IMessageSenderFactory",
    # Implementations
    "EmailSender",
    "SmsSender",
    "InMemoryOrderRepository",
    "MessageSenderFactory",
    "MessageSenderType",
    "OrderService",
    "DynamicOrderService",
    # Registration
    "add_core_services",
    "add_email_sender",
    "add_sms_sender",
    "add_message_sender",
    "add_core_with_email",
    "add_core_with_sms",
]
