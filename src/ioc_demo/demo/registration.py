"""Registration helpers wiring the demo services into a container.

Each helper returns the container so calls can be chained::

    add_sms_sender(add_core_services(container))
"""

from typing import Type

from ioc_demo.demo.contracts import IMessageSender, IOrderRepository
from ioc_demo.demo.order_service import DynamicOrderService, OrderService
from ioc_demo.demo.repository import InMemoryOrderRepository
from ioc_demo.demo.sender_factory import IMessageSenderFactory, MessageSenderFactory
from ioc_demo.demo.senders import EmailSender, SmsSender
from ioc_demo.domain import IContainer, Lifetime


def add_core_services(container: IContainer) -> IContainer:
    """Register the order services without any message sender.

    Follow up with ``add_email_sender``, ``add_sms_sender`` or
    ``add_message_sender`` before resolving ``OrderService``.
    """
    # One repository per scope (unit of work)
    container.register(IOrderRepository, InMemoryOrderRepository, Lifetime.SCOPED)
    container.register(OrderService, OrderService, Lifetime.TRANSIENT)
    container.register(IMessageSenderFactory, MessageSenderFactory, Lifetime.SINGLETON)
    container.register(DynamicOrderService, DynamicOrderService, Lifetime.TRANSIENT)
    return container


def add_message_sender(container: IContainer, sender_class: Type[IMessageSender]) -> IContainer:
    """Register ``sender_class`` as the singleton IMessageSender, replacing any previous one."""
    container.register(IMessageSender, sender_class, Lifetime.SINGLETON)
    return container


def add_email_sender(container: IContainer) -> IContainer:
    return add_message_sender(container, EmailSender)


def add_sms_sender(container: IContainer) -> IContainer:
    return add_message_sender(container, SmsSender)


def add_core_with_email(container: IContainer) -> IContainer:
    return add_email_sender(add_core_services(container))


def add_core_with_sms(container: IContainer) -> IContainer:
    return add_sms_sender(add_core_services(container))
