"""Unit tests for OrderService and DynamicOrderService."""

from unittest.mock import MagicMock

import pytest

from ioc_demo.demo import (
    DynamicOrderService,
    EmailSender,
    IMessageSender,
    IMessageSenderFactory,
    InMemoryOrderRepository,
    IOrderRepository,
    MessageSenderType,
    OrderService,
    SmsSender,
)


@pytest.fixture
def repository():
    return InMemoryOrderRepository()


class TestOrderService:
    """Test cases for OrderService."""

    def test_place_order_saves_and_notifies(self, repository):
        """Test the combined save and send result."""
        service = OrderService(repository, EmailSender())

        result = service.place_order("ORDER-001")

        assert result == "💾 Order ORDER-001 saved to repository\n✉️ Email sent: Order ORDER-001 processed"
        assert repository.get_all_orders() == ["ORDER-001"]

    def test_place_order_uses_injected_sender(self, repository):
        """Test that the sender passed in is the one used."""
        sender = MagicMock(spec=IMessageSender)
        sender.send.return_value = "sent"
        service = OrderService(repository, sender)

        service.place_order("ORDER-002")

        sender.send.assert_called_once_with("Order ORDER-002 processed")

    def test_place_order_reports_failure(self):
        """Test that a failing collaborator yields a failure message."""
        repository = MagicMock(spec=IOrderRepository)
        repository.save.side_effect = RuntimeError("disk full")
        service = OrderService(repository, SmsSender())

        result = service.place_order("ORDER-003")

        assert result == "❌ Failed to process order ORDER-003: disk full"

    def test_order_summary(self, repository):
        """Test the summary format."""
        service = OrderService(repository, EmailSender())
        service.place_order("ORDER-001")
        service.place_order("ORDER-002")

        assert service.get_order_summary() == "Currently 2 orders: [ORDER-001, ORDER-002]"

    def test_empty_order_summary(self, repository):
        """Test the summary when no orders exist."""
        assert OrderService(repository, EmailSender()).get_order_summary() == "Currently 0 orders: []"

    def test_message_sender_type(self, repository):
        """Test that the sender's label is exposed."""
        assert OrderService(repository, SmsSender()).get_message_sender_type() == "SMS"


class TestDynamicOrderService:
    """Test cases for DynamicOrderService."""

    def test_process_order_with_default_sender(self, repository):
        """Test processing through the factory default."""
        factory = MagicMock(spec=IMessageSenderFactory)
        factory.get_default_sender.return_value = EmailSender()
        service = DynamicOrderService(repository, factory)

        assert service.process_order("ORDER-001") is True
        factory.get_default_sender.assert_called_once_with()
        assert repository.get_all_orders() == ["ORDER-001"]

    def test_process_order_with_specific_sender(self, repository):
        """Test processing through an explicitly chosen channel."""
        factory = MagicMock(spec=IMessageSenderFactory)
        factory.create_sender.return_value = SmsSender()
        service = DynamicOrderService(repository, factory)

        assert service.process_order("ORDER-002", MessageSenderType.SMS) is True
        factory.create_sender.assert_called_once_with(MessageSenderType.SMS)

    def test_process_order_empty_save_result_fails(self):
        """Test that an empty save result counts as failure."""
        repository = MagicMock(spec=IOrderRepository)
        repository.save.return_value = ""
        factory = MagicMock(spec=IMessageSenderFactory)
        sender = MagicMock(spec=IMessageSender)
        factory.get_default_sender.return_value = sender
        service = DynamicOrderService(repository, factory)

        assert service.process_order("ORDER-003") is False
        sender.send.assert_not_called()

    def test_process_order_send_failure(self, repository, caplog):
        """Test that a failing sender yields False and is logged."""
        factory = MagicMock(spec=IMessageSenderFactory)
        sender = MagicMock(spec=IMessageSender)
        sender.send.side_effect = ConnectionError("gateway down")
        factory.get_default_sender.return_value = sender
        service = DynamicOrderService(repository, factory)

        with caplog.at_level("ERROR", logger="ioc_demo.demo.order_service"):
            assert service.process_order("ORDER-004") is False

        assert "Error processing order: ORDER-004" in caplog.text

    def test_switch_default_sender(self, repository):
        """Test that switching delegates to the factory."""
        factory = MagicMock(spec=IMessageSenderFactory)
        service = DynamicOrderService(repository, factory)

        service.switch_default_sender(MessageSenderType.SMS)

        factory.set_default_sender.assert_called_once_with(MessageSenderType.SMS)

    def test_order_summary(self, repository):
        """Test the summary format."""
        repository.save("ORDER-001")
        service = DynamicOrderService(repository, MagicMock(spec=IMessageSenderFactory))

        assert service.get_order_summary() == "Currently 1 orders: [ORDER-001]"
