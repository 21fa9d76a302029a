"""Unit tests for domain exceptions."""

import pytest

from ioc_demo.domain.exceptions import (
    CyclicDependencyError,
    DIException,
    DisposalError,
    DisposedContainerError,
    DuplicateRegistrationError,
    InvalidRegistrationError,
    ScopeError,
    ServiceCreationError,
    UnregisteredServiceError,
    describe_key,
)


class TestDescribeKey:
    """Test cases for describe_key."""

    def test_class_key_uses_class_name(self):
        """Test that class keys are described by their name."""

        class OrderService:
            pass

        assert describe_key(OrderService) == "OrderService"

    def test_string_key_uses_repr(self):
        """Test that string tokens are quoted."""
        assert describe_key("db") == "'db'"


class TestHierarchy:
    """Test cases for the exception hierarchy."""

    @pytest.mark.parametrize(
        "exception_class",
        [
            UnregisteredServiceError,
            CyclicDependencyError,
            DisposedContainerError,
            DuplicateRegistrationError,
            InvalidRegistrationError,
            ScopeError,
            ServiceCreationError,
            DisposalError,
        ],
    )
    def test_all_errors_inherit_from_di_exception(self, exception_class):
        """Test that every container error can be caught as DIException."""
        assert issubclass(exception_class, DIException)

    def test_di_exception_is_exception(self):
        """Test that DIException inherits from Exception."""
        assert issubclass(DIException, Exception)


class TestUnregisteredServiceError:
    """Test cases for UnregisteredServiceError."""

    def test_keeps_key_and_names_it(self):
        """Test that the missing key is stored and shown in the message."""

        class IMessageSender:
            pass

        error = UnregisteredServiceError(IMessageSender)

        assert error.key is IMessageSender
        assert str(error) == "No registration found for service: IMessageSender"


class TestCyclicDependencyError:
    """Test cases for CyclicDependencyError."""

    def test_message_shows_cycle_path(self):
        """Test that the cycle path is rendered with arrows."""

        class ServiceA:
            pass

        class ServiceB:
            pass

        error = CyclicDependencyError([ServiceA, ServiceB, ServiceA])

        assert error.dependency_chain == [ServiceA, ServiceB, ServiceA]
        assert "ServiceA -> ServiceB -> ServiceA" in str(error)

    def test_string_keys_in_cycle(self):
        """Test that string tokens are rendered in the path too."""
        error = CyclicDependencyError(["a", "a"])
        assert "'a' -> 'a'" in str(error)


class TestDuplicateRegistrationError:
    """Test cases for DuplicateRegistrationError."""

    def test_message_mentions_strict_registration(self):
        """Test that the message explains why the overwrite was refused."""
        error = DuplicateRegistrationError("cache")

        assert error.key == "cache"
        assert "'cache'" in str(error)
        assert "strict registration" in str(error)


class TestServiceCreationError:
    """Test cases for ServiceCreationError."""

    def test_message_without_reason(self):
        """Test message when no reason is given."""

        class Repo:
            pass

        error = ServiceCreationError(Repo)

        assert str(error) == "Cannot create service: Repo"
        assert error.reason is None

    def test_message_with_reason(self):
        """Test that the reason is appended to the message."""

        class Repo:
            pass

        error = ServiceCreationError(Repo, "boom")

        assert str(error) == "Cannot create service: Repo. Reason: boom"
        assert error.key is Repo


class TestDisposalError:
    """Test cases for DisposalError."""

    def test_collects_errors(self):
        """Test that every underlying failure is kept and summarized."""
        errors = [RuntimeError("first"), OSError("second")]

        error = DisposalError(errors)

        assert error.errors == errors
        assert "2 instance(s) failed to dispose" in str(error)
        assert "RuntimeError: first" in str(error)
        assert "OSError: second" in str(error)
