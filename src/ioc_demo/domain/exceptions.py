from typing import Hashable, List, Optional, Sequence


def describe_key(key: Hashable) -> str:
    """Return a readable name for a service key (class name or token repr)."""
    name = getattr(key, "__name__", None)
    if isinstance(name, str):
        return name
    return repr(key)


class DIException(Exception):
    """Base exception for DI-related errors."""


class UnregisteredServiceError(DIException):
    """Raised when a service is requested but no registration exists for its key.

    Attributes:
        key: The key that was requested.
    """

    def __init__(self, key: Hashable) -> None:
        self.key = key
        super().__init__(f"No registration found for service: {describe_key(key)}")


class CyclicDependencyError(DIException):
    """Raised when a cycle is detected in the dependency graph.

    Attributes:
        dependency_chain: Keys forming the cycle, first and last being the same key.
    """

    def __init__(self, dependency_chain: List[Hashable]) -> None:
        self.dependency_chain = dependency_chain
        message = f"Circular dependency detected: {' -> '.join(describe_key(key) for key in dependency_chain)}"
        super().__init__(message)


class DisposedContainerError(DIException):
    """Raised when a disposed container or scope is used."""


class DuplicateRegistrationError(DIException):
    """Raised when a key is registered twice while strict registration is enabled.

    Attributes:
        key: The key that was already registered.
    """

    def __init__(self, key: Hashable) -> None:
        self.key = key
        super().__init__(
            f"Service {describe_key(key)} is already registered and strict registration forbids overwriting it"
        )


class InvalidRegistrationError(DIException):
    """Raised for registrations that can never produce a valid instance.

    This occurs when:
    - The implementation class does not subclass the registered key.
    - No creation strategy (or more than one) is supplied.
    """


class ScopeError(DIException):
    """Raised for invalid scope operations.

    This occurs when:
    - Attempting to resolve a scoped service from the root container.
    - A singleton depends on a scoped service.
    - Creating a scope from another scope.
    """


class ServiceCreationError(DIException):
    """Raised when a factory or constructor fails while building a service.

    The original exception is chained as ``__cause__``.

    Attributes:
        key: The key being built.
        reason: Optional reason for the failure.
    """

    def __init__(self, key: Hashable, reason: Optional[str] = None) -> None:
        self.key = key
        self.reason = reason
        message = f"Cannot create service: {describe_key(key)}"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)


class DisposalError(DIException):
    """Raised after disposal when one or more instances failed to release.

    Attributes:
        errors: The exceptions raised by the failing instances, in disposal order.
    """

    def __init__(self, errors: Sequence[BaseException]) -> None:
        self.errors = list(errors)
        details = "; ".join(f"{type(error).__name__}: {error}" for error in self.errors)
        super().__init__(f"{len(self.errors)} instance(s) failed to dispose: {details}")
