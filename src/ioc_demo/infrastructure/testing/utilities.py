import logging
from typing import Any, Callable, Dict, Hashable, Optional, Set, Tuple

from ioc_demo.application import ContainerSettings, LifetimeManager, ServiceContainer
from ioc_demo.domain import DependencyMetadata, IContainer, IScope, Lifetime, Provider

logger = logging.getLogger(__name__)


class TestContainer(ServiceContainer):
    """DI container for testing with override capabilities.

    Starts from a copy of a parent container's registrations and lets tests
    replace individual services with test doubles. The parent is never
    modified, and instances are never shared with it.

    Overrides always replace silently, even if the parent uses strict
    registration.

    Attributes:
        _parent_container: The container the registrations were copied from.
        _overrides: Keys overridden since the last reset.

    Example:
        >>> container = ServiceContainer()
        >>> add_core_with_email(container)
        >>>
        >>> def test_place_order():
        ...     with TestContainer(container) as test_container:
        ...         fake_sender = FakeSender()
        ...         test_container.mock_singleton(IMessageSender, fake_sender)
        ...         with test_container.create_scope() as scope:
        ...             scope.resolve(OrderService).place_order("ORDER-001")
        ...         assert fake_sender.messages == ["Order ORDER-001 processed"]
    """

    __test__ = False  # Tell pytest not to collect this class as a test

    def __init__(self, parent_container: Optional[IContainer] = None) -> None:
        """Initialize the test container.

        Args:
            parent_container: Optional container to copy registrations from.
                If None, starts empty.
        """
        parent_settings = getattr(parent_container, "settings", None)
        validate_scopes = parent_settings.validate_scopes if parent_settings is not None else True
        super().__init__(ContainerSettings(strict_registration=False, validate_scopes=validate_scopes))
        self._parent_container = parent_container
        self._overrides: Set[Hashable] = set()
        self._registry = self._copy_parent_registry()

    def _copy_parent_registry(self) -> Dict[Hashable, DependencyMetadata]:
        if self._parent_container is None:
            return {}
        return {
            key: DependencyMetadata(registration=metadata.registration)
            for key, metadata in self._parent_container.get_registry_copy().items()
        }

    def mock_singleton(self, key: Hashable, mock_instance: Any) -> None:
        """Replace a service with a mock instance.

        The mock is returned for every resolution of ``key`` and is never
        disposed by the container.

        Args:
            key: The service key to mock.
            mock_instance: The mock instance to return.

        Example:
            >>> test_container = TestContainer(container)
            >>> mock_repo = MagicMock(spec=IOrderRepository)
            >>> test_container.mock_singleton(IOrderRepository, mock_repo)
        """
        self._overrides.add(key)
        self.register_instance(key, mock_instance)

    def mock_transient(self, key: Hashable, factory: Callable[[], Any]) -> None:
        """Replace a service with a mock factory called on every resolution.

        Args:
            key: The service key to mock.
            factory: Zero-argument callable returning a mock instance.

        Example:
            >>> test_container.mock_transient(IMessageSender, lambda: MagicMock())
            >>> assert test_container.resolve(IMessageSender) is not test_container.resolve(IMessageSender)
        """
        self._overrides.add(key)
        self.register(key, lambda c: factory(), Lifetime.TRANSIENT)

    def override_registration(self, key: Hashable, provider: Provider, lifetime: Lifetime) -> None:
        """Override a registration with a custom provider and lifetime.

        Args:
            key: The service key to override.
            provider: Concrete class or factory receiving the resolver.
            lifetime: Lifetime for the overridden service.

        Example:
            >>> test_container.override_registration(
            ...     IOrderRepository,
            ...     InMemoryOrderRepository,
            ...     Lifetime.SINGLETON,
            ... )
        """
        self._overrides.add(key)
        self.register(key, provider, lifetime)

    @property
    def overridden_keys(self) -> Set[Hashable]:
        return set(self._overrides)

    def reset_overrides(self) -> None:
        """Remove all overrides and restore the parent registrations.

        Instances built so far are disposed, so nothing built against a mock
        survives the reset. The container is usable again even if disposal
        fails.

        Raises:
            DisposalError: If one or more built instances failed to release.
        """
        logger.debug("Resetting %d override(s)", len(self._overrides))
        self._overrides.clear()
        try:
            self._lifetime_manager.dispose()
        finally:
            self._lifetime_manager = LifetimeManager(allow_scoped=not self.settings.validate_scopes)
            with self._registry_lock:
                self._registry = self._copy_parent_registry()

    def __enter__(self) -> "TestContainer":
        """Context manager entry - returns self."""
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        """Context manager exit - drop overrides and dispose everything built."""
        try:
            self.reset_overrides()
        finally:
            self.dispose()
        return False


def create_mock_container(*singletons: Tuple[Hashable, Any]) -> TestContainer:
    """Create a test container with pre-configured mock singletons.

    Args:
        *singletons: Tuples of (key, mock_instance).

    Returns:
        TestContainer with the mocks registered.

    Example:
        >>> test_container = create_mock_container(
        ...     (IOrderRepository, mock_repo),
        ...     (IMessageSender, mock_sender),
        ... )
    """
    container = TestContainer()

    for key, mock_instance in singletons:
        container.mock_singleton(key, mock_instance)

    return container


class MockScope:
    """Context manager for scoped testing with automatic disposal.

    Example:
        >>> with MockScope(container) as scope:
        ...     repo = scope.resolve(IOrderRepository)
        ...     service = scope.resolve(OrderService)
        ...     assert service.repository is repo
        ...
        ... # Scoped instances disposed here
    """

    def __init__(self, parent_container: IContainer) -> None:
        """Initialize the mock scope.

        Args:
            parent_container: The container to create the scope from.
        """
        self._parent_container = parent_container
        self._scope: Optional[IScope] = None

    def __enter__(self) -> IScope:
        """Open the scope.

        Returns:
            The scope instance.
        """
        self._scope = self._parent_container.create_scope()
        return self._scope

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        """Dispose the scope."""
        if self._scope is not None:
            self._scope.dispose()
            self._scope = None
        return False
