"""Application layer - Scoped resolution contexts."""

import logging
from typing import TYPE_CHECKING, Any

from ioc_demo.application.lifetime_manager import InstanceCache, LifetimeManager
from ioc_demo.domain import DisposedContainerError, IScope, ScopeError, describe_key

if TYPE_CHECKING:
    from ioc_demo.application.container import ServiceContainer

logger = logging.getLogger(__name__)


class ServiceScope(IScope):
    """A bounded resolution context created by ``ServiceContainer.create_scope``.

    Scoped services are cached here, singletons come from the root container,
    and transients are built fresh with this scope as their resolver.
    Disposing the scope releases its scoped instances only.

    Example:
        >>> with container.create_scope() as scope:
        ...     service = scope.resolve(OrderService)
    """

    def __init__(self, container: "ServiceContainer", singleton_cache: InstanceCache) -> None:
        """Initialize the scope.

        Args:
            container: The root container whose registrations this scope uses.
            singleton_cache: The root container's singleton cache.
        """
        self._container = container
        self._lifetime_manager = LifetimeManager(parent_singleton_cache=singleton_cache)
        self._disposed = False
        logger.debug("Opened scope %#x", id(self))

    @property
    def container(self) -> "ServiceContainer":
        return self._container

    @property
    def disposed(self) -> bool:
        return self._disposed

    def resolve(self, key: Any) -> Any:
        """Resolve ``key`` within this scope.

        Raises:
            DisposedContainerError: If this scope or its container has been disposed.
            UnregisteredServiceError: If no registration exists for ``key``.
            CyclicDependencyError: If ``key`` is already in the current resolution chain.
        """
        if self._disposed:
            raise DisposedContainerError(f"Cannot resolve {describe_key(key)}: the scope has been disposed")
        return self._container._resolve_in(key, self, self._lifetime_manager)

    def create_scope(self) -> IScope:
        raise ScopeError("Scopes cannot be nested; create new scopes from the root container")

    def dispose(self) -> None:
        """Dispose scoped instances in reverse creation order. Idempotent.

        Raises:
            DisposalError: If one or more instances failed to release.
        """
        if self._disposed:
            return
        self._disposed = True
        logger.debug("Closing scope %#x", id(self))
        self._lifetime_manager.dispose()

    def __enter__(self) -> "ServiceScope":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        self.dispose()
        return False
