from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Hashable, Optional, Type, TypeVar, Union, overload

from ioc_demo.domain.enums import Lifetime
from ioc_demo.domain.models import DependencyMetadata

T = TypeVar("T")

Provider = Union[type, Callable[["IServiceProvider"], Any]]


class IServiceProvider(ABC):
    """Anything that can resolve services: the root container or a scope."""

    @overload
    def resolve(self, key: Type[T]) -> T: ...

    @overload
    def resolve(self, key: Hashable) -> Any: ...

    @abstractmethod
    def resolve(self, key: Any) -> Any:
        """Resolve and return an instance registered under ``key``.

        Args:
            key: The service key to resolve.
        """

    @abstractmethod
    def dispose(self) -> None:
        """Release owned instances. Calling it more than once is a no-op."""


class IScope(IServiceProvider):
    """Abstract interface for a bounded resolution context."""

    @abstractmethod
    def create_scope(self) -> "IScope":
        """Scopes cannot nest; implementations raise ScopeError."""


class IContainer(IServiceProvider):
    """Abstract interface for dependency injection container operations."""

    @abstractmethod
    def register(self, key: Hashable, provider: Optional[Provider] = None, lifetime: Lifetime = Lifetime.TRANSIENT) -> None:
        """Add or replace the registration for ``key``.

        Args:
            key: The service key.
            provider: A concrete class (auto-wired) or a factory receiving the resolver.
                When omitted, ``key`` itself must be a concrete class.
            lifetime: How long instances should live.
        """

    @abstractmethod
    def register_instance(self, key: Hashable, instance: Any) -> None:
        """Register a pre-built instance as a singleton.

        Args:
            key: The service key.
            instance: The object returned for every resolution.
        """

    @abstractmethod
    def register_singletons(self, dependencies: Dict[Hashable, Provider]) -> None:
        """Register multiple singleton services at once."""

    @abstractmethod
    def register_scoped(self, dependencies: Dict[Hashable, Provider]) -> None:
        """Register multiple scoped services at once."""

    @abstractmethod
    def register_transients(self, dependencies: Dict[Hashable, Provider]) -> None:
        """Register multiple transient services at once."""

    @abstractmethod
    def is_registered(self, key: Hashable) -> bool:
        """Tell whether ``key`` has a registration."""

    @abstractmethod
    def create_scope(self) -> IScope:
        """Create and return a new scope bound to this container's registrations."""

    @abstractmethod
    def get_registry_copy(self) -> Dict[Hashable, DependencyMetadata]:
        """Get a copy of the current registry."""


class IResolver(ABC):
    """Abstract interface for constructor auto-wiring."""

    @abstractmethod
    def construct(self, implementation: type, provider: IServiceProvider) -> Any:
        """Resolve all constructor dependencies and create an instance.

        Args:
            implementation: The concrete class to instantiate.
            provider: The container or scope used to resolve constructor arguments.

        Returns:
            Instance with all dependencies injected.

        Raises:
            ServiceCreationError: If a parameter cannot be auto-wired.
        """


class ILifetimeManager(ABC):
    """Abstract interface for managing service lifetimes."""

    @abstractmethod
    def get_or_create(
        self,
        metadata: DependencyMetadata,
        factory: Callable[[], Any],
    ) -> Any:
        """Get existing instance or create a new one based on lifetime.

        Args:
            metadata: The metadata containing registration info.
            factory: A callable to create a new instance if needed.
        """

    @abstractmethod
    def evict(self, key: Hashable) -> None:
        """Forget the cached instance for ``key`` without disposing it."""

    @abstractmethod
    def dispose(self) -> None:
        """Dispose every owned instance this manager created."""
