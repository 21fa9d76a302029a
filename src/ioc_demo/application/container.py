import inspect
import logging
import threading
from typing import Any, Dict, Hashable, Optional

from ioc_demo.application.circular_detector import CircularDependencyDetector
from ioc_demo.application.lifetime_manager import LifetimeManager
from ioc_demo.application.resolver import DependencyResolver
from ioc_demo.application.scope import ServiceScope
from ioc_demo.application.settings import ContainerSettings
from ioc_demo.domain import (
    DependencyMetadata,
    DisposedContainerError,
    DuplicateRegistrationError,
    IContainer,
    ILifetimeManager,
    InvalidRegistrationError,
    IResolver,
    IServiceProvider,
    Lifetime,
    Provider,
    Registration,
    ScopeError,
    UnregisteredServiceError,
    describe_key,
)

logger = logging.getLogger(__name__)


def _is_protocol(key: Any) -> bool:
    return bool(getattr(key, "_is_protocol", False))


class ServiceContainer(IContainer):
    """Main dependency injection container.

    Holds the registration table and the singleton cache, and resolves fully
    built object graphs depth-first. Supports singleton, scoped, and transient
    lifetimes with factory or constructor injection.

    Registration is permissive by default: registering a key again replaces
    the previous registration (last wins) and evicts its cached singleton.
    Enable ``strict_registration`` in the settings to reject overwrites.

    Singleton factories always receive the root container as their resolver,
    so a singleton never captures an instance from a shorter-lived scope.

    Attributes:
        _registry: Dictionary mapping service keys to their metadata.
        _resolver: Component responsible for constructor auto-wiring.
        _lifetime_manager: Component managing instance lifetimes.
        _circular_detector: Component detecting circular dependencies.
    """

    def __init__(self, settings: Optional[ContainerSettings] = None) -> None:
        """Initialize the container with an empty registry.

        Args:
            settings: Container policy; read from the environment when omitted.
        """
        self._settings = settings if settings is not None else ContainerSettings()
        self._registry: Dict[Hashable, DependencyMetadata] = {}
        self._registry_lock = threading.RLock()
        self._resolver: IResolver = DependencyResolver()
        self._lifetime_manager = LifetimeManager(
            allow_scoped=not self._settings.validate_scopes
        )
        self._circular_detector = CircularDependencyDetector()
        self._disposed = False

    @property
    def settings(self) -> ContainerSettings:
        return self._settings

    @property
    def disposed(self) -> bool:
        return self._disposed

    def _ensure_not_disposed(self, action: str) -> None:
        if self._disposed:
            raise DisposedContainerError(f"Cannot {action}: the container has been disposed")

    def _add(self, registration: Registration) -> None:
        """Store a registration, applying the overwrite policy.

        Raises:
            DuplicateRegistrationError: If the key exists and strict registration is on.
        """
        key = registration.key
        with self._registry_lock:
            self._ensure_not_disposed(f"register {describe_key(key)}")
            existing = self._registry.get(key)
            if existing is not None and self._settings.strict_registration:
                raise DuplicateRegistrationError(key)
            self._registry[key] = DependencyMetadata(registration=registration)

        # Factories take the cache lock before the registry lock, so evict only
        # after the registry lock is released.
        if existing is not None:
            logger.warning(
                "Replacing %s registration for %s with a %s one",
                existing.registration.lifetime,
                describe_key(key),
                registration.lifetime,
            )
            self._lifetime_manager.evict(key)
        logger.debug("Registered %s as %s", describe_key(key), registration.lifetime)

    @staticmethod
    def _build_registration(key: Hashable, provider: Optional[Provider], lifetime: Lifetime) -> Registration:
        if provider is None:
            if not inspect.isclass(key):
                raise InvalidRegistrationError(
                    f"Registration for {describe_key(key)} needs a provider; only classes can be registered as themselves"
                )
            provider = key

        if inspect.isclass(provider):
            if inspect.isabstract(provider):
                raise InvalidRegistrationError(
                    f"Implementation {provider.__name__} is abstract and cannot be instantiated"
                )
            if inspect.isclass(key) and not _is_protocol(key) and not issubclass(provider, key):
                raise InvalidRegistrationError(
                    f"Implementation {provider.__name__} must be a subclass of {key.__name__}"
                )
            return Registration(key=key, implementation=provider, lifetime=lifetime)

        if not callable(provider):
            raise InvalidRegistrationError(
                f"Provider for {describe_key(key)} must be a class or a callable, got {type(provider).__name__}"
            )
        return Registration(key=key, factory=provider, lifetime=lifetime)

    def register(
        self,
        key: Hashable,
        provider: Optional[Provider] = None,
        lifetime: Lifetime = Lifetime.TRANSIENT,
    ) -> None:
        """Add or replace the registration for ``key``.

        Args:
            key: The service key (class, ABC, Protocol or string token).
            provider: A concrete class, built by constructor auto-wiring, or a
                factory that receives the resolver and returns an instance.
                When omitted, ``key`` itself must be a concrete class.
            lifetime: How long instances should live.

        Raises:
            InvalidRegistrationError: If the provider can never satisfy ``key``.
            DuplicateRegistrationError: If ``key`` exists and strict registration is on.
            DisposedContainerError: If the container has been disposed.

        Example:
            >>> container.register(IMessageSender, EmailSender, Lifetime.SINGLETON)
            >>> container.register(OrderService, lambda c: OrderService(c.resolve(IOrderRepository)))
        """
        self._add(self._build_registration(key, provider, lifetime))

    def register_instance(self, key: Hashable, instance: Any) -> None:
        """Register a pre-built instance as a singleton.

        The container returns the instance as-is and never disposes it.

        Args:
            key: The service key.
            instance: The object returned for every resolution.
        """
        self._add(Registration(key=key, instance=instance, lifetime=Lifetime.SINGLETON))

    def register_singletons(self, dependencies: Dict[Hashable, Provider]) -> None:
        """Register multiple singleton services at once.

        Singleton services are created once and shared across the container and all its scopes.

        Args:
            dependencies: Dictionary mapping service keys to classes or factories.

        Example:
            >>> container.register_singletons({
            ...     IMessageSender: EmailSender,
            ...     IMessageSenderFactory: lambda c: MessageSenderFactory(),
            ... })
        """
        for key, provider in dependencies.items():
            self.register(key, provider, Lifetime.SINGLETON)

    def register_scoped(self, dependencies: Dict[Hashable, Provider]) -> None:
        """Register multiple scoped services at once.

        Scoped services are created once per scope.

        Args:
            dependencies: Dictionary mapping service keys to classes or factories.
        """
        for key, provider in dependencies.items():
            self.register(key, provider, Lifetime.SCOPED)

    def register_transients(self, dependencies: Dict[Hashable, Provider]) -> None:
        """Register multiple transient services at once.

        Transient services are created fresh on each resolution.

        Args:
            dependencies: Dictionary mapping service keys to classes or factories.
        """
        for key, provider in dependencies.items():
            self.register(key, provider, Lifetime.TRANSIENT)

    def is_registered(self, key: Hashable) -> bool:
        with self._registry_lock:
            return key in self._registry

    def _lookup(self, key: Hashable) -> DependencyMetadata:
        with self._registry_lock:
            metadata = self._registry.get(key)
        if metadata is None:
            raise UnregisteredServiceError(key)
        return metadata

    def resolve(self, key: Any) -> Any:
        """Resolve and return an instance registered under ``key``.

        Args:
            key: The service key to resolve.

        Returns:
            Instance satisfying ``key`` with all dependencies injected.

        Raises:
            UnregisteredServiceError: If no registration exists for ``key`` or a dependency.
            CyclicDependencyError: If ``key`` is already in the current resolution chain.
            ScopeError: If a scoped service is resolved outside a scope.
            ServiceCreationError: If a factory or constructor failed.
            DisposedContainerError: If the container has been disposed.

        Example:
            >>> order_service = container.resolve(OrderService)
        """
        return self._resolve_in(key, self, self._lifetime_manager)

    def _resolve_in(self, key: Hashable, provider: IServiceProvider, lifetime_manager: ILifetimeManager) -> Any:
        """Resolve ``key`` on behalf of ``provider`` (this container or one of its scopes)."""
        self._ensure_not_disposed(f"resolve {describe_key(key)}")
        metadata = self._lookup(key)
        lifetime = metadata.registration.lifetime

        if lifetime == Lifetime.SINGLETON and provider is not self:
            return self.resolve(key)

        if lifetime == Lifetime.SCOPED and provider is self and self._settings.validate_scopes:
            chain = self._circular_detector.current_chain()
            if chain:
                raise ScopeError(
                    f"Scoped service {describe_key(key)} cannot be injected into "
                    f"{describe_key(chain[-1])}, which is resolved from the root container"
                )
            raise ScopeError(
                f"Scoped service {describe_key(key)} cannot be resolved from the root container; "
                "resolve it from a scope created with create_scope()"
            )

        self._circular_detector.push(key)
        try:
            instance = lifetime_manager.get_or_create(
                metadata,
                lambda: self._create(metadata.registration, provider),
            )
            metadata.resolution_count += 1
            return instance
        finally:
            self._circular_detector.pop()

    def _create(self, registration: Registration, provider: IServiceProvider) -> Any:
        logger.debug("Creating %s instance of %s", registration.lifetime, describe_key(registration.key))
        if registration.factory is not None:
            return registration.factory(provider)
        if registration.implementation is not None:
            return self._resolver.construct(registration.implementation, provider)
        return registration.instance

    def get_registry_copy(self) -> Dict[Hashable, DependencyMetadata]:
        """Get a copy of the registry.

        Returns:
            Copy of the current registry.
        """
        with self._registry_lock:
            return self._registry.copy()

    def create_scope(self) -> ServiceScope:
        """Create a scope for scoped lifetime.

        Scopes see this container's registrations and share its singletons
        but keep their own cache of scoped instances. Useful for per-request
        state in web applications.

        Returns:
            New scope bound to this container.

        Example:
            >>> with container.create_scope() as scope:
            ...     # Same instance within this scope
            ...     repo1 = scope.resolve(IOrderRepository)
            ...     repo2 = scope.resolve(IOrderRepository)
            ...     assert repo1 is repo2
        """
        self._ensure_not_disposed("create a scope")
        return ServiceScope(self, self._lifetime_manager.get_singleton_cache())

    def dispose(self) -> None:
        """Dispose owned singleton instances in reverse creation order.

        Instances exposing ``dispose()`` or ``close()`` are released exactly
        once. Calling this again is a no-op.

        Raises:
            DisposalError: If one or more instances failed to release.
        """
        with self._registry_lock:
            if self._disposed:
                return
            self._disposed = True
        logger.info("Disposing service container with %d registration(s)", len(self._registry))
        self._lifetime_manager.dispose()

    def __enter__(self) -> "ServiceContainer":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        self.dispose()
        return False
