import logging
import threading
from typing import Any, Callable, Dict, Hashable, List, Optional, Tuple

from ioc_demo.domain import (
    DependencyMetadata,
    DIException,
    DisposalError,
    DisposedContainerError,
    ILifetimeManager,
    Lifetime,
    ScopeError,
    ServiceCreationError,
    describe_key,
)

logger = logging.getLogger(__name__)

RELEASE_METHODS = ("dispose", "close")


def release_instance(instance: Any) -> bool:
    """Call the first release method an instance exposes.

    Returns:
        True if a release method was found and called.
    """
    for name in RELEASE_METHODS:
        method = getattr(instance, name, None)
        if callable(method):
            method()
            return True
    return False


class InstanceCache:
    """Thread-safe cache of instances for one lifetime bucket.

    First creation of a key happens under the cache lock, so a key is built at
    most once per cache. The lock is reentrant because a factory resolves its
    own dependencies on the same thread. Instances are remembered in creation
    order so they can be released in reverse.

    Attributes:
        name: Label used in log messages ("singleton", "scoped", ...).
    """

    def __init__(self, name: str, lock: Optional[threading.RLock] = None) -> None:
        self.name = name
        self._lock = lock if lock is not None else threading.RLock()
        self._instances: Dict[Hashable, Any] = {}
        self._created: List[Tuple[Hashable, Any, bool]] = []
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def __contains__(self, key: Hashable) -> bool:
        return key in self._instances

    def __len__(self) -> int:
        return len(self._instances)

    def get_or_create(self, key: Hashable, factory: Callable[[], Any], owned: bool = True) -> Any:
        """Return the cached instance for ``key``, building it on first use.

        Args:
            key: The service key.
            factory: Builds the instance on a cache miss.
            owned: Whether the instance is released when the cache is disposed.

        Raises:
            DisposedContainerError: If the cache was already disposed.
        """
        with self._lock:
            if self._disposed:
                raise DisposedContainerError(f"Cannot resolve {describe_key(key)}: {self.name} cache is disposed")
            if key in self._instances:
                return self._instances[key]
            instance = factory()
            self._instances[key] = instance
            self._created.append((key, instance, owned))
            logger.debug("Cached %s instance for %s", self.name, describe_key(key))
            return instance

    def evict(self, key: Hashable) -> None:
        """Drop the cached instance for ``key``; it stays tracked for disposal."""
        with self._lock:
            self._instances.pop(key, None)

    def dispose(self) -> None:
        """Release owned instances in reverse creation order, exactly once.

        Every instance gets its turn even if an earlier one fails.

        Raises:
            DisposalError: If any instance failed to release.
        """
        with self._lock:
            if self._disposed:
                return
            self._disposed = True
            created = list(reversed(self._created))
            self._created.clear()
            self._instances.clear()

        errors: List[BaseException] = []
        released = set()
        for key, instance, owned in created:
            if not owned or id(instance) in released:
                continue
            released.add(id(instance))
            try:
                if release_instance(instance):
                    logger.debug("Released %s instance for %s", self.name, describe_key(key))
            except Exception as error:
                logger.exception("Failed to release %s instance for %s", self.name, describe_key(key))
                errors.append(error)

        logger.info("Disposed %s cache (%d instance(s))", self.name, len(created))
        if errors:
            raise DisposalError(errors)


class LifetimeManager(ILifetimeManager):
    """Manages instance lifetimes for singleton, scoped, and transient services.

    The root container owns the singleton cache. Scopes borrow it through
    ``parent_singleton_cache`` and own only their scoped cache.

    Attributes:
        _singleton_cache: Cache for singleton instances.
        _scoped_cache: Cache for scoped instances, None when scoped services
            cannot be resolved here.
    """

    def __init__(
        self,
        parent_singleton_cache: Optional[InstanceCache] = None,
        allow_scoped: bool = True,
    ) -> None:
        """Initialize the lifetime manager.

        Args:
            parent_singleton_cache: Singleton cache borrowed from the root container.
            allow_scoped: Whether this manager keeps a scoped cache at all.
        """
        self._owns_singletons = parent_singleton_cache is None
        if parent_singleton_cache is not None:
            # Scope: share the root container's singletons
            self._singleton_cache = parent_singleton_cache
            lock = None
        else:
            # Root container: one lock for both caches keeps lock ordering trivial
            lock = threading.RLock()
            self._singleton_cache = InstanceCache("singleton", lock)
        self._scoped_cache: Optional[InstanceCache] = (
            InstanceCache("scoped", lock) if allow_scoped else None
        )

    def get_or_create(self, metadata: DependencyMetadata, factory: Callable[[], Any]) -> Any:
        """Get existing instance or create new one based on lifetime.

        Args:
            metadata: Registration metadata containing lifetime info.
            factory: Function to create new instance if needed.

        Returns:
            Instance according to lifetime rules:
            - Singleton: Returns cached instance or creates and caches new one
            - Scoped: Returns cached instance within scope or creates new one
            - Transient: Always creates new instance

        Raises:
            ScopeError: If a scoped service is requested where no scope exists.
            ServiceCreationError: If the factory raised a non-DI exception.
        """
        registration = metadata.registration
        key = registration.key

        if registration.lifetime == Lifetime.SINGLETON:
            return self._singleton_cache.get_or_create(
                key, lambda: self._build(key, factory), owned=registration.is_owned
            )

        if registration.lifetime == Lifetime.SCOPED:
            if self._scoped_cache is None:
                raise ScopeError(
                    f"Scoped service {describe_key(key)} cannot be resolved from the root container; "
                    "resolve it from a scope created with create_scope()"
                )
            return self._scoped_cache.get_or_create(key, lambda: self._build(key, factory))

        # Lifetime.TRANSIENT
        return self._build(key, factory)

    @staticmethod
    def _build(key: Hashable, factory: Callable[[], Any]) -> Any:
        try:
            return factory()
        except DIException:
            raise
        except Exception as e:
            raise ServiceCreationError(key, f"Failed to create instance: {e}") from e

    def evict(self, key: Hashable) -> None:
        """Forget cached instances for ``key`` so the next resolve rebuilds it."""
        if self._owns_singletons:
            self._singleton_cache.evict(key)
        if self._scoped_cache is not None:
            self._scoped_cache.evict(key)

    def dispose(self) -> None:
        """Dispose owned caches: scoped first, then singletons if this manager owns them."""
        errors: List[BaseException] = []
        caches = [self._scoped_cache]
        if self._owns_singletons:
            caches.append(self._singleton_cache)
        for cache in caches:
            if cache is None:
                continue
            try:
                cache.dispose()
            except DisposalError as error:
                errors.extend(error.errors)
        if errors:
            raise DisposalError(errors)

    def get_singleton_cache(self) -> InstanceCache:
        """Get reference to singleton cache for scope inheritance.

        Returns:
            Reference to the singleton cache.
        """
        return self._singleton_cache

    @property
    def scoped_cache(self) -> Optional[InstanceCache]:
        return self._scoped_cache
