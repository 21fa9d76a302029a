import inspect
import logging
from typing import Any, Dict, get_type_hints

from ioc_demo.domain import DIException, IResolver, IServiceProvider, ServiceCreationError

logger = logging.getLogger(__name__)


class DependencyResolver(IResolver):
    """Builds concrete classes using constructor introspection and type hints.

    Every required constructor parameter is resolved from the provider by its
    type hint. Parameters with defaults keep their defaults, ``*args`` and
    ``**kwargs`` are ignored.
    """

    def construct(self, implementation: type, provider: IServiceProvider) -> Any:
        """Resolve all constructor dependencies and create instance.

        Args:
            implementation: The concrete class to instantiate.
            provider: The container or scope to resolve dependencies from.

        Returns:
            Instance with all dependencies injected.

        Raises:
            ServiceCreationError: If a parameter lacks a type hint or the constructor fails.
            DIException: Any container error raised while resolving a parameter, unchanged.

        Example:
            >>> class OrderService:
            ...     def __init__(self, repository: IOrderRepository, sender: IMessageSender):
            ...         self.repository = repository
            ...         self.sender = sender
            >>>
            >>> resolver = DependencyResolver()
            >>> instance = resolver.construct(OrderService, container)
        """
        if implementation.__init__ is object.__init__:
            return self._instantiate(implementation, {})

        try:
            signature = inspect.signature(implementation.__init__)
            type_hints = get_type_hints(implementation.__init__)
        except Exception as e:
            raise ServiceCreationError(
                implementation,
                f"Failed to inspect constructor of {implementation.__name__}: {e}",
            ) from e

        kwargs: Dict[str, Any] = {}
        for param_name, param in signature.parameters.items():
            if param_name == "self":
                continue

            if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
                continue

            if param.default is not inspect.Parameter.empty:
                continue

            if param_name not in type_hints:
                raise ServiceCreationError(
                    implementation,
                    f"Parameter '{param_name}' lacks type hint and has no default value.",
                )

            kwargs[param_name] = provider.resolve(type_hints[param_name])

        logger.debug("Auto-wiring %s with %s", implementation.__name__, sorted(kwargs))
        return self._instantiate(implementation, kwargs)

    @staticmethod
    def _instantiate(implementation: type, kwargs: Dict[str, Any]) -> Any:
        try:
            return implementation(**kwargs)
        except DIException:
            raise
        except Exception as e:
            raise ServiceCreationError(
                implementation,
                f"Constructor of {implementation.__name__} failed: {e}",
            ) from e
