import logging
from typing import Any, Callable, Hashable, Type, TypeVar, Union, overload

from fastapi import Request
from starlette.types import ASGIApp, Receive, Scope, Send

from ioc_demo.domain import IContainer, IServiceProvider

T = TypeVar("T")

logger = logging.getLogger(__name__)

SCOPE_STATE_ATTRIBUTE = "di_scope"


@overload
def create_fastapi_dependency(container: IServiceProvider, key: Type[T]) -> Callable[[], T]: ...


@overload
def create_fastapi_dependency(container: IServiceProvider, key: Hashable) -> Callable[[], Any]: ...


def create_fastapi_dependency(container: IServiceProvider, key: Union[type, Hashable]) -> Callable[[], Any]:
    """Create a FastAPI Depends() callable that resolves from the DI container.

    The resolved instance lifetime follows the registration in the container.
    Scoped services need ``create_scoped_dependency`` instead, since the root
    container refuses to resolve them.

    Args:
        container: The DI container to resolve services from.
        key: The service key to resolve when the dependency is called.

    Returns:
        A callable that FastAPI can use with Depends().

    Example:
        >>> container = ServiceContainer()
        >>> container.register(IMessageSender, EmailSender, Lifetime.SINGLETON)
        >>>
        >>> get_sender = create_fastapi_dependency(container, IMessageSender)
        >>>
        >>> @app.post("/notify")
        >>> def notify(sender: IMessageSender = Depends(get_sender)):
        ...     return {"result": sender.send("hello")}
    """

    def dependency() -> Any:
        """Resolve the service from the container."""
        return container.resolve(key)

    return dependency


@overload
def create_scoped_dependency(key: Type[T]) -> Callable[[Request], T]: ...


@overload
def create_scoped_dependency(key: Hashable) -> Callable[[Request], Any]: ...


def create_scoped_dependency(key: Union[type, Hashable]) -> Callable[[Request], Any]:
    """Create a FastAPI dependency that resolves from the request's scope.

    Each request gets its own instances of scoped services. Requires the
    ScopedContainerMiddleware to be installed.

    Args:
        key: The service key to resolve from the request scope.

    Returns:
        A callable that resolves from the request scope.

    Example:
        >>> app.add_middleware(ScopedContainerMiddleware, container=container)
        >>>
        >>> get_order_service = create_scoped_dependency(OrderService)
        >>>
        >>> @app.post("/orders/{order_id}")
        >>> def place(order_id: str, service: OrderService = Depends(get_order_service)):
        ...     return {"result": service.place_order(order_id)}
    """

    def scoped_dependency(request: Request) -> Any:
        """Resolve from the request's scope."""
        scope = getattr(request.state, SCOPE_STATE_ATTRIBUTE, None)
        if scope is None:
            raise RuntimeError(
                "Request does not have a DI scope. Did you forget to add ScopedContainerMiddleware?"
            )
        return scope.resolve(key)

    return scoped_dependency


class ScopedContainerMiddleware:
    """ASGI middleware that opens a DI scope for each HTTP request.

    The scope is available as ``request.state.di_scope`` and is disposed once
    the application has finished with the request: after the last body chunk
    of a streaming response and after any background tasks have run.

    Attributes:
        app: The wrapped ASGI application.
        container: The root container to create scopes from.

    Example:
        >>> container = ServiceContainer()
        >>> add_core_with_email(container)
        >>>
        >>> app = FastAPI()
        >>> app.add_middleware(ScopedContainerMiddleware, container=container)
    """

    def __init__(self, app: ASGIApp, container: IContainer) -> None:
        """Initialize the middleware with a root container.

        Args:
            app: The wrapped ASGI application.
            container: The root container to create scopes from.
        """
        self.app = app
        self.container = container

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Run the request inside its own DI scope.

        Non-HTTP traffic (lifespan, websockets) passes through untouched.
        """
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        di_scope = self.container.create_scope()
        setattr(request.state, SCOPE_STATE_ATTRIBUTE, di_scope)

        try:
            await self.app(scope, receive, send)
        finally:
            logger.debug("Disposing request scope for %s %s", request.method, request.url.path)
            di_scope.dispose()
