"""Application layer - Circular dependency detection."""

import threading
from typing import Hashable, List

from ioc_demo.domain import ResolutionContext


class CircularDependencyDetector:
    """Detects circular dependencies during resolution.

    Uses thread-local storage to track the current resolution chain, so
    concurrent resolutions on different threads never see each other's keys.
    When a key appears twice in the chain, a circular dependency is detected.

    Attributes:
        _local: Thread-local storage holding one ResolutionContext per thread.
    """

    def __init__(self) -> None:
        """Initialize the circular dependency detector with thread-local storage."""
        self._local = threading.local()

    def _get_context(self) -> ResolutionContext:
        """Get the current thread's resolution context.

        Returns:
            The resolution context for the current thread.
        """
        context = getattr(self._local, "context", None)
        if context is None:
            context = ResolutionContext()
            self._local.context = context
        return context

    def push(self, key: Hashable) -> None:
        """Add a key to the resolution chain.

        Args:
            key: The service key being resolved.

        Raises:
            CyclicDependencyError: If the key is already in the chain.

        Example:
            >>> detector = CircularDependencyDetector()
            >>> detector.push(ServiceA)
            >>> detector.push(ServiceB)
            >>> detector.push(ServiceA)  # Raises CyclicDependencyError
        """
        self._get_context().push(key)

    def pop(self) -> None:
        """Remove the last key from the resolution chain.

        Called once resolution of a key finishes, successfully or not.
        """
        self._get_context().pop()

    def current_chain(self) -> List[Hashable]:
        """Return a copy of the current thread's resolution chain."""
        return list(self._get_context().stack)

    def clear(self) -> None:
        """Clear the current thread's resolution chain."""
        self._get_context().clear()
