from enum import Enum


class Lifetime(str, Enum):
    """Defines the lifetime of a service instance.

    Attributes:
        SINGLETON: Single instance shared across the whole container.
        SCOPED: Single instance per scope (e.g., per HTTP request).
        TRANSIENT: New instance created on each resolution.
    """

    TRANSIENT = "transient"
    SCOPED = "scoped"
    SINGLETON = "singleton"

    def __str__(self) -> str:
        return self.value
