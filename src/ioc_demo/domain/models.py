from typing import TYPE_CHECKING, Any, Callable, Hashable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ioc_demo.domain.enums import Lifetime
from ioc_demo.domain.exceptions import CyclicDependencyError, InvalidRegistrationError, describe_key

if TYPE_CHECKING:
    from ioc_demo.domain.interfaces import IServiceProvider


class Registration(BaseModel):
    """Value object representing a service registration.

    Exactly one creation strategy must be supplied.

    Attributes:
        key: The service key (class, ABC, Protocol or string token).
        factory: Callable that receives the resolver and returns an instance.
        implementation: Concrete class built through constructor auto-wiring.
        instance: Pre-built object, always singleton and never owned by the container.
        lifetime: How long the instance should live.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    key: Any = Field(..., description="The service key being registered.")
    factory: Optional[Callable[["IServiceProvider"], Any]] = Field(
        default=None, description="Factory receiving the resolver and returning an instance."
    )
    implementation: Optional[type] = Field(default=None, description="Concrete class to auto-wire.")
    instance: Optional[Any] = Field(default=None, description="Pre-built instance.")
    lifetime: Lifetime = Field(..., description="The lifetime of the registered service.")

    @model_validator(mode="after")
    def _check_strategy(self) -> "Registration":
        strategies = [s for s in (self.factory, self.implementation, self.instance) if s is not None]
        if len(strategies) != 1:
            raise InvalidRegistrationError(
                f"Registration for {describe_key(self.key)} needs exactly one of factory, implementation or instance"
            )
        if self.instance is not None and self.lifetime != Lifetime.SINGLETON:
            raise InvalidRegistrationError(
                f"Pre-built instance for {describe_key(self.key)} must use singleton lifetime, got {self.lifetime}"
            )
        return self

    @property
    def is_owned(self) -> bool:
        """Whether instances from this registration are disposed by the container."""
        return self.instance is None


class DependencyMetadata(BaseModel):
    """Tracks registration details for one key.

    Attributes:
        registration: The registration configuration.
        resolution_count: Number of times this service has been resolved.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    registration: Registration = Field(..., description="The registration details of the service.")
    resolution_count: int = Field(
        default=0,
        description="Number of times this service has been resolved.",
    )


class ResolutionContext(BaseModel):
    """Tracks the current resolution chain.

    Used for circular dependency detection. One context lives per thread.

    Attributes:
        stack: Keys currently being resolved, outermost first.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    stack: List[Hashable] = Field(
        default_factory=list,
        description="Stack of service keys currently being resolved.",
    )

    def push(self, key: Hashable) -> None:
        """Add a key to the resolution stack.

        Raises:
            CyclicDependencyError: If the key is already in the stack.
        """
        if key in self.stack:
            cycle = self.stack[self.stack.index(key) :] + [key]
            raise CyclicDependencyError(cycle)
        self.stack.append(key)

    def pop(self) -> None:
        """Remove the last (most recent) key from the stack."""
        if self.stack:
            self.stack.pop()

    def clear(self) -> None:
        """Clear the entire resolution stack."""
        self.stack.clear()
