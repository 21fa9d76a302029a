from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ContainerSettings(BaseSettings):
    """Policy switches for a ServiceContainer.

    Values come from keyword arguments first, then ``IOC_DEMO_*`` environment
    variables, then the defaults below.

    Attributes:
        strict_registration: Reject re-registration of a key instead of replacing it.
        validate_scopes: Refuse to resolve scoped services from the root container.
            When off, the root container keeps its own root-scope cache.
    """

    model_config = SettingsConfigDict(env_prefix="IOC_DEMO_", frozen=True)

    strict_registration: bool = Field(
        default=False,
        description="Raise DuplicateRegistrationError when a key is registered twice.",
    )
    validate_scopes: bool = Field(
        default=True,
        description="Raise ScopeError when a scoped service is resolved outside a scope.",
    )
