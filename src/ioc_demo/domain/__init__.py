"""
Domain layer - Core models and contracts of the container.

This layer contains the fundamental rules and models for dependency injection.
It has no dependencies on other layers.
"""

from .enums import Lifetime
from .exceptions import (
    CyclicDependencyError,
    DIException,
    DisposalError,
    DisposedContainerError,
    DuplicateRegistrationError,
    InvalidRegistrationError,
    ScopeError,
    ServiceCreationError,
    UnregisteredServiceError,
    describe_key,
)
from .interfaces import IContainer, ILifetimeManager, IResolver, IScope, IServiceProvider, Provider
from .models import DependencyMetadata, Registration, ResolutionContext

# Rebuild Pydantic models to resolve forward references
Registration.model_rebuild()
DependencyMetadata.model_rebuild()

__all__ = [
    # Enums
    "Lifetime",
    # Exceptions
    "DIException",
    "UnregisteredServiceError",
    "CyclicDependencyError",
    "DisposedContainerError",
    "DuplicateRegistrationError",
    "InvalidRegistrationError",
    "ScopeError",
    "ServiceCreationError",
    "DisposalError",
    "describe_key",
    # Interfaces
    "IServiceProvider",
    "IContainer",
    "IScope",
    "IResolver",
    "ILifetimeManager",
    "Provider",
    # Models
    "Registration",
    "DependencyMetadata",
    "ResolutionContext",
]
