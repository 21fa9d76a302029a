"""
ioc-demo: Dependency injection container with lifetime management.

Public API exports for the ioc_demo package.
"""

# Application exports
from ioc_demo.application.container import ServiceContainer
from ioc_demo.application.scope import ServiceScope
from ioc_demo.application.settings import ContainerSettings

# Domain exports
from ioc_demo.domain.enums import Lifetime
from ioc_demo.domain.exceptions import (
    CyclicDependencyError,
    DIException,
    DisposalError,
    DisposedContainerError,
    DuplicateRegistrationError,
    InvalidRegistrationError,
    ScopeError,
    ServiceCreationError,
    UnregisteredServiceError,
)

__version__ = "0.1.0"

__all__ = [
    # Container
    "ServiceContainer",
    "ServiceScope",
    "ContainerSettings",
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
]
