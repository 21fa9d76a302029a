"""
Application layer - Use cases and orchestration.

This layer contains the use cases that orchestrate domain objects.
It depends only on the Domain layer.
"""

from .circular_detector import CircularDependencyDetector
from .container import ServiceContainer
from .lifetime_manager import InstanceCache, LifetimeManager
from .resolver import DependencyResolver
from .scope import ServiceScope
from .settings import ContainerSettings

__all__ = [
    "ServiceContainer",
    "ServiceScope",
    "ContainerSettings",
    "DependencyResolver",
    "LifetimeManager",
    "InstanceCache",
    "CircularDependencyDetector",
]
