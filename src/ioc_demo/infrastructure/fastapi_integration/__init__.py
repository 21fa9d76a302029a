"""
FastAPI integration module.

Provides helpers for opening one DI scope per HTTP request and resolving
services through FastAPI's Depends().
"""

from .integration import (
    SCOPE_STATE_ATTRIBUTE,
    ScopedContainerMiddleware,
    create_fastapi_dependency,
    create_scoped_dependency,
)

__all__ = [
    "create_fastapi_dependency",
    "create_scoped_dependency",
    "ScopedContainerMiddleware",
    "SCOPE_STATE_ATTRIBUTE",
]
