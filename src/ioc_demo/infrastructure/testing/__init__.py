"""
Testing utilities module.

Provides helpers for testing applications that use ioc_demo.
"""

from .utilities import MockScope, TestContainer, create_mock_container

__all__ = [
    "TestContainer",
    "create_mock_container",
    "MockScope",
]
