"""Adapters — one per decoration step.

Public re-exports for convenient access.
"""

from nxdecorate.adapters.base import Adapter, ExecutionContext
from nxdecorate.adapters.mock import MockAdapter
from nxdecorate.adapters.registry import AdapterRegistry, default_registry

__all__ = [
    "Adapter",
    "AdapterRegistry",
    "ExecutionContext",
    "MockAdapter",
    "default_registry",
]
