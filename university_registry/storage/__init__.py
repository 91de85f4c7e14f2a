"""
Storage layer for the university registry.

Adapters implement the `StorageAdapter` protocol; the registry talks to them
only through the namespace-bound handles in `handles`.
"""

from university_registry.storage.interface import StorageAdapter
from university_registry.storage.handles import AccountIndex, NameIndex
from university_registry.storage.adapters.in_memory_adapter import InMemoryAdapter

__all__ = [
    "StorageAdapter",
    "AccountIndex",
    "NameIndex",
    "InMemoryAdapter",
]
