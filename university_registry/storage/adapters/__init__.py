"""
Storage adapters for the university registry.
"""

from university_registry.storage.adapters.in_memory_adapter import InMemoryAdapter
from university_registry.storage.adapters.redis_adapter import RedisAdapter

__all__ = ["InMemoryAdapter", "RedisAdapter"]
