"""Factory helpers wiring adapters → registry → service.

Purpose
-------
- Provide a single composition point for backend choice and owner setup.
- Keep env parsing in `config.settings`; callers pass overrides explicitly.
- Swap the backend via `kind='memory'` in tests without touching callers.
"""

from __future__ import annotations

import logging
from typing import Optional

from config import settings
from university_registry.exceptions import NotInitializedError
from university_registry.registry import UniversityRegistry
from university_registry.service import ReadOnlyRegistryFacade, RegistryService
from university_registry.storage.interface import StorageAdapter

logger = logging.getLogger(__name__)


def build_adapter(kind: Optional[str] = None, namespace: Optional[str] = None) -> StorageAdapter:
    kind = (kind or settings.REGISTRY_BACKEND).lower()
    if kind == "memory":
        from university_registry.storage.adapters.in_memory_adapter import InMemoryAdapter

        return InMemoryAdapter()
    elif kind == "redis":
        from university_registry.storage.adapters.redis_adapter import RedisAdapter

        return RedisAdapter(url=settings.REDIS_URL, prefix=namespace or settings.REGISTRY_NAMESPACE)
    else:
        raise ValueError(f"Unknown registry backend kind '{kind}'")


def open_registry(adapter: StorageAdapter, owner_id: Optional[str] = None) -> UniversityRegistry:
    """Reopen the registry held by `adapter`, initializing it on first use.

    The owner stored at initialization always wins; a differing `owner_id`
    is logged and ignored.
    """
    try:
        registry = UniversityRegistry.load(adapter)
    except NotInitializedError:
        owner_id = owner_id or settings.REGISTRY_OWNER_ID
        if not owner_id:
            raise
        return UniversityRegistry.initialize(adapter, owner_id)
    if owner_id and owner_id != registry.owner_id:
        logger.warning("Ignoring configured owner %s; storage owner is %s", owner_id, registry.owner_id)
    return registry


def create_registry_service(
    kind: Optional[str] = None,
    owner_id: Optional[str] = None,
    adapter: Optional[StorageAdapter] = None,
) -> RegistryService:
    adapter = adapter or build_adapter(kind)
    return RegistryService(open_registry(adapter, owner_id))


def create_readonly_facade(kind: Optional[str] = None, adapter: Optional[StorageAdapter] = None) -> ReadOnlyRegistryFacade:
    """Build a read-only façade over an already-initialized registry."""
    adapter = adapter or build_adapter(kind)
    return ReadOnlyRegistryFacade(RegistryService(UniversityRegistry.load(adapter)))


__all__ = [
    "build_adapter",
    "open_registry",
    "create_registry_service",
    "create_readonly_facade",
]
