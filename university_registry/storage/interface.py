from __future__ import annotations

from typing import Any, ContextManager, Dict, List, Optional, Protocol, Tuple


class StorageAdapter(Protocol):
    """Protocol for registry storage backends (Redis / in-memory).

    Two kinds of containers are addressed by namespace: keyed maps
    (`get` / `insert` / `items`) and keyed buckets of ordered values
    (`append_to_bucket` / `list_bucket` / `buckets`). Each call is atomic on
    its own; `atomic()` groups writes so they commit together or not at all
    when the block raises. Backends without rollback inside a commit (Redis
    MULTI/EXEC) document where that guarantee stops.
    """

    # keyed maps
    def get(self, namespace: str, key: str) -> Optional[Dict[str, Any]]: ...
    def insert(self, namespace: str, key: str, value: Dict[str, Any]) -> None: ...
    def items(self, namespace: str) -> List[Tuple[str, Dict[str, Any]]]: ...

    # ordered buckets
    def append_to_bucket(self, namespace: str, key: str, value: Dict[str, Any]) -> None: ...
    def list_bucket(self, namespace: str, key: str) -> List[Dict[str, Any]]: ...
    def buckets(self, namespace: str) -> List[Tuple[str, List[Dict[str, Any]]]]: ...

    # registry metadata (owner identity)
    def get_meta(self, key: str) -> Optional[str]: ...
    def set_meta_if_absent(self, key: str, value: str) -> bool: ...

    def atomic(self) -> ContextManager[None]: ...


__all__ = ["StorageAdapter"]
