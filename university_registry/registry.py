"""University registry aggregate.

The registry owns two indexes over one record set:

- primary index (`AccountIndex`): account_id -> University, one-to-one
- secondary index (`NameIndex`): name -> [University, ...], insertion order

Both live in a host-provided `StorageAdapter`. Every successful
`add_university` lands in both indexes inside a single `adapter.atomic()`
block, and the whole check-then-write sequence runs under one lock so the
duplicate check and the dual insert are observed as one unit.

Check order on the write path is fixed: owner identity first, then input
validation, then the duplicate check. An unauthorized caller therefore never
learns from a DuplicateKeyError whether an account id exists.

Usage:
    adapter = InMemoryAdapter()
    registry = UniversityRegistry.initialize(adapter, owner_id="admin")
    registry.add_university("State College", "state.test", caller="admin")
    registry.get_university_by_account_id("state.test")
"""

from __future__ import annotations

import logging
import threading
from typing import List, Optional, Tuple

from pydantic import ValidationError

from university_registry.exceptions import (
    AlreadyInitializedError,
    DuplicateKeyError,
    InvalidUniversityError,
    NotInitializedError,
    UnauthorizedError,
)
from university_registry.models import University
from university_registry.schemas import UniversityInput
from university_registry.storage.handles import AccountIndex, NameIndex, atomic_write
from university_registry.storage.interface import StorageAdapter

logger = logging.getLogger(__name__)

OWNER_META_KEY = "owner_id"


class UniversityRegistry:
    def __init__(self, adapter: StorageAdapter):
        """Bind a registry to already-initialized storage.

        The owner always comes from the storage metadata written by
        `initialize`; raises NotInitializedError when there is none.
        """
        owner_id = adapter.get_meta(OWNER_META_KEY)
        if not owner_id:
            raise NotInitializedError("Registry storage has not been initialized")
        self.adapter = adapter
        self._owner_id = owner_id
        self.by_account_id = AccountIndex(adapter)
        self.by_name = NameIndex(adapter)
        self._lock = threading.Lock()

    # ------------------------------------------------------------ lifecycle
    @classmethod
    def initialize(cls, adapter: StorageAdapter, owner_id: str) -> "UniversityRegistry":
        """Create a registry on empty storage, fixing its owner identity.

        Raises AlreadyInitializedError if the storage already holds a registry;
        the stored owner is left untouched.
        """
        if not owner_id:
            raise InvalidUniversityError("owner_id must be a non-empty string")
        if not adapter.set_meta_if_absent(OWNER_META_KEY, owner_id):
            raise AlreadyInitializedError("Registry storage is already initialized")
        logger.info("Initialized university registry owner=%s", owner_id)
        return cls(adapter)

    @classmethod
    def load(cls, adapter: StorageAdapter) -> "UniversityRegistry":
        return cls(adapter)

    @property
    def owner_id(self) -> str:
        return self._owner_id

    # ---------------------------------------------------------------- write
    def add_university(self, name: str, account_id: str, *, caller: str) -> University:
        with self._lock:
            if caller != self._owner_id:
                logger.warning("Rejected add_university from non-owner caller=%s", caller)
                raise UnauthorizedError("Permission denied")
            try:
                data = UniversityInput(name=name, account_id=account_id)
            except ValidationError as e:
                raise InvalidUniversityError(str(e)) from e
            if self.by_account_id.contains(data.account_id):
                logger.warning("Rejected duplicate account_id=%s", data.account_id)
                raise DuplicateKeyError(data.account_id)

            university = University(name=data.name, account_id=data.account_id)
            with atomic_write(self.adapter):
                self.by_account_id.insert(university)
                self._index_by_name(university)

        logger.info("Added university account_id=%s name=%s", university.account_id, university.name)
        return university

    def _index_by_name(self, university: University) -> None:
        self.by_name.append(university)

    # ---------------------------------------------------------------- reads
    def get_all_universities(self) -> List[Tuple[str, University]]:
        return self.by_account_id.items()

    def get_universities_by_name(self, name: str) -> List[University]:
        return self.by_name.bucket(name)

    def get_university_by_account_id(self, account_id: str) -> Optional[University]:
        return self.by_account_id.get(account_id)

    # ----------------------------------------------------------- diagnostics
    def check_consistency(self) -> List[str]:
        """Compare both indexes and describe every mismatch found.

        An empty list means every primary record sits exactly once in the
        bucket for its name and every bucket entry is a primary record.
        """
        problems: List[str] = []
        primary = dict(self.by_account_id.items())
        seen: dict = {}
        for name, bucket in self.by_name.buckets():
            for uni in bucket:
                if uni.name != name:
                    problems.append(f"{uni.account_id} filed under '{name}' but named '{uni.name}'")
                seen[uni.account_id] = seen.get(uni.account_id, 0) + 1
                stored = primary.get(uni.account_id)
                if stored is None:
                    problems.append(f"{uni.account_id} in name index but missing from account index")
                elif stored != uni:
                    problems.append(f"{uni.account_id} differs between indexes")
        for account_id in primary:
            count = seen.get(account_id, 0)
            if count != 1:
                problems.append(f"{account_id} appears {count} times in name index")
        return problems


__all__ = ["UniversityRegistry", "OWNER_META_KEY"]
