"""Namespace-bound handles over a StorageAdapter.

The registry resolves its two index namespaces once, at construction, into an
`AccountIndex` and a `NameIndex`. Every adapter call made through a handle is
timed, counted in `storage.metrics`, and has backend-specific exceptions
wrapped into `StorageError`.
"""
from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Callable, Iterator, List, Optional, Tuple

from university_registry.exceptions import RegistryError, StorageError
from university_registry.models import University
from university_registry.schemas import StoredUniversity
from university_registry.storage import metrics
from university_registry.storage.interface import StorageAdapter

logger = logging.getLogger(__name__)

ACCOUNTS_NAMESPACE = "universities_accounts"
BY_NAME_NAMESPACE = "universities_by_name"


def _to_record(row: dict) -> University:
    parsed = StoredUniversity.model_validate(row)
    return University(name=parsed.name, account_id=parsed.account_id)


@contextmanager
def atomic_write(adapter: StorageAdapter) -> Iterator[None]:
    """`adapter.atomic()` with commit failures surfaced as StorageError."""
    try:
        with adapter.atomic():
            yield
    except RegistryError:
        raise
    except Exception as e:
        metrics.inc_error("atomic", "*")
        raise StorageError(f"Storage error during atomic write: {e}") from e


class _IndexHandle:
    def __init__(self, adapter: StorageAdapter, namespace: str):
        self.adapter = adapter
        self.namespace = namespace

    def _invoke(self, op: str, func: Callable[[], Any]):
        start = time.time()
        try:
            return func()
        except RegistryError:
            raise
        except Exception as e:  # wrap generic adapter/backend exceptions
            metrics.inc_error(op, self.namespace)
            raise StorageError(f"Storage error during {op} on {self.namespace}: {e}") from e
        finally:
            duration = (time.time() - start) * 1000.0
            metrics.inc(op, self.namespace)
            metrics.observe(op, self.namespace, duration)
            logger.debug("storage op=%s namespace=%s ms=%.1f", op, self.namespace, duration)


class AccountIndex(_IndexHandle):
    """Primary index: account_id -> University."""

    def __init__(self, adapter: StorageAdapter, namespace: str = ACCOUNTS_NAMESPACE):
        super().__init__(adapter, namespace)

    def get(self, account_id: str) -> Optional[University]:
        row = self._invoke("get", lambda: self.adapter.get(self.namespace, account_id))
        return _to_record(row) if row is not None else None

    def contains(self, account_id: str) -> bool:
        return self._invoke("get", lambda: self.adapter.get(self.namespace, account_id)) is not None

    def insert(self, university: University) -> None:
        self._invoke(
            "insert",
            lambda: self.adapter.insert(self.namespace, university.account_id, university.to_dict()),
        )

    def items(self) -> List[Tuple[str, University]]:
        rows = self._invoke("items", lambda: self.adapter.items(self.namespace))
        return [(key, _to_record(row)) for key, row in rows]


class NameIndex(_IndexHandle):
    """Secondary index: name -> ordered list of University."""

    def __init__(self, adapter: StorageAdapter, namespace: str = BY_NAME_NAMESPACE):
        super().__init__(adapter, namespace)

    def append(self, university: University) -> None:
        self._invoke(
            "append_to_bucket",
            lambda: self.adapter.append_to_bucket(self.namespace, university.name, university.to_dict()),
        )

    def bucket(self, name: str) -> List[University]:
        rows = self._invoke("list_bucket", lambda: self.adapter.list_bucket(self.namespace, name))
        return [_to_record(row) for row in rows]

    def buckets(self) -> List[Tuple[str, List[University]]]:
        rows = self._invoke("buckets", lambda: self.adapter.buckets(self.namespace))
        return [(name, [_to_record(r) for r in bucket]) for name, bucket in rows]


__all__ = ["AccountIndex", "NameIndex", "atomic_write", "ACCOUNTS_NAMESPACE", "BY_NAME_NAMESPACE"]
