"""In-memory storage adapter.

Dict-backed implementation of the StorageAdapter contract, intended for tests
and local runs. Python dicts keep insertion order, which gives the ordering
guarantees of `items` and `buckets` for free. State lives only as long as the
adapter instance.
"""

from __future__ import annotations

import copy
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Tuple


class InMemoryAdapter:
	def __init__(self) -> None:
		self._maps: Dict[str, Dict[str, Dict[str, Any]]] = {}
		self._buckets: Dict[str, Dict[str, List[Dict[str, Any]]]] = {}
		self._meta: Dict[str, str] = {}
		self._depth = 0

	# Keyed maps --------------------------------------------------------
	def get(self, namespace: str, key: str) -> Optional[Dict[str, Any]]:
		value = self._maps.get(namespace, {}).get(key)
		return dict(value) if value is not None else None

	def insert(self, namespace: str, key: str, value: Dict[str, Any]) -> None:
		self._maps.setdefault(namespace, {})[key] = dict(value)

	def items(self, namespace: str) -> List[Tuple[str, Dict[str, Any]]]:
		return [(k, dict(v)) for k, v in self._maps.get(namespace, {}).items()]

	# Buckets -----------------------------------------------------------
	def append_to_bucket(self, namespace: str, key: str, value: Dict[str, Any]) -> None:
		self._buckets.setdefault(namespace, {}).setdefault(key, []).append(dict(value))

	def list_bucket(self, namespace: str, key: str) -> List[Dict[str, Any]]:
		return [dict(v) for v in self._buckets.get(namespace, {}).get(key, [])]

	def buckets(self, namespace: str) -> List[Tuple[str, List[Dict[str, Any]]]]:
		return [(k, [dict(v) for v in vals]) for k, vals in self._buckets.get(namespace, {}).items()]

	# Metadata ----------------------------------------------------------
	def get_meta(self, key: str) -> Optional[str]:
		return self._meta.get(key)

	def set_meta_if_absent(self, key: str, value: str) -> bool:
		if key in self._meta:
			return False
		self._meta[key] = value
		return True

	@contextmanager
	def atomic(self) -> Iterator[None]:
		"""Restore the pre-block state if the block raises.

		Only the outermost block snapshots; nested blocks join it.
		"""
		if self._depth:
			self._depth += 1
			try:
				yield
			finally:
				self._depth -= 1
			return
		snapshot = (copy.deepcopy(self._maps), copy.deepcopy(self._buckets), dict(self._meta))
		self._depth = 1
		try:
			yield
		except BaseException:
			self._maps, self._buckets, self._meta = snapshot
			raise
		finally:
			self._depth = 0


__all__ = ["InMemoryAdapter"]
