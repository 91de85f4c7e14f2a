"""Redis storage adapter.

Durable implementation of the StorageAdapter contract on top of redis-py.

Key layout (``p`` is the configured prefix, ``ns`` a namespace):
- ``p:ns``               hash of key -> JSON value (keyed maps)
- ``p:ns:order``         list of map keys in first-insert order
- ``p:ns:bucket:<key>``  list of JSON values (one bucket)
- ``p:ns:buckets``       list of bucket keys in first-append order
- ``p:meta:<key>``       plain string metadata, written with SET NX

Environment variables supported when no client is injected:
- REDIS_URL: full connection URL (preferred)
- REDIS_HOST (default: localhost)
- REDIS_PORT (default: 6379)
- REDIS_DB (default: 0)
- REDIS_PASSWORD (optional)
"""
from __future__ import annotations

import json
import os
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Set, Tuple

import redis


class RedisAdapter:
	"""Registry storage backed by Redis hashes and lists.

	If REDIS_URL is set it is preferred (handles TLS via rediss://), otherwise
	host/port/db/password envs are used. Tests inject a fakeredis client.
	"""

	def __init__(
		self,
		client: Optional[Any] = None,
		url: Optional[str] = None,
		host: Optional[str] = None,
		port: Optional[int] = None,
		db: Optional[int] = None,
		password: Optional[str] = None,
		prefix: str = "university_registry",
	):
		self.prefix = prefix
		if client is not None:
			self.client = client
		else:
			url = url or os.getenv("REDIS_URL")
			if url:
				self.client = redis.from_url(url, decode_responses=True)
			else:
				self.client = redis.Redis(
					host=host or os.getenv("REDIS_HOST", "localhost"),
					port=int(port if port is not None else os.getenv("REDIS_PORT", "6379")),
					db=int(db if db is not None else os.getenv("REDIS_DB", "0")),
					password=password or os.getenv("REDIS_PASSWORD"),
					decode_responses=True,
				)
		self._pipe = None
		# keys created inside the open pipeline, not yet visible to reads
		self._pending_keys: Set[str] = set()
		self._pending_buckets: Set[str] = set()

	# Key helpers -------------------------------------------------------
	def _map_key(self, namespace: str) -> str:
		return f"{self.prefix}:{namespace}"

	def _order_key(self, namespace: str) -> str:
		return f"{self.prefix}:{namespace}:order"

	def _bucket_key(self, namespace: str, key: str) -> str:
		return f"{self.prefix}:{namespace}:bucket:{key}"

	def _bucket_order_key(self, namespace: str) -> str:
		return f"{self.prefix}:{namespace}:buckets"

	def _meta_key(self, key: str) -> str:
		return f"{self.prefix}:meta:{key}"

	def _writer(self):
		return self._pipe if self._pipe is not None else self.client

	@staticmethod
	def _decode(raw: Optional[str]) -> Optional[Dict[str, Any]]:
		if raw is None:
			return None
		return json.loads(raw)

	# Keyed maps --------------------------------------------------------
	def get(self, namespace: str, key: str) -> Optional[Dict[str, Any]]:
		return self._decode(self.client.hget(self._map_key(namespace), key))

	def insert(self, namespace: str, key: str, value: Dict[str, Any]) -> None:
		pending = f"{namespace}\x00{key}"
		is_new = pending not in self._pending_keys and not self.client.hexists(self._map_key(namespace), key)
		w = self._writer()
		w.hset(self._map_key(namespace), key, json.dumps(value))
		if is_new:
			w.rpush(self._order_key(namespace), key)
			if self._pipe is not None:
				self._pending_keys.add(pending)

	def items(self, namespace: str) -> List[Tuple[str, Dict[str, Any]]]:
		keys = self.client.lrange(self._order_key(namespace), 0, -1)
		if not keys:
			return []
		values = self.client.hmget(self._map_key(namespace), keys)
		return [(k, json.loads(v)) for k, v in zip(keys, values) if v is not None]

	# Buckets -----------------------------------------------------------
	def append_to_bucket(self, namespace: str, key: str, value: Dict[str, Any]) -> None:
		bucket = self._bucket_key(namespace, key)
		is_new = bucket not in self._pending_buckets and not self.client.exists(bucket)
		w = self._writer()
		w.rpush(bucket, json.dumps(value))
		if is_new:
			w.rpush(self._bucket_order_key(namespace), key)
			if self._pipe is not None:
				self._pending_buckets.add(bucket)

	def list_bucket(self, namespace: str, key: str) -> List[Dict[str, Any]]:
		return [json.loads(v) for v in self.client.lrange(self._bucket_key(namespace, key), 0, -1)]

	def buckets(self, namespace: str) -> List[Tuple[str, List[Dict[str, Any]]]]:
		keys = self.client.lrange(self._bucket_order_key(namespace), 0, -1)
		return [(k, self.list_bucket(namespace, k)) for k in keys]

	# Metadata ----------------------------------------------------------
	def get_meta(self, key: str) -> Optional[str]:
		return self.client.get(self._meta_key(key))

	def set_meta_if_absent(self, key: str, value: str) -> bool:
		return bool(self.client.set(self._meta_key(key), value, nx=True))

	@contextmanager
	def atomic(self) -> Iterator[None]:
		"""Buffer writes in a MULTI/EXEC pipeline; discard them if the block raises.

		An exception inside the block discards every queued write. Redis does
		not roll back inside EXEC, though: when one queued command fails at
		execution time (e.g. WRONGTYPE on a foreign key) the others still
		apply, and `execute()` raises the command error afterwards.
		"""
		if self._pipe is not None:
			yield
			return
		self._pipe = self.client.pipeline(transaction=True)
		try:
			yield
			self._pipe.execute()
		finally:
			self._pipe.reset()
			self._pipe = None
			self._pending_keys.clear()
			self._pending_buckets.clear()


__all__ = ["RedisAdapter"]
