import fakeredis
import redis
import pytest

from university_registry.storage.adapters.redis_adapter import RedisAdapter


def test_missing_entries_read_as_empty(adapter):
	assert adapter.get("ns", "nope") is None
	assert adapter.items("ns") == []
	assert adapter.list_bucket("ns", "nope") == []
	assert adapter.buckets("ns") == []
	assert adapter.get_meta("owner_id") is None


def test_insert_and_items_keep_first_insert_order(adapter):
	adapter.insert("ns", "b", {"v": 1})
	adapter.insert("ns", "a", {"v": 2})
	adapter.insert("ns", "b", {"v": 3})
	assert adapter.get("ns", "b") == {"v": 3}
	assert adapter.items("ns") == [("b", {"v": 3}), ("a", {"v": 2})]


def test_buckets_append_in_order(adapter):
	adapter.append_to_bucket("ns", "x", {"i": 1})
	adapter.append_to_bucket("ns", "y", {"i": 2})
	adapter.append_to_bucket("ns", "x", {"i": 3})
	assert adapter.list_bucket("ns", "x") == [{"i": 1}, {"i": 3}]
	assert adapter.buckets("ns") == [("x", [{"i": 1}, {"i": 3}]), ("y", [{"i": 2}])]


def test_namespaces_are_isolated(adapter):
	adapter.insert("one", "k", {"v": 1})
	adapter.append_to_bucket("two", "k", {"v": 2})
	assert adapter.get("two", "k") is None
	assert adapter.list_bucket("one", "k") == []


def test_meta_set_only_once(adapter):
	assert adapter.set_meta_if_absent("owner_id", "admin") is True
	assert adapter.set_meta_if_absent("owner_id", "other") is False
	assert adapter.get_meta("owner_id") == "admin"


def test_atomic_commits_all_writes(adapter):
	with adapter.atomic():
		adapter.insert("ns", "k", {"v": 1})
		adapter.append_to_bucket("b", "name", {"v": 1})
		adapter.append_to_bucket("b", "name", {"v": 2})
	assert adapter.items("ns") == [("k", {"v": 1})]
	assert adapter.buckets("b") == [("name", [{"v": 1}, {"v": 2}])]


def test_atomic_discards_writes_when_block_raises(adapter):
	adapter.insert("ns", "kept", {"v": 0})
	with pytest.raises(RuntimeError):
		with adapter.atomic():
			adapter.insert("ns", "k", {"v": 1})
			adapter.append_to_bucket("b", "name", {"v": 1})
			raise RuntimeError("abort")
	assert adapter.items("ns") == [("kept", {"v": 0})]
	assert adapter.buckets("b") == []


def test_returned_values_are_copies(adapter):
	adapter.insert("ns", "k", {"v": 1})
	got = adapter.get("ns", "k")
	got["v"] = 99
	assert adapter.get("ns", "k") == {"v": 1}


def test_redis_state_survives_a_new_adapter(redis_server):
	first = RedisAdapter(client=fakeredis.FakeRedis(server=redis_server, decode_responses=True), prefix="p")
	first.insert("ns", "k", {"v": 1})
	first.append_to_bucket("b", "name", {"v": 1})
	first.set_meta_if_absent("owner_id", "admin")

	second = RedisAdapter(client=fakeredis.FakeRedis(server=redis_server, decode_responses=True), prefix="p")
	assert second.items("ns") == [("k", {"v": 1})]
	assert second.list_bucket("b", "name") == [{"v": 1}]
	assert second.get_meta("owner_id") == "admin"


def test_redis_prefixes_do_not_collide(redis_server):
	a = RedisAdapter(client=fakeredis.FakeRedis(server=redis_server, decode_responses=True), prefix="a")
	b = RedisAdapter(client=fakeredis.FakeRedis(server=redis_server, decode_responses=True), prefix="b")
	a.insert("ns", "k", {"v": 1})
	assert b.get("ns", "k") is None
	assert b.set_meta_if_absent("owner_id", "other") is True


def test_redis_key_layout(redis_adapter):
	redis_adapter.insert("ns", "k", {"v": 1})
	redis_adapter.append_to_bucket("b", "name", {"v": 1})
	keys = set(redis_adapter.client.keys("test_registry:*"))
	assert keys == {
		"test_registry:ns",
		"test_registry:ns:order",
		"test_registry:b:bucket:name",
		"test_registry:b:buckets",
	}


def test_redis_explicit_db_and_port_beat_environment(monkeypatch):
	monkeypatch.delenv("REDIS_URL", raising=False)
	monkeypatch.setenv("REDIS_DB", "5")
	monkeypatch.setenv("REDIS_PORT", "7000")
	adapter = RedisAdapter(host="localhost", port=6380, db=0)
	kwargs = adapter.client.connection_pool.connection_kwargs
	assert kwargs["db"] == 0
	assert kwargs["port"] == 6380

	from_env = RedisAdapter(host="localhost")
	assert from_env.client.connection_pool.connection_kwargs["db"] == 5
	assert from_env.client.connection_pool.connection_kwargs["port"] == 7000


def test_redis_command_error_at_exec_is_raised(redis_adapter):
	# a foreign string key where the bucket list should be
	redis_adapter.client.set("test_registry:b:bucket:name", "not a list")
	with pytest.raises(redis.exceptions.ResponseError):
		with redis_adapter.atomic():
			redis_adapter.insert("ns", "k", {"v": 1})
			redis_adapter.append_to_bucket("b", "name", {"v": 1})
	# EXEC does not roll back the command that succeeded
	assert redis_adapter.get("ns", "k") == {"v": 1}
