import os
from pathlib import Path

import fakeredis
import pytest  # noqa

from university_registry.registry import UniversityRegistry
from university_registry.service import RegistryService
from university_registry.storage import metrics
from university_registry.storage.adapters.in_memory_adapter import InMemoryAdapter
from university_registry.storage.adapters.redis_adapter import RedisAdapter

OWNER = "admin"

# --- .env loader -----------------------------------------------------------

def _load_env_file(filename: str = '.env'):
    """Lightweight .env loader so local overrides apply to the test run."""
    root = Path(__file__).resolve().parent.parent
    env_path = root / filename
    if not env_path.exists():
        return
    for line in env_path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        k, v = line.split('=', 1)
        k = k.strip()
        v = v.strip().strip('"').strip("'")
        if k and k not in os.environ:
            os.environ[k] = v

_load_env_file()


# --- fixtures --------------------------------------------------------------

@pytest.fixture
def redis_server():
    return fakeredis.FakeServer()


@pytest.fixture
def redis_adapter(redis_server):
    client = fakeredis.FakeRedis(server=redis_server, decode_responses=True)
    return RedisAdapter(client=client, prefix="test_registry")


@pytest.fixture(params=["memory", "redis"])
def adapter(request, redis_server):
    """Every storage backend, so registry behavior is checked on each."""
    if request.param == "memory":
        return InMemoryAdapter()
    client = fakeredis.FakeRedis(server=redis_server, decode_responses=True)
    return RedisAdapter(client=client, prefix="test_registry")


@pytest.fixture
def registry(adapter):
    return UniversityRegistry.initialize(adapter, owner_id=OWNER)


@pytest.fixture
def service(registry):
    return RegistryService(registry)


@pytest.fixture(autouse=True)
def _reset_storage_metrics():
    metrics.reset()
    yield
    metrics.reset()
