from typing import Dict, Any, Union
import logging
import re

from prometheus_client import CollectorRegistry, Counter, generate_latest

_SECRET_KEY_RE = re.compile(r"(?i)(key|token|secret|authorization|password|passwd|bearer)")

logger = logging.getLogger('platform_monitoring')

# Dedicated registry so repeated imports in tests never collide with the
# process-wide default collector.
REGISTRY = CollectorRegistry()

REGISTRY_CALLS = Counter(
    'registry_calls',
    'University registry calls by method and outcome status',
    ['method', 'status'],
    registry=REGISTRY,
)


def _sanitize(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {
            k: ('***REDACTED***' if _SECRET_KEY_RE.search(str(k)) else _sanitize(v))
            for k, v in obj.items()
        }
    if isinstance(obj, list):
        return [_sanitize(x) for x in obj]
    return obj


def log_event(event: Union[str, Dict[str, Any]], payload: Dict[str, Any] | None = None):
    """Log a monitoring event to the central logger.

    Accepts log_event('name', {...}) or log_event({'event': 'name', ...}).
    """
    if isinstance(event, str):
        record = {'event': event, **(payload or {})}
    else:
        record = event
    logger.info('MONITOR_EVENT %s', _sanitize(record))


def prometheus_metric(name: str, value: float = 1.0, labels: Dict[str, str] | None = None):
    if name != 'registry_calls':
        raise ValueError(f"Unknown metric '{name}'")
    REGISTRY_CALLS.labels(**(labels or {})).inc(value)
    logger.debug('PROM_METRIC %s=%s labels=%s', name, value, labels)


def sample_value(name: str, labels: Dict[str, str]) -> float:
    """Current value of a sample, 0.0 when it was never recorded."""
    return REGISTRY.get_sample_value(name, labels) or 0.0


def render_latest() -> bytes:
    return generate_latest(REGISTRY)
