"""Lightweight in-process metrics collectors for registry storage calls.

Counters and latency aggregates keyed by (op, namespace). Cheap enough to run
on every adapter call; Prometheus export of call outcomes lives in
`platform_monitoring`.
"""
from __future__ import annotations
from typing import Dict, Tuple

_counter: Dict[Tuple[str, str], int] = {}
_errors: Dict[Tuple[str, str], int] = {}
_latency: Dict[Tuple[str, str], Dict[str, float]] = {}


def inc(op: str, namespace: str):
    key = (op, namespace)
    _counter[key] = _counter.get(key, 0) + 1


def inc_error(op: str, namespace: str):
    key = (op, namespace)
    _errors[key] = _errors.get(key, 0) + 1


def observe(op: str, namespace: str, ms: float):  # min/max/count/total
    key = (op, namespace)
    bucket = _latency.setdefault(key, {"count": 0, "total": 0.0, "min": ms, "max": ms})
    bucket["count"] += 1
    bucket["total"] += ms
    if ms < bucket["min"]:
        bucket["min"] = ms
    if ms > bucket["max"]:
        bucket["max"] = ms


def reset():
    _counter.clear()
    _errors.clear()
    _latency.clear()


def snapshot():
    out = []
    for op, namespace in set(_counter) | set(_errors):
        row = {"op": op, "namespace": namespace, "count": _counter.get((op, namespace), 0), "errors": _errors.get((op, namespace), 0)}
        lat = _latency.get((op, namespace))
        if lat:
            avg = lat["total"] / lat["count"] if lat["count"] else 0.0
            row.update({
                "lat_min_ms": round(lat["min"], 2),
                "lat_max_ms": round(lat["max"], 2),
                "lat_avg_ms": round(avg, 2),
            })
        out.append(row)
    return sorted(out, key=lambda r: (r["op"], r["namespace"]))

__all__ = ["inc", "inc_error", "observe", "reset", "snapshot"]
