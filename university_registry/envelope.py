"""JSON result envelope for the registry call surface.

Every call through `RegistryService.call` produces one envelope. Failures are
explicit values here (`status` + `error`) rather than exceptions, so a caller
on the far side of a process or network boundary can decide what to do.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
import json
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from university_registry.schemas import EnvelopeModel

SUCCESS = "SUCCESS"
NO_RESULTS = "NO_RESULTS"
UNAUTHORIZED = "UNAUTHORIZED"
DUPLICATE_KEY = "DUPLICATE_KEY"
INVALID_INPUT = "INVALID_INPUT"
UNKNOWN_METHOD = "UNKNOWN_METHOD"
ERROR = "ERROR"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def make_metadata(method: str, caller: Optional[str] = None, args: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    return {
        "method": method,
        "caller": caller,
        "handled_at": _now_iso(),
        "args": args or {},
    }


@dataclass
class Envelope:
    """Result of one registry call.

    Fields:
    - metadata: method, caller, handled_at, args
    - records: list of record dicts (University rows, keyed rows for listings)
    - status: SUCCESS, NO_RESULTS, or one of the failure statuses
    - error: optional error message

    Usage:
        env = Envelope.from_records('get_universities_by_name', rows, args={'name': 'UMA'})
        s = env.to_json()
    """

    metadata: Dict[str, Any]
    records: List[Dict[str, Any]]
    status: str = SUCCESS
    error: Optional[str] = None

    @classmethod
    def from_records(cls, method: str, records: Optional[List[Dict[str, Any]]] = None, caller: Optional[str] = None, args: Optional[Dict[str, Any]] = None) -> "Envelope":
        records = [dict(r) for r in (records or [])]
        status = SUCCESS if records else NO_RESULTS
        return cls(metadata=make_metadata(method, caller=caller, args=args), records=records, status=status)

    @classmethod
    def failure(cls, method: str, status: str, error: str, caller: Optional[str] = None, args: Optional[Dict[str, Any]] = None) -> "Envelope":
        return cls(metadata=make_metadata(method, caller=caller, args=args), records=[], status=status, error=error)

    @property
    def ok(self) -> bool:
        return self.status in (SUCCESS, NO_RESULTS)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metadata": self.metadata,
            "records": self.records,
            "status": self.status,
            "error": self.error,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Envelope":
        return cls(metadata=d.get("metadata", {}), records=d.get("records", []), status=d.get("status", SUCCESS), error=d.get("error"))

    @classmethod
    def from_json(cls, s: str) -> "Envelope":
        return cls.from_dict(json.loads(s))

    def validate(self) -> bool:
        return validate_envelope(self.to_dict())


def validate_envelope(env: Dict[str, Any]) -> bool:
    try:
        EnvelopeModel.model_validate(env)
    except ValidationError:
        return False
    return True


__all__ = [
    "Envelope",
    "make_metadata",
    "validate_envelope",
    "SUCCESS",
    "NO_RESULTS",
    "UNAUTHORIZED",
    "DUPLICATE_KEY",
    "INVALID_INPUT",
    "UNKNOWN_METHOD",
    "ERROR",
]
