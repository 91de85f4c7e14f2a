"""pydantic models for registry inputs, stored payloads and envelopes.

`UniversityInput` guards the write path (empty strings only; no format rules); `StoredUniversity` validates rows
coming back from a storage adapter before they are turned into records;
`EnvelopeModel` backs `envelope.validate_envelope`.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class UniversityInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    account_id: str

    @field_validator("name", "account_id")
    @classmethod
    def _not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("must be a non-empty string")
        return v


class StoredUniversity(BaseModel):
    name: str
    account_id: str


class EnvelopeModel(BaseModel):
    metadata: Dict[str, Any]
    records: List[Dict[str, Any]]
    status: Optional[str] = "SUCCESS"
    error: Optional[str] = None


__all__ = ["UniversityInput", "StoredUniversity", "EnvelopeModel"]
