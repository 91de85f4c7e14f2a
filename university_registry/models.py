"""University value record."""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class University:
    """A registered university.

    Fields:
    - name: display name; not unique, many universities may share one
    - account_id: primary key of the registry; unique and immutable

    Usage:
        uni = University(name="State College", account_id="state.test")
        uni.to_dict()  # {"name": "State College", "account_id": "state.test"}
    """

    name: str
    account_id: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "account_id": self.account_id}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "University":
        return cls(name=d["name"], account_id=d["account_id"])


__all__ = ["University"]
