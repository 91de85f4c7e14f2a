from typing import Any, Callable, Dict, List, Optional, Tuple
import logging

import platform_monitoring
from university_registry import envelope as env
from university_registry.envelope import Envelope
from university_registry.exceptions import (
    DuplicateKeyError,
    InvalidUniversityError,
    RegistryError,
    UnauthorizedError,
)
from university_registry.models import University
from university_registry.registry import UniversityRegistry

logger = logging.getLogger(__name__)

WRITE_METHODS = frozenset({"add_university"})
READ_METHODS = frozenset({
    "get_all_universities",
    "get_universities_by_name",
    "get_university_by_account_id",
})


class RegistryService:
    """Public call surface of a university registry.

    Responsibilities
    ----------------
    - Expose the four registry operations as typed methods that raise the
      registry's exceptions.
    - Dispatch by method name through `call`, turning every outcome into an
      `Envelope` with an explicit status instead of an exception.
    - Emit a monitoring event and a Prometheus sample for every call.
    """

    def __init__(self, registry: UniversityRegistry):
        self.registry = registry

    # -------- write APIs --------
    def add_university(self, name: str, account_id: str, *, caller: str) -> University:
        return self.registry.add_university(name, account_id, caller=caller)

    # -------- read APIs --------
    def get_all_universities(self) -> List[Tuple[str, University]]:
        return self.registry.get_all_universities()

    def get_universities_by_name(self, name: str) -> List[University]:
        return self.registry.get_universities_by_name(name)

    def get_university_by_account_id(self, account_id: str) -> Optional[University]:
        return self.registry.get_university_by_account_id(account_id)

    # -------- envelope dispatch --------
    def call(self, method: str, args: Optional[Dict[str, Any]] = None, caller: Optional[str] = None) -> Envelope:
        args = dict(args or {})
        handler = self._handlers().get(method)
        if handler is None:
            result = Envelope.failure(method, env.UNKNOWN_METHOD, f"Unknown method '{method}'", caller=caller, args=args)
        else:
            result = self._invoke(method, args, caller, lambda: handler(args, caller))
        platform_monitoring.prometheus_metric("registry_calls", 1, {"method": method, "status": result.status})
        platform_monitoring.log_event(
            "registry.call",
            {"method": method, "caller": caller, "status": result.status, "error": result.error},
        )
        return result

    def _handlers(self) -> Dict[str, Callable[[Dict[str, Any], Optional[str]], List[Dict[str, Any]]]]:
        return {
            "add_university": lambda a, c: [self.add_university(a["name"], a["account_id"], caller=c).to_dict()],
            "get_all_universities": lambda a, c: [
                {"account_id": key, **uni.to_dict()} for key, uni in self.get_all_universities()
            ],
            "get_universities_by_name": lambda a, c: [u.to_dict() for u in self.get_universities_by_name(a["name"])],
            "get_university_by_account_id": lambda a, c: [
                u.to_dict() for u in [self.get_university_by_account_id(a["account_id"])] if u is not None
            ],
        }

    def _invoke(self, method: str, args: Dict[str, Any], caller: Optional[str], func: Callable[[], List[Dict[str, Any]]]) -> Envelope:
        try:
            records = func()
        except UnauthorizedError as e:
            return Envelope.failure(method, env.UNAUTHORIZED, str(e), caller=caller, args=args)
        except DuplicateKeyError as e:
            return Envelope.failure(method, env.DUPLICATE_KEY, str(e), caller=caller, args=args)
        except InvalidUniversityError as e:
            return Envelope.failure(method, env.INVALID_INPUT, str(e), caller=caller, args=args)
        except KeyError as e:
            return Envelope.failure(method, env.INVALID_INPUT, f"Missing argument {e}", caller=caller, args=args)
        except RegistryError as e:
            logger.error("Registry call %s failed: %s", method, e)
            return Envelope.failure(method, env.ERROR, str(e), caller=caller, args=args)
        return Envelope.from_records(method, records, caller=caller, args=args)


class ReadOnlyRegistryFacade:
    """Read-only façade forwarding the three public reads only.

    Any attempt to write raises UnauthorizedError, whoever the caller is.
    Useful for handing the registry to reporting or lookup flows.
    """

    def __init__(self, service: RegistryService):
        self._svc = service

    # write attempts blocked
    def add_university(self, *a, **k):
        raise UnauthorizedError("Write not permitted on read-only facade")

    # allowed methods
    def get_all_universities(self) -> List[Tuple[str, University]]:
        return self._svc.get_all_universities()

    def get_universities_by_name(self, name: str) -> List[University]:
        return self._svc.get_universities_by_name(name)

    def get_university_by_account_id(self, account_id: str) -> Optional[University]:
        return self._svc.get_university_by_account_id(account_id)

    def call(self, method: str, args: Optional[Dict[str, Any]] = None, caller: Optional[str] = None) -> Envelope:
        if method in WRITE_METHODS:
            return Envelope.failure(method, env.UNAUTHORIZED, "Write not permitted on read-only facade", caller=caller, args=args)
        if method not in READ_METHODS:
            return Envelope.failure(method, env.UNKNOWN_METHOD, f"Unknown method '{method}'", caller=caller, args=args)
        return self._svc.call(method, args, caller)


__all__ = ["RegistryService", "ReadOnlyRegistryFacade", "WRITE_METHODS", "READ_METHODS"]
