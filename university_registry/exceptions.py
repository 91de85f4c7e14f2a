"""Exception hierarchy for the university registry.

Explicit exception types let callers tell an access-control rejection apart
from a uniqueness violation, bad input, lifecycle misuse, or a failing
storage backend.
"""

from __future__ import annotations


class RegistryError(Exception):
    """Base class for all registry related errors."""


class UnauthorizedError(RegistryError):
    """Raised when a caller other than the owner attempts a write."""


class DuplicateKeyError(RegistryError):
    """Raised when an account id is already registered."""

    def __init__(self, account_id: str):
        super().__init__(f"Account '{account_id}' already exists")
        self.account_id = account_id


class InvalidUniversityError(RegistryError):
    """Raised when write inputs fail validation (empty name or account id)."""


class AlreadyInitializedError(RegistryError):
    """Raised when initializing over storage that already holds a registry."""


class NotInitializedError(RegistryError):
    """Raised when loading a registry from storage that was never initialized."""


class StorageError(RegistryError):
    """Raised when the underlying storage adapter fails irrecoverably."""


__all__ = [
    "RegistryError",
    "UnauthorizedError",
    "DuplicateKeyError",
    "InvalidUniversityError",
    "AlreadyInitializedError",
    "NotInitializedError",
    "StorageError",
]
