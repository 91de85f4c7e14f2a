"""
University registry: a keyed registry of University records with an
account-id primary index, a name secondary index, and an owner-only write path.
"""

from university_registry.exceptions import (
    RegistryError,
    UnauthorizedError,
    DuplicateKeyError,
    InvalidUniversityError,
    AlreadyInitializedError,
    NotInitializedError,
    StorageError,
)
from university_registry.models import University
from university_registry.registry import UniversityRegistry
from university_registry.service import RegistryService, ReadOnlyRegistryFacade

__all__ = [
    "University",
    "UniversityRegistry",
    "RegistryService",
    "ReadOnlyRegistryFacade",
    "RegistryError",
    "UnauthorizedError",
    "DuplicateKeyError",
    "InvalidUniversityError",
    "AlreadyInitializedError",
    "NotInitializedError",
    "StorageError",
]
