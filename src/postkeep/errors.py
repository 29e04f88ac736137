"""
Error taxonomy shared by the post and element modules.
"""

from .confirmation import ConfirmationError
from .persistence.errors import (
    NotFoundError,
    PersistenceError,
    PersistenceReadError,
    PersistenceWriteError,
)
from .storage.base import StorageConfigurationError, StorageError, StorageQuotaExceeded
from .validation.errors import DuplicateIdentifierError, ValidationError

__all__ = [
    "ConfirmationError",
    "DuplicateIdentifierError",
    "NotFoundError",
    "PersistenceError",
    "PersistenceReadError",
    "PersistenceWriteError",
    "StorageConfigurationError",
    "StorageError",
    "StorageQuotaExceeded",
    "ValidationError",
]
