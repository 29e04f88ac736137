"""
Persistence layer components: repositories and owned record collections.
"""

from .collection import RecordCollection
from .errors import NotFoundError, PersistenceError, PersistenceReadError, PersistenceWriteError
from .repository import Repository

__all__ = [
    "NotFoundError",
    "PersistenceError",
    "PersistenceReadError",
    "PersistenceWriteError",
    "RecordCollection",
    "Repository",
]
