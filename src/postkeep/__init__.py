"""
PostKeep public package initialization.

Local blog-post management backed by a key-value store, plus the webauto
element helper.
"""

from .app import PostKeep  # noqa: F401
from .core import BooleanField, DateTimeField, Record, StringField, UUIDField  # noqa: F401
from .hooks import hooks  # noqa: F401
from .lifecycle import LifecycleManager, Outcome  # noqa: F401
from .notifications import Notification, Notifier  # noqa: F401
from .persistence import NotFoundError, RecordCollection, Repository  # noqa: F401
from .posts import BlogPost, PostFilter, PostForm, PostManager, filter_posts  # noqa: F401
from .query import Q, RecordQuery  # noqa: F401
from .storage import InMemoryStore, SQLiteStore, StorageConfig, open_store  # noqa: F401
from .validation import ValidationError  # noqa: F401
from .webauto import ElementManager, WebElement, render_element  # noqa: F401

__all__ = [
    "PostKeep",
    "Record",
    "BooleanField",
    "DateTimeField",
    "StringField",
    "UUIDField",
    "LifecycleManager",
    "Outcome",
    "Notification",
    "Notifier",
    "NotFoundError",
    "RecordCollection",
    "Repository",
    "BlogPost",
    "PostFilter",
    "PostForm",
    "PostManager",
    "filter_posts",
    "Q",
    "RecordQuery",
    "InMemoryStore",
    "SQLiteStore",
    "StorageConfig",
    "open_store",
    "ValidationError",
    "ElementManager",
    "WebElement",
    "render_element",
    "hooks",
]
