"""
Application facade wiring a store, repositories, collections and managers.
"""

from __future__ import annotations

import os
from typing import Optional

from .hooks import HookDispatcher
from .notifications import Notifier
from .persistence import RecordCollection, Repository
from .posts import STORAGE_KEY as POSTS_KEY
from .posts import BlogPost, PostManager, PostRouter
from .storage import KeyValueStore, StorageConfig, open_store
from .utils import bind_session_id, get_logger
from .webauto import STORAGE_KEY as ELEMENTS_KEY
from .webauto import ElementManager, WebElement

ENV_VAR = "POSTKEEP_STORE"
DEFAULT_DSN = "memory://"

logger = get_logger("app")


class PostKeep:
    """
    One session over a store: both collections loaded and ready to mutate.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        notifier: Optional[Notifier] = None,
        hook_dispatcher: Optional[HookDispatcher] = None,
    ) -> None:
        self.session_id = bind_session_id()
        self.store = store
        self.notifier = notifier or Notifier()

        post_repository = Repository(BlogPost, store, POSTS_KEY, notifier=self.notifier)
        element_repository = Repository(WebElement, store, ELEMENTS_KEY, notifier=self.notifier)
        self.post_collection = RecordCollection(post_repository, hook_dispatcher=hook_dispatcher)
        self.element_collection = RecordCollection(element_repository, hook_dispatcher=hook_dispatcher)
        self.post_collection.load()
        self.element_collection.load()

        self.posts = PostManager(self.post_collection)
        self.elements = ElementManager(self.element_collection)
        self.router = PostRouter(self.posts)
        logger.info(
            "Session ready with %d post(s) and %d element(s)",
            len(self.post_collection),
            len(self.element_collection),
        )

    @classmethod
    def open(cls, dsn: Optional[str] = None, **kwargs) -> "PostKeep":
        """
        Open the store named by ``dsn``, else by ``$POSTKEEP_STORE``, else in memory.
        """
        if dsn is not None:
            config = StorageConfig.from_dsn(dsn)
        elif os.getenv(ENV_VAR):
            config = StorageConfig.from_env(ENV_VAR)
        else:
            config = StorageConfig.from_dsn(DEFAULT_DSN)
        logger.info("Opening store %s", config.descriptive_label())
        return cls(open_store(config), **kwargs)

    def close(self) -> None:
        self.store.close()

    def __enter__(self) -> "PostKeep":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
