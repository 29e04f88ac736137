from datetime import datetime, timezone

import pytest

from postkeep.hooks import HookDispatcher
from postkeep.notifications import Notifier
from postkeep.persistence import RecordCollection, Repository
from postkeep.posts import STORAGE_KEY, BlogPost, PostManager
from postkeep.storage import InMemoryStore


def _post_payload(**overrides):
    payload = {
        "title": "Hello World",
        "content": "A first post with enough content.",
        "author": "Alice",
        "image_url": None,
        "category": "Technology",
        "priority": "Medium",
        "is_published": True,
        "publish_date": datetime(2024, 6, 1, tzinfo=timezone.utc),
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def post_payload():
    return _post_payload


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def manager(store, notifier):
    repository = Repository(BlogPost, store, STORAGE_KEY, notifier=notifier)
    collection = RecordCollection(repository, hook_dispatcher=HookDispatcher())
    collection.load()
    return PostManager(collection)
