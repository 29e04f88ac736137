import json
from datetime import datetime, timezone

import pytest

from postkeep.core import DateTimeField, Record, StringField, UUIDField
from postkeep.notifications import Notifier
from postkeep.persistence import PersistenceReadError, PersistenceWriteError, Repository
from postkeep.storage import InMemoryStore


class Entry(Record):
    id = UUIDField()
    title = StringField(nullable=False)
    published_at = DateTimeField(nullable=False)

    class Meta:
        verbose_name = "article"


def make_entry(title: str, day: int = 1) -> Entry:
    return Entry(title=title, published_at=datetime(2024, 1, day, tzinfo=timezone.utc))


def test_missing_key_loads_empty_collection():
    repository = Repository(Entry, InMemoryStore(), "entries")
    assert repository.read() == []
    assert repository.load() == []


def test_save_then_load_preserves_order_and_values():
    store = InMemoryStore()
    repository = Repository(Entry, store, "entries")
    entries = [make_entry("first", 3), make_entry("second", 1), make_entry("third", 2)]
    repository.save(entries)

    loaded = Repository(Entry, store, "entries").load()
    assert loaded == entries
    assert [entry.title for entry in loaded] == ["first", "second", "third"]


def test_saved_payload_is_camel_case_json_array():
    store = InMemoryStore()
    entry = make_entry("hello")
    Repository(Entry, store, "entries").save([entry])

    data = json.loads(store.get_item("entries"))
    assert data == [
        {"id": entry.id, "title": "hello", "publishedAt": "2024-01-01T00:00:00+00:00"}
    ]


def test_truncated_json_degrades_to_empty_and_notifies():
    store = InMemoryStore()
    store.set_item("entries", '[{"id": "1", "title": "cut off"')
    notifier = Notifier()
    repository = Repository(Entry, store, "entries", notifier=notifier)

    with pytest.raises(PersistenceReadError):
        repository.read()
    assert repository.load() == []
    assert notifier.last.is_error
    assert notifier.last.description == "Could not load saved articles."


@pytest.mark.parametrize(
    "raw",
    [
        '{"id": "1"}',
        '["not an object"]',
        '[{"id": "1", "title": "no date"}]',
        '[{"title": "no id", "publishedAt": "2024-01-01T00:00:00Z"}]',
        '[{"id": "1", "title": "a", "publishedAt": "2024-01-01T00:00:00Z"},'
        ' {"id": "1", "title": "b", "publishedAt": "2024-01-02T00:00:00Z"}]',
    ],
)
def test_schema_mismatches_are_read_errors(raw):
    store = InMemoryStore()
    store.set_item("entries", raw)
    with pytest.raises(PersistenceReadError):
        Repository(Entry, store, "entries").read()


def test_quota_failure_surfaces_as_write_error():
    store = InMemoryStore(quota_bytes=32)
    repository = Repository(Entry, store, "entries")
    with pytest.raises(PersistenceWriteError) as excinfo:
        repository.save([make_entry("x" * 64)])
    assert excinfo.value.key == "entries"
    assert store.get_item("entries") is None


def test_sqlite_store_round_trip(tmp_path):
    from postkeep.storage import SQLiteStore, StorageConfig

    config = StorageConfig.from_dsn(f"sqlite:///{tmp_path / 'entries.db'}")
    store = SQLiteStore(config)
    entries = [make_entry("persisted")]
    Repository(Entry, store, "entries").save(entries)
    store.close()

    reopened = SQLiteStore(config)
    try:
        assert Repository(Entry, reopened, "entries").load() == entries
    finally:
        reopened.close()


def test_deeply_nested_payload_degrades_to_empty_collection():
    store = InMemoryStore()
    store.set_item("entries", "[" * 100000 + "]" * 100000)
    notifier = Notifier()
    repository = Repository(Entry, store, "entries", notifier=notifier)

    with pytest.raises(PersistenceReadError):
        repository.read()
    assert repository.load() == []
    assert notifier.last.is_error
