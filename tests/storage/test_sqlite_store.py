import pytest

from postkeep.storage import SQLiteStore, StorageConfig, StorageConfigurationError, StorageError, StorageQuotaExceeded


def make_store(tmp_path, query: str = "") -> SQLiteStore:
    return SQLiteStore(StorageConfig.from_dsn(f"sqlite:///{tmp_path / 'kv.db'}{query}"))


def test_values_survive_reopen(tmp_path):
    store = make_store(tmp_path)
    store.set_item("blog-posts", '[{"id": "1"}]')
    store.close()

    reopened = make_store(tmp_path)
    try:
        assert reopened.get_item("blog-posts") == '[{"id": "1"}]'
    finally:
        reopened.close()


def test_set_item_replaces_existing_value(tmp_path):
    store = make_store(tmp_path)
    try:
        store.set_item("k", "first")
        store.set_item("k", "second")
        assert store.get_item("k") == "second"
        assert list(store.keys()) == ["k"]
    finally:
        store.close()


def test_remove_and_clear(tmp_path):
    store = make_store(tmp_path)
    try:
        store.set_item("a", "1")
        store.set_item("b", "2")
        store.remove_item("a")
        assert list(store.keys()) == ["b"]
        store.clear()
        assert store.get_item("b") is None
    finally:
        store.close()


def test_quota_is_enforced(tmp_path):
    store = make_store(tmp_path, "?quota_bytes=12")
    try:
        store.set_item("k", "small")
        with pytest.raises(StorageQuotaExceeded):
            store.set_item("k", "definitely too large")
        assert store.get_item("k") == "small"
    finally:
        store.close()


def test_invalid_table_name_is_rejected(tmp_path):
    config = StorageConfig.from_dsn(f"sqlite:///{tmp_path / 'kv.db'}", table="bad name;")
    with pytest.raises(StorageConfigurationError):
        SQLiteStore(config)


def test_operations_after_close_raise(tmp_path):
    store = make_store(tmp_path)
    store.close()
    store.close()
    with pytest.raises(StorageError):
        store.get_item("k")
