import pytest

from postkeep.core import Record, StringField, UUIDField
from postkeep.hooks import hooks
from postkeep.persistence import RecordCollection, Repository
from postkeep.storage import InMemoryStore


@pytest.fixture(autouse=True)
def clear_hooks():
    hooks.clear()
    yield
    hooks.clear()


def make_collection():
    collection = RecordCollection(Repository(Sample, InMemoryStore(), "samples"))
    collection.load()
    return collection


class Sample(Record):
    id = UUIDField()
    name = StringField(nullable=False)


def test_hooks_fire_in_order():
    events = []

    for event_name in ["before_save", "after_save", "after_commit"]:
        def handler(inst, event=event_name, **ctx):
            events.append((event, inst.name if inst else None))

        hooks.register(event_name, handler)

    collection = make_collection()
    collection.add(Sample(name="Alice"))

    assert events == [
        ("before_save", "Alice"),
        ("after_save", "Alice"),
        ("after_commit", None),
    ]


def test_save_hooks_report_created_flag():
    flags = []
    hooks.register("after_save", lambda inst, created, **ctx: flags.append(created))

    collection = make_collection()
    sample = Sample(name="Dana")
    collection.add(sample)
    collection.replace(sample.merged({"name": "Dana K"}))

    assert flags == [True, False]


def test_record_specific_hook_on_delete():
    fired = []

    def before_delete(instance, **context):
        fired.append(("before", instance.name))

    def after_delete(instance, **context):
        fired.append(("after", instance.name))

    Sample.register_hook("before_delete", before_delete)
    Sample.register_hook("after_delete", after_delete)

    collection = make_collection()
    sample = Sample(name="Bob")
    collection.add(sample)
    collection.remove(sample.id)

    assert fired == [("before", "Bob"), ("after", "Bob")]


def test_commit_hook_receives_storage_key():
    keys = []
    hooks.register("after_commit", lambda inst, key, **ctx: keys.append(key))

    make_collection().add(Sample(name="Eve"))

    assert keys == ["samples"]


def test_unknown_event_is_rejected():
    with pytest.raises(ValueError):
        hooks.register("before_validate", lambda inst, **ctx: None)


def test_unregister_stops_delivery():
    seen = []

    def handler(inst, **ctx):
        seen.append(inst.name)

    Sample.register_hook("after_save", handler)
    assert hooks.unregister("after_save", handler, record=Sample)
    assert not hooks.unregister("after_save", handler, record=Sample)

    make_collection().add(Sample(name="Fay"))
    assert seen == []
