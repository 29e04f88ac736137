import json

import pytest

from postkeep.hooks import HookDispatcher
from postkeep.notifications import Notifier
from postkeep.persistence import RecordCollection, Repository
from postkeep.storage import InMemoryStore
from postkeep.webauto import STORAGE_KEY, ElementManager, WebElement


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def elements(store, notifier):
    repository = Repository(WebElement, store, STORAGE_KEY, notifier=notifier)
    collection = RecordCollection(repository, hook_dispatcher=HookDispatcher())
    collection.load()
    return ElementManager(collection)


def test_create_element_with_valid_identifier(elements, notifier):
    outcome = elements.create({"element_id": "login-btn", "element_type": "button"})
    assert outcome.ok
    assert outcome.record.value == ""
    assert outcome.record.internal_id
    assert notifier.last.description == 'Element "login-btn" has been created.'


def test_duplicate_identifier_is_rejected(elements):
    elements.create({"element_id": "login-btn", "element_type": "button"})
    before = elements.all()

    outcome = elements.create({"element_id": "login-btn", "element_type": "input"})
    assert not outcome.ok
    assert outcome.errors == {"element_id": ["This ID is already in use. Please choose a unique ID."]}
    assert elements.all() == before


@pytest.mark.parametrize(
    "element_id, message",
    [
        ("", "ID is required."),
        ("has space", "ID can only contain letters, numbers, hyphens, and underscores."),
        ("dot.ted", "ID can only contain letters, numbers, hyphens, and underscores."),
    ],
)
def test_identifier_format_is_validated(elements, element_id, message):
    outcome = elements.create({"element_id": element_id, "element_type": "p"})
    assert outcome.errors["element_id"] == [message]


def test_unknown_element_type_is_rejected(elements):
    outcome = elements.create({"element_id": "x", "element_type": "marquee"})
    assert "element_type" in outcome.errors


def test_update_value_but_not_identifier(elements):
    element = elements.create({"element_id": "title", "element_type": "h1"}).record

    assert elements.update(element.internal_id, {"value": "Welcome"}).ok
    assert elements.get(element.internal_id).value == "Welcome"

    outcome = elements.update(element.internal_id, {"element_id": "renamed"})
    assert outcome.errors == {"element_id": ["This field cannot be changed."]}


def test_delete_confirmation_quotes_element_id(elements):
    element = elements.create({"element_id": "cta", "element_type": "a"}).record
    request = elements.request_delete(element.internal_id)
    assert '"cta"' in request.description
    request.confirm()
    assert elements.all() == []


def test_elements_are_stored_with_camel_case_keys(elements, store):
    element = elements.create({"element_id": "name", "element_type": "input", "value": "Ada"}).record
    assert json.loads(store.get_item(STORAGE_KEY)) == [
        {
            "internalId": element.internal_id,
            "elementId": "name",
            "elementType": "input",
            "value": "Ada",
        }
    ]


def test_download_notifies_and_matches_storage(elements, store, notifier):
    elements.create({"element_id": "go", "element_type": "button"})
    artifact = elements.download()

    assert artifact.filename == "webauto-elements.json"
    assert artifact.content.decode("utf-8") == store.get_item(STORAGE_KEY)
    assert notifier.last.title == "Download Started"
    assert notifier.last.description == "Your JSON file is being downloaded."


def test_download_of_empty_collection_is_refused(elements):
    with pytest.raises(ValueError):
        elements.download()
