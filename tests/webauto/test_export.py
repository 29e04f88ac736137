import json

import pytest

from postkeep.persistence import Repository
from postkeep.storage import InMemoryStore
from postkeep.webauto import EXPORT_FILENAME, WebElement, export_elements


def test_export_writes_json_file(tmp_path):
    repository = Repository(WebElement, InMemoryStore(), "webauto-elements")
    elements = [
        WebElement(element_id="a1", element_type="button", value="Go"),
        WebElement(element_id="a2", element_type="img"),
    ]
    artifact = export_elements(repository, elements)
    assert artifact.media_type == "application/json"

    path = artifact.write_to(tmp_path)
    assert path.name == EXPORT_FILENAME
    data = json.loads(path.read_text(encoding="utf-8"))
    assert [item["elementId"] for item in data] == ["a1", "a2"]
    assert data[1]["value"] == ""


def test_export_rejects_empty_list():
    repository = Repository(WebElement, InMemoryStore(), "webauto-elements")
    with pytest.raises(ValueError):
        export_elements(repository, [])
