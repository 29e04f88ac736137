"""
Lifecycle manager for web elements.
"""

from __future__ import annotations

from typing import Any, Dict

from ..lifecycle import LifecycleManager
from ..validation import DuplicateIdentifierError
from .export import DownloadArtifact, export_elements
from .models import WebElement


class ElementManager(LifecycleManager[WebElement]):
    kind = "element"
    label_field = "element_id"

    def check_create(self, values: Dict[str, Any]) -> None:
        element_id = values["element_id"]
        if any(element.element_id == element_id for element in self.collection):
            raise DuplicateIdentifierError("element_id", element_id)

    def download(self) -> DownloadArtifact:
        artifact = export_elements(self.collection.repository, self.all())
        if self.notifier is not None:
            self.notifier.notify("Download Started", "Your JSON file is being downloaded.")
        return artifact
