"""
JSON download of the element collection.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from ..persistence import Repository
from .models import WebElement

EXPORT_FILENAME = "webauto-elements.json"


@dataclass(frozen=True)
class DownloadArtifact:
    filename: str
    content: bytes
    media_type: str = "application/json"

    def write_to(self, directory: str | Path) -> Path:
        target = Path(directory) / self.filename
        target.write_bytes(self.content)
        return target


def export_elements(
    repository: Repository[WebElement], elements: Sequence[WebElement]
) -> DownloadArtifact:
    """
    Serialize ``elements`` exactly as the repository persists them.

    Raises ``ValueError`` for an empty collection; there is nothing to download.
    """

    if not elements:
        raise ValueError("There are no elements to download.")
    content = repository.dumps(elements).encode("utf-8")
    return DownloadArtifact(filename=EXPORT_FILENAME, content=content)
