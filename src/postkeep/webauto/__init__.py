"""
Webauto helper: user-defined UI elements, preview rendering and JSON export.
"""

from .export import EXPORT_FILENAME, DownloadArtifact, export_elements
from .manager import ElementManager
from .models import ELEMENT_TYPE_LABELS, ELEMENT_TYPES, WebElement
from .renderer import RENDERERS, Widget, render_element, render_preview

STORAGE_KEY = "webauto-elements"

__all__ = [
    "DownloadArtifact",
    "ELEMENT_TYPES",
    "ELEMENT_TYPE_LABELS",
    "EXPORT_FILENAME",
    "ElementManager",
    "RENDERERS",
    "STORAGE_KEY",
    "WebElement",
    "Widget",
    "export_elements",
    "render_element",
    "render_preview",
]
