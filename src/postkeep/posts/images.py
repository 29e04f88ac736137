"""Reading image files into embeddable data URLs."""

from __future__ import annotations

import base64
import mimetypes
from pathlib import Path


def encode_image_file(path: str | Path) -> str:
    """
    Read an image from disk and return it as a ``data:`` URL.

    Raises ``ValueError`` when the file does not look like an image and
    ``OSError`` when it cannot be read.
    """

    file_path = Path(path)
    media_type, _ = mimetypes.guess_type(file_path.name)
    if media_type is None or not media_type.startswith("image/"):
        raise ValueError(f"'{file_path.name}' is not a recognised image file.")
    encoded = base64.b64encode(file_path.read_bytes()).decode("ascii")
    return f"data:{media_type};base64,{encoded}"

