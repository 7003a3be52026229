"""
core/utils.py - Pure helpers for embedded image payloads and file names.
"""

import base64
import binascii
import mimetypes
import os
import re
from typing import Optional, Tuple


_DATA_URI_RE = re.compile(r"^data:image/([a-zA-Z0-9.\-+]+);base64,(.+)$", re.DOTALL)

_EXTENSIONS = {
    "jpeg": "jpg",
    "jpg": "jpg",
    "png": "png",
    "bmp": "bmp",
    "x-ms-bmp": "bmp",
    "gif": "gif",
}


def is_image_data_uri(content: str) -> bool:
    return bool(content) and content.startswith("data:image")


def image_data_uri(path: str) -> str:
    """
    Read an image file into a ``data:image/<subtype>;base64,...`` URI, the
    form image elements keep in ``content``.

    Raises ValueError when the file type is not an image.
    """
    mime, _enc = mimetypes.guess_type(path)
    if not mime or not mime.startswith("image/"):
        raise ValueError(f"Not an image file: {path}")
    with open(path, "rb") as f:
        payload = base64.b64encode(f.read()).decode("ascii")
    return f"data:{mime};base64,{payload}"


def decode_image_data_uri(content: str) -> Optional[Tuple[bytes, str]]:
    """
    Decode a ``data:image/<subtype>;base64,...`` URI.

    Returns ``(raw_bytes, extension)`` or ``None`` when the URI is malformed.
    Unknown subtypes get the ``bin`` extension.
    """
    if not content:
        return None
    m = _DATA_URI_RE.match(content)
    if not m:
        return None
    subtype = m.group(1).lower()
    try:
        data = base64.b64decode(m.group(2), validate=True)
    except (binascii.Error, ValueError):
        return None
    return data, _EXTENSIONS.get(subtype, "bin")


def image_file_stem(variable_name: Optional[str], element_id: str) -> str:
    """
    Base file name for an exported image: the variable name without any
    directory or extension, falling back to ``img_<id>``.
    """
    fallback = f"img_{element_id}"
    raw = variable_name or fallback
    # split on both separators regardless of platform
    raw = re.split(r"[\\/]", raw)[-1] or fallback
    stem, _ext = os.path.splitext(raw)
    return stem or raw
