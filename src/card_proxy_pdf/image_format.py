"""Detecting the format of downloaded card images."""
from __future__ import annotations

from io import BytesIO

from PIL import Image, UnidentifiedImageError

from .errors import UnsupportedImageError

# Formats the PDF renderer accepts, as reported by Pillow
SUPPORTED_FORMATS = {"JPEG", "PNG"}


def detect_format(data: bytes) -> str:
    """
    Sniff the image format from the byte stream.

    Returns Pillow's format name (e.g. ``"PNG"``), or ``"unknown"`` when the
    bytes are not a recognised image.
    """
    try:
        with Image.open(BytesIO(data)) as img:
            return img.format or "unknown"
    except (UnidentifiedImageError, OSError):
        return "unknown"


def require_supported_format(asset_name: str, data: bytes) -> str:
    """
    Return the format of `data`, which must be JPEG or PNG.

    Raises:
        UnsupportedImageError: Naming the detected type otherwise
    """
    detected = detect_format(data)
    if detected not in SUPPORTED_FORMATS:
        raise UnsupportedImageError(asset_name, detected)
    return detected
