"""PDF generation for card sheets."""
from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Callable, Dict, Iterable, Mapping, Optional, Sequence

from reportlab.lib.pagesizes import letter
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from .cache_store import CacheStore
from .compositor import Page
from .config import AppConfig
from .errors import OutputError
from .image_format import require_supported_format


# Physical sheet (US Letter, portrait)
PAGE_SIZE = letter


@dataclass
class RegisteredImage:
    """A cached image ready to be drawn."""

    name: str
    image_type: str
    reader: ImageReader


def register_images(asset_names: Iterable[str], store: CacheStore) -> Dict[str, RegisteredImage]:
    """
    Load every distinct asset from the cache and check its format.

    Raises:
        CacheError: If a cached image cannot be read
        UnsupportedImageError: If an image is neither JPEG nor PNG
    """
    images: Dict[str, RegisteredImage] = {}
    for name in asset_names:
        if name in images:
            continue
        data = store.read_file(AppConfig.image_key(name))
        image_type = require_supported_format(name, data)
        images[name] = RegisteredImage(name=name, image_type=image_type, reader=ImageReader(BytesIO(data)))
    return images


def write_pages_pdf(
    pages: Sequence[Page],
    images: Mapping[str, RegisteredImage],
    output_path: Path,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> None:
    """
    Write one PDF page per layout page.

    Placements are given in millimetres from the top-left corner; ReportLab
    measures from the bottom-left, so y is flipped here.

    Args:
        pages: Pages from the compositor
        images: Registered images by asset name
        output_path: Path to write the PDF to
        progress_callback: Optional callback(current_page, total_pages)

    Raises:
        OutputError: If the output folder or file cannot be written
    """
    _, page_height = PAGE_SIZE
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputError(f"could not create output folder {output_path.parent}: {e}") from e

    c = canvas.Canvas(str(output_path), pagesize=PAGE_SIZE)
    c.setTitle(output_path.stem)

    for page in pages:
        if progress_callback is not None:
            progress_callback(page.index + 1, len(pages))

        for placement in page.placements:
            c.drawImage(
                images[placement.asset_name].reader,
                placement.x * mm,
                page_height - (placement.y + placement.height) * mm,
                width=placement.width * mm,
                height=placement.height * mm,
                mask="auto",  # Respect transparent corners (e.g., PNG with alpha)
            )

        c.showPage()

    try:
        c.save()
    except OSError as e:
        raise OutputError(f"could not write PDF {output_path}: {e}") from e


def get_file_size_str(file_path: Path) -> str:
    """
    Get a human-readable file size string.

    Args:
        file_path: Path to the file

    Returns:
        Size string like "1.5 MB" or "256 KB"
    """
    file_size = file_path.stat().st_size
    if file_size >= 1024 * 1024:
        return f"{file_size / (1024 * 1024):.1f} MB"
    else:
        return f"{file_size / 1024:.1f} KB"
