"""Placement of card images on fixed 3x3 pages."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .deck_reader import DeckEntry


# Card dimensions and spacing (in millimetres)
CARD_WIDTH = 63.5
CARD_HEIGHT = 88.0
LEFT_PADDING = 4.0
SPACING = 4.0

# Grid layout
GRID_ROWS = 3
GRID_COLS = 3
CARDS_PER_PAGE = GRID_ROWS * GRID_COLS


@dataclass(frozen=True)
class Placement:
    """
    One card image on a page.

    `x` and `y` are the top-left corner in millimetres, measured from the
    top-left corner of the page.
    """

    asset_name: str
    page_index: int
    row: int
    col: int
    x: float
    y: float
    width: float = CARD_WIDTH
    height: float = CARD_HEIGHT


@dataclass(frozen=True)
class Page:
    index: int
    placements: Tuple[Placement, ...]


def expand_images(deck: Sequence[DeckEntry]) -> List[str]:
    """One asset name per printed copy, in deck order."""
    images: List[str] = []
    for entry in deck:
        images.extend([entry.asset_name] * entry.quantity)
    return images


def chunk_images(images: Sequence[str], size: int = CARDS_PER_PAGE) -> List[List[str]]:
    """Split into consecutive groups of at most `size`; the last may be shorter."""
    return [list(images[i : i + size]) for i in range(0, len(images), size)]


def slot_position(row: int, col: int) -> Tuple[float, float]:
    """Top-left corner of grid slot (row, col)."""
    x = LEFT_PADDING + SPACING * (col + 1) + CARD_WIDTH * col
    y = SPACING * (row + 1) + CARD_HEIGHT * row
    return x, y


def layout_page(index: int, images: Sequence[str]) -> Page:
    """
    Place up to nine images row by row.

    Raises:
        ValueError: If more images are given than a page holds
    """
    if len(images) > CARDS_PER_PAGE:
        raise ValueError(f"too many images to render ({len(images)} > {CARDS_PER_PAGE})")

    placements = []
    for idx, asset_name in enumerate(images):
        row = idx // GRID_COLS
        col = idx % GRID_COLS
        x, y = slot_position(row, col)
        placements.append(Placement(asset_name, index, row, col, x, y))
    return Page(index=index, placements=tuple(placements))


def layout_deck(deck: Sequence[DeckEntry]) -> List[Page]:
    """Expand, paginate and place every copy of every card in `deck`."""
    chunks = chunk_images(expand_images(deck))
    return [layout_page(index, chunk) for index, chunk in enumerate(chunks)]
