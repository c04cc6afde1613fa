"""High-level API: deck file in, printable card sheet PDF out."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from rich.progress import Progress

from .cache_store import CacheStore
from .catalog_client import CatalogClient
from .compositor import Page, layout_deck
from .config import AppConfig
from .deck_reader import DeckEntry, read_deck_file, resolve_deck
from .errors import EmptyDeckError
from .metadata import MetadataResolver
from .pdf_generator import register_images, write_pages_pdf
from .prefetch import ImagePrefetcher, distinct_assets

LOGGER = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """What a successful build produced."""

    output_path: Path
    deck: List[DeckEntry]
    pages: List[Page]
    fetched: List[str] = field(default_factory=list)

    @property
    def card_count(self) -> int:
        return sum(entry.quantity for entry in self.deck)

    @property
    def page_count(self) -> int:
        return len(self.pages)


def build_proxy_pdf(
    deck_path: Path,
    output_path: Path,
    config: AppConfig | None = None,
    progress: Optional[Progress] = None,
) -> BuildResult:
    """
    High-level helper:
    - Resolves the card mapping (cache first, catalog otherwise)
    - Reads the deck and resolves every card to an image
    - Downloads the images missing from the cache
    - Writes a single PDF with 3x3 layout

    Each step raises on a fatal error, so later steps never run on bad input.

    Args:
        deck_path: Path to the ``.o8d`` deck file
        output_path: Path to the output PDF file
        config: Run configuration (default: per-user cache folder)
        progress: Rich Progress instance for progress display

    Raises:
        CardProxyError: Any unrecovered failure of the run
    """
    config = config or AppConfig.default()
    store = CacheStore(config.cache_dir)
    client = CatalogClient(config)

    mapping = MetadataResolver(store, client, ttl=config.metadata_ttl).resolve()

    deck = resolve_deck(read_deck_file(deck_path), mapping)
    if not deck:
        raise EmptyDeckError(f"deck {deck_path} contains no cards")
    LOGGER.debug("deck has %d entries, %d distinct images", len(deck), len(distinct_assets(deck)))

    fetched = ImagePrefetcher(store, client).prefetch(deck, progress=progress)

    pages = layout_deck(deck)
    images = register_images(distinct_assets(deck), store)

    task_id = None
    if progress is not None:
        task_id = progress.add_task("[green]Writing PDF pages...", total=len(pages))

    def on_page(page_num: int, total_pages: int) -> None:
        if progress is not None and task_id is not None:
            progress.update(
                task_id,
                advance=1,
                description=f"[green]Writing page [bold]{page_num}/{total_pages}[/bold]...",
            )

    write_pages_pdf(pages, images, output_path, progress_callback=on_page)

    return BuildResult(output_path=output_path, deck=deck, pages=pages, fetched=fetched)
