"""Concurrent download of card images missing from the local cache."""
from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Dict, List, Optional, Sequence

from rich.progress import Progress

from .cache_store import CacheStore
from .catalog_client import CatalogClient
from .config import AppConfig
from .deck_reader import DeckEntry
from .errors import AggregateFetchError

LOGGER = logging.getLogger(__name__)


def distinct_assets(deck: Sequence[DeckEntry]) -> List[str]:
    """Asset names referenced by the deck, first occurrence order, no repeats."""
    return list(dict.fromkeys(entry.asset_name for entry in deck))


class ImagePrefetcher:
    """
    Makes sure every image of a deck is present in the cache.

    Each missing asset is downloaded by its own worker thread; there is no
    cap on the number of workers. `prefetch` only returns once every worker
    has finished.
    """

    def __init__(self, store: CacheStore, client: CatalogClient) -> None:
        self.store = store
        self.client = client

    def missing_assets(self, deck: Sequence[DeckEntry]) -> List[str]:
        return [
            name
            for name in distinct_assets(deck)
            if not self.store.exists(AppConfig.image_key(name))
        ]

    def prefetch(
        self,
        deck: Sequence[DeckEntry],
        progress: Optional[Progress] = None,
    ) -> List[str]:
        """
        Download and cache the missing images of `deck`.

        Args:
            deck: Resolved deck entries
            progress: Rich Progress instance for progress display

        Returns:
            Names of the assets that were fetched, in completion order

        Raises:
            AggregateFetchError: If one or more assets failed; the other
                assets are still cached
        """
        missing = self.missing_assets(deck)
        if not missing:
            return []

        task_id = None
        if progress is not None:
            task_id = progress.add_task("[cyan]Downloading images...", total=len(missing))

        fetched: List[str] = []
        failures: Dict[str, BaseException] = {}
        with ThreadPoolExecutor(max_workers=len(missing), thread_name_prefix="prefetch") as pool:
            futures: Dict[Future, str] = {
                pool.submit(self._fetch_one, name): name for name in missing
            }
            # Results are drained here, on the calling thread, as workers finish
            for future in as_completed(futures):
                name = futures[future]
                try:
                    future.result()
                except Exception as e:
                    failures[name] = e
                else:
                    fetched.append(name)
                    LOGGER.info("Fetched %s to cache", name)
                if progress is not None and task_id is not None:
                    progress.update(task_id, advance=1)

        if failures:
            raise AggregateFetchError(failures)
        return fetched

    def _fetch_one(self, asset_name: str) -> None:
        data = self.client.fetch_image(asset_name)
        self.store.write_file(AppConfig.image_key(asset_name), data)
