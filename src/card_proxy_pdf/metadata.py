"""Identifier -> image asset mapping, served from cache or the catalog."""
from __future__ import annotations

import json
import logging
import time
from datetime import timedelta
from types import MappingProxyType
from typing import Callable, Dict, Iterable, Mapping, Optional

from .cache_store import CacheStore
from .catalog_client import CatalogClient, CatalogEntry
from .config import METADATA_FILE, METADATA_TTL
from .errors import CacheError

LOGGER = logging.getLogger(__name__)


def build_mapping(entries: Iterable[CatalogEntry]) -> Dict[str, str]:
    """
    Build the identifier -> asset name table.

    A repeated identifier keeps the asset name of its last occurrence.
    """
    mapping: Dict[str, str] = {}
    duplicates = 0
    for entry in entries:
        if entry.identifier in mapping:
            duplicates += 1
        mapping[entry.identifier] = entry.asset_name
    if duplicates:
        LOGGER.warning("catalog contains %d duplicate identifier(s); last entry wins", duplicates)
    return mapping


def decode_snapshot(data: bytes) -> Dict[str, str]:
    """Decode a persisted mapping; raises ValueError if it is not a str -> str object."""
    payload = json.loads(data)
    if not isinstance(payload, dict):
        raise ValueError(f"expected a JSON object, got {type(payload).__name__}")
    for key, value in payload.items():
        if not isinstance(value, str):
            raise ValueError(f"value for {key!r} is not a string")
    return payload


class MetadataResolver:
    """
    Serves the card mapping for one run.

    A snapshot younger than `ttl` is returned without touching the network.
    Otherwise the catalog is fetched once and the result is written back to
    the cache on a best-effort basis.
    """

    def __init__(
        self,
        store: CacheStore,
        client: CatalogClient,
        ttl: timedelta = METADATA_TTL,
        clock: Callable[[], float] = time.time,
        key: str = METADATA_FILE,
    ) -> None:
        self.store = store
        self.client = client
        self.ttl = ttl
        self.clock = clock
        self.key = key

    def resolve(self) -> Mapping[str, str]:
        """
        Return the mapping, refreshing it from the catalog when needed.

        Raises:
            NetworkError: If the catalog cannot be fetched
            DecodeError: If the catalog response cannot be decoded
        """
        mapping = self.load_snapshot()
        if mapping is not None:
            return MappingProxyType(mapping)

        LOGGER.info("fetching metadata from %s", self.client.config.catalog_url)
        mapping = build_mapping(self.client.fetch_catalog())
        try:
            self.save_snapshot(mapping)
        except CacheError as e:
            LOGGER.warning("failed saving metadata to cache: %s", e)
        return MappingProxyType(mapping)

    def load_snapshot(self) -> Optional[Dict[str, str]]:
        """Cached mapping, or None if it is missing, stale or unreadable."""
        if not self.store.exists(self.key):
            return None

        try:
            age = self.clock() - self.store.modified_time(self.key)
            if age > self.ttl.total_seconds():
                LOGGER.debug("cached metadata is %.1f hours old, out of date", age / 3600)
                return None
            data = self.store.read_file(self.key)
        except CacheError as e:
            LOGGER.warning("failed loading metadata from cache: %s", e)
            return None

        try:
            mapping = decode_snapshot(data)
        except ValueError as e:
            LOGGER.warning("failed loading metadata from cache: %s", e)
            return None

        LOGGER.info("loaded card metadata from cache")
        return mapping

    def save_snapshot(self, mapping: Mapping[str, str]) -> None:
        data = json.dumps(dict(mapping), sort_keys=True).encode("utf-8")
        self.store.write_file(self.key, data)
        LOGGER.info("saved card metadata to cache")
