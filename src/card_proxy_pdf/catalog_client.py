"""HTTP access to the remote card catalog and its image files."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import List

import requests

from .config import AppConfig
from .errors import DecodeError, NetworkError

LOGGER = logging.getLogger(__name__)

# Field names in the catalog JSON
ID_FIELD = "octgnid"
IMAGE_FIELD = "imagesrc"


@dataclass(frozen=True)
class CatalogEntry:
    """One card of the remote catalog, reduced to what the pipeline needs."""

    identifier: str
    asset_name: str


def strip_image_prefix(image_src: str, prefix: str) -> str:
    """
    Keep only the trailing file name of an image location.

    Only the final name is stored so it can be joined into a download URL
    or a cache path alike.
    """
    if image_src.startswith(prefix):
        return image_src[len(prefix):]
    return image_src


def parse_catalog(body: bytes, prefix: str) -> List[CatalogEntry]:
    """
    Decode the catalog response body.

    Raises:
        DecodeError: If the body is not a JSON array of objects
    """
    try:
        payload = json.loads(body)
    except ValueError as e:
        raise DecodeError(f"catalog is not valid JSON: {e}") from e
    if not isinstance(payload, list):
        raise DecodeError(f"catalog must be a JSON array, got {type(payload).__name__}")

    entries: List[CatalogEntry] = []
    skipped = 0
    for index, item in enumerate(payload):
        if not isinstance(item, dict):
            raise DecodeError(f"catalog entry {index} is not an object")
        identifier = item.get(ID_FIELD)
        if not identifier:
            skipped += 1
            continue
        image_src = item.get(IMAGE_FIELD) or ""
        if not isinstance(identifier, str) or not isinstance(image_src, str):
            raise DecodeError(f"catalog entry {index} has non-string fields")
        entries.append(CatalogEntry(identifier, strip_image_prefix(image_src, prefix)))

    if skipped:
        LOGGER.debug("skipped %d catalog entries without %s", skipped, ID_FIELD)
    return entries


class CatalogClient:
    """Single-attempt GET requests against the catalog site."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def get_bytes(self, url: str) -> bytes:
        """
        Fetch `url` and return the response body.

        Raises:
            NetworkError: On transport failure, timeout or non-2xx status
        """
        try:
            response = requests.get(url, timeout=self.config.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise NetworkError(f"GET {url} failed: {e}") from e
        return response.content

    def fetch_catalog(self) -> List[CatalogEntry]:
        body = self.get_bytes(self.config.catalog_url)
        return parse_catalog(body, self.config.image_prefix)

    def fetch_image(self, asset_name: str) -> bytes:
        return self.get_bytes(self.config.image_url(asset_name))
