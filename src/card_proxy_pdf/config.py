"""Run configuration and cache location helpers."""
from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path


VENDOR_NAME = "xdg.me"
APP_NAME = "cardproxypdf"

CATALOG_URL = "http://ringsdb.com/api/public/cards/"
SITE_URL = "http://ringsdb.com"
IMAGE_PREFIX = "/bundles/cards/"

# Cache keys, relative to the cache directory
METADATA_FILE = "carddb.json"
IMAGE_FOLDER = "images"

REQUEST_TIMEOUT = 5.0
METADATA_TTL = timedelta(hours=24)


def find_cache_dir(vendor: str = VENDOR_NAME, app: str = APP_NAME) -> Path:
    """
    Find the per-user cache folder for `vendor`/`app`.

    - Linux and other Unix: $XDG_CACHE_HOME or ~/.cache
    - macOS: ~/Library/Caches
    - Windows: %LOCALAPPDATA%

    The folder is not created here; the cache store creates it on first write.
    """
    if sys.platform == "win32":
        base = Path(os.environ.get("LOCALAPPDATA") or Path.home() / "AppData" / "Local")
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Caches"
    else:
        base = Path(os.environ.get("XDG_CACHE_HOME") or Path.home() / ".cache")
    return base / vendor / app


@dataclass(frozen=True)
class AppConfig:
    """Everything a run needs to know about where data lives."""

    cache_dir: Path
    catalog_url: str = CATALOG_URL
    site_url: str = SITE_URL
    image_prefix: str = IMAGE_PREFIX
    timeout: float = REQUEST_TIMEOUT
    metadata_ttl: timedelta = METADATA_TTL

    @classmethod
    def default(cls, cache_dir: Path | None = None) -> "AppConfig":
        return cls(cache_dir=Path(cache_dir) if cache_dir is not None else find_cache_dir())

    def image_url(self, asset_name: str) -> str:
        """Remote location of an image asset."""
        return self.site_url.rstrip("/") + self.image_prefix + asset_name

    @staticmethod
    def image_key(asset_name: str) -> str:
        """Cache key of an image asset."""
        return f"{IMAGE_FOLDER}/{asset_name}"
