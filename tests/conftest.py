"""Shared fixtures for card_proxy_pdf tests."""
from __future__ import annotations

import json
from io import BytesIO
from pathlib import Path
from typing import Dict, Iterable, Tuple

import pytest
from PIL import Image

from card_proxy_pdf.cache_store import CacheStore
from card_proxy_pdf.config import METADATA_FILE, AppConfig

CATALOG_URL = "http://ringsdb.com/api/public/cards/"
IMAGE_URL = "http://ringsdb.com/bundles/cards/"


def make_image(fmt: str = "PNG", color: Tuple[int, int, int] = (200, 30, 30)) -> bytes:
    """Small in-memory image in the given Pillow format."""
    buffer = BytesIO()
    Image.new("RGB", (8, 11), color).save(buffer, format=fmt)
    return buffer.getvalue()


def deck_xml(cards: Iterable[Tuple[str, int]], section: str = "Hero") -> bytes:
    lines = ['<?xml version="1.0" encoding="utf-8" standalone="yes"?>', '<deck game="a21af4e8">']
    lines.append(f'  <section name="{section}" shared="False">')
    for identifier, qty in cards:
        lines.append(f'    <card qty="{qty}" id="{identifier}">Card {identifier}</card>')
    lines.append("  </section>")
    lines.append("</deck>")
    return "\n".join(lines).encode("utf-8")


def catalog_body(mapping: Dict[str, str]) -> list:
    return [
        {"octgnid": identifier, "name": f"Card {identifier}", "imagesrc": f"/bundles/cards/{name}"}
        for identifier, name in mapping.items()
    ]


@pytest.fixture
def config(tmp_path: Path) -> AppConfig:
    return AppConfig.default(cache_dir=tmp_path / "cache")


@pytest.fixture
def store(config: AppConfig) -> CacheStore:
    return CacheStore(config.cache_dir)


@pytest.fixture
def png_bytes() -> bytes:
    return make_image("PNG")


@pytest.fixture
def jpeg_bytes() -> bytes:
    return make_image("JPEG", color=(30, 30, 200))


@pytest.fixture
def write_snapshot(store: CacheStore):
    """Persist a mapping as a fresh metadata snapshot."""

    def _write(mapping: Dict[str, str]) -> Path:
        return store.write_file(METADATA_FILE, json.dumps(mapping).encode("utf-8"))

    return _write
