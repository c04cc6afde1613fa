from __future__ import annotations

import pytest

from card_proxy_pdf.compositor import layout_deck
from card_proxy_pdf.config import AppConfig
from card_proxy_pdf.deck_reader import DeckEntry
from card_proxy_pdf.errors import CacheError, OutputError, UnsupportedImageError
from card_proxy_pdf.image_format import detect_format, require_supported_format
from card_proxy_pdf.pdf_generator import get_file_size_str, register_images, write_pages_pdf

from conftest import make_image


def test_detect_format(png_bytes, jpeg_bytes):
    assert detect_format(png_bytes) == "PNG"
    assert detect_format(jpeg_bytes) == "JPEG"
    assert detect_format(b"<html>not an image</html>") == "unknown"


def test_unsupported_format_names_detected_type():
    with pytest.raises(UnsupportedImageError) as excinfo:
        require_supported_format("01001.gif", make_image("GIF"))

    assert excinfo.value.detected_type == "GIF"
    assert "GIF" in str(excinfo.value)
    assert "01001.gif" in str(excinfo.value)


def test_register_images_reads_each_asset_once(store, png_bytes, jpeg_bytes, monkeypatch):
    store.write_file(AppConfig.image_key("a.png"), png_bytes)
    store.write_file(AppConfig.image_key("b.jpg"), jpeg_bytes)
    reads = []
    original = store.read_file

    def counting_read(key):
        reads.append(key)
        return original(key)

    monkeypatch.setattr(store, "read_file", counting_read)

    images = register_images(["a.png", "b.jpg", "a.png"], store)

    assert {name: img.image_type for name, img in images.items()} == {"a.png": "PNG", "b.jpg": "JPEG"}
    assert reads == ["images/a.png", "images/b.jpg"]


def test_register_missing_image_is_cache_error(store):
    with pytest.raises(CacheError):
        register_images(["missing.png"], store)


def test_write_pages_pdf(tmp_path, store, png_bytes, jpeg_bytes):
    store.write_file(AppConfig.image_key("a.png"), png_bytes)
    store.write_file(AppConfig.image_key("b.jpg"), jpeg_bytes)
    deck = [DeckEntry("a", 5, "a.png"), DeckEntry("b", 6, "b.jpg")]
    pages = layout_deck(deck)
    calls = []

    output = tmp_path / "out" / "deck.pdf"
    write_pages_pdf(
        pages,
        register_images(["a.png", "b.jpg"], store),
        output,
        progress_callback=lambda page, total: calls.append((page, total)),
    )

    assert output.read_bytes().startswith(b"%PDF")
    assert calls == [(1, 2), (2, 2)]
    assert get_file_size_str(output).endswith("KB")


def test_write_to_directory_is_output_error(tmp_path, store, png_bytes):
    store.write_file(AppConfig.image_key("a.png"), png_bytes)
    pages = layout_deck([DeckEntry("a", 1, "a.png")])
    output = tmp_path / "outdir"
    output.mkdir()

    with pytest.raises(OutputError, match="could not write PDF"):
        write_pages_pdf(pages, register_images(["a.png"], store), output)


def test_output_folder_blocked_by_file_is_output_error(tmp_path, store, png_bytes):
    store.write_file(AppConfig.image_key("a.png"), png_bytes)
    pages = layout_deck([DeckEntry("a", 1, "a.png")])
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")

    with pytest.raises(OutputError, match="could not create output folder"):
        write_pages_pdf(pages, register_images(["a.png"], store), blocker / "deck.pdf")
