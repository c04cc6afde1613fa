"""
Package initialization for card_proxy_pdf.

This package turns an OCTGN deck list into a printable PDF of card images,
using the ringsdb.com catalog as the source of card images and a local
per-user cache to avoid repeated downloads.

Modules:
    - config: Run configuration and cache location
    - cache_store: Key-value file cache
    - catalog_client: HTTP access to the catalog and card images
    - metadata: Identifier -> image mapping with a 24 hour cache
    - deck_reader: OCTGN deck parsing and card resolution
    - prefetch: Concurrent download of missing images
    - compositor: 3x3 page placement of card copies
    - pdf_generator: PDF generation for card sheets
    - layout: High-level API orchestrating the above modules
"""

from .config import AppConfig
from .errors import (
    AggregateFetchError,
    CacheError,
    CardProxyError,
    DecodeError,
    EmptyDeckError,
    NetworkError,
    OutputError,
    UnresolvedIdentifierError,
    UnsupportedImageError,
)
from .layout import BuildResult, build_proxy_pdf

__all__ = [
    "AppConfig",
    "BuildResult",
    "build_proxy_pdf",
    "CardProxyError",
    "CacheError",
    "NetworkError",
    "DecodeError",
    "UnsupportedImageError",
    "UnresolvedIdentifierError",
    "AggregateFetchError",
    "EmptyDeckError",
    "OutputError",
]
