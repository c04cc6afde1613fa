"""Error types raised by the card_proxy_pdf pipeline."""
from __future__ import annotations

from typing import Dict, Iterable, List


class CardProxyError(Exception):
    """Base class for every user-facing failure of a run."""


class CacheError(CardProxyError):
    """The local cache could not be read or written."""


class NetworkError(CardProxyError):
    """A remote request failed, timed out or returned a non-success status."""


class DecodeError(CardProxyError):
    """Input data (catalog JSON, deck XML, image bytes) could not be decoded."""


class UnsupportedImageError(DecodeError):
    """A downloaded asset is not one of the supported image formats."""

    def __init__(self, asset_name: str, detected_type: str) -> None:
        super().__init__(f"unsupported image type for {asset_name}: {detected_type}")
        self.asset_name = asset_name
        self.detected_type = detected_type


class UnresolvedIdentifierError(CardProxyError):
    """One or more deck identifiers have no entry in the card mapping."""

    def __init__(self, identifiers: Iterable[str]) -> None:
        self.identifiers: List[str] = list(identifiers)
        super().__init__(
            f"no card image known for identifier(s): {', '.join(self.identifiers)}"
        )


class AggregateFetchError(CardProxyError):
    """
    Combined failure of the concurrent image prefetch.

    `failures` maps every asset name that could not be fetched to the
    exception that stopped it.
    """

    def __init__(self, failures: Dict[str, BaseException]) -> None:
        self.failures = dict(sorted(failures.items()))
        details = "; ".join(f"{name} ({error})" for name, error in self.failures.items())
        super().__init__(f"error(s) fetching images: {details}")


class EmptyDeckError(CardProxyError):
    """The deck does not contain a single card copy to print."""


class OutputError(CardProxyError):
    """The output document could not be written."""
