"""Reading OCTGN deck files and resolving their cards to image assets."""
from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Sequence

from .errors import DecodeError, UnresolvedIdentifierError


@dataclass(frozen=True)
class DeckCard:
    """A card line of the deck file, before resolution."""

    identifier: str
    quantity: int
    name: str = ""


@dataclass(frozen=True)
class DeckEntry:
    """A deck line with its image asset resolved."""

    identifier: str
    quantity: int
    asset_name: str


def parse_deck(data: bytes) -> List[DeckCard]:
    """
    Parse the XML of an ``.o8d`` deck.

    Layout::

        <deck game="...">
          <section name="Hero">
            <card qty="1" id="51223bd0-...">Aragorn</card>
          </section>
        </deck>

    All sections are flattened in document order.

    Raises:
        DecodeError: On malformed XML, a missing id or an invalid quantity
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise DecodeError(f"deck is not valid XML: {e}") from e

    cards: List[DeckCard] = []
    for section in root.iter("section"):
        for card in section.iter("card"):
            identifier = (card.get("id") or "").strip()
            name = (card.text or "").strip()
            if not identifier:
                raise DecodeError(f"card {name!r} has no id attribute")
            raw_qty = card.get("qty", "")
            try:
                quantity = int(raw_qty)
            except ValueError:
                raise DecodeError(f"card {identifier} has invalid qty {raw_qty!r}") from None
            if quantity <= 0:
                raise DecodeError(f"card {identifier} has non-positive qty {quantity}")
            cards.append(DeckCard(identifier=identifier, quantity=quantity, name=name))
    return cards


def read_deck_file(path: Path) -> List[DeckCard]:
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise DecodeError(f"could not read deck file {path}: {e}") from e
    return parse_deck(data)


def resolve_deck(cards: Sequence[DeckCard], mapping: Mapping[str, str]) -> List[DeckEntry]:
    """
    Attach an asset name to every card.

    Raises:
        UnresolvedIdentifierError: Listing every identifier without an asset
    """
    unresolved: List[str] = []
    entries: List[DeckEntry] = []
    for card in cards:
        asset_name = mapping.get(card.identifier, "")
        if not asset_name:
            if card.identifier not in unresolved:
                unresolved.append(card.identifier)
            continue
        entries.append(DeckEntry(card.identifier, card.quantity, asset_name))

    if unresolved:
        raise UnresolvedIdentifierError(unresolved)
    return entries
