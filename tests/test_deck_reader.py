from __future__ import annotations

import pytest

from card_proxy_pdf.deck_reader import DeckCard, DeckEntry, parse_deck, read_deck_file, resolve_deck
from card_proxy_pdf.errors import DecodeError, UnresolvedIdentifierError

from conftest import deck_xml

SAMPLE_DECK = b"""<?xml version="1.0" encoding="utf-8" standalone="yes"?>
<deck game="a21af4e8-be4b-4cda-a6b6-534f9717391f">
  <section name="Hero" shared="False">
    <card qty="1" id="51223bd0-ffd1-11df-a976-0801200c9001">Aragorn</card>
    <card qty="1" id="51223bd0-ffd1-11df-a976-0801200c9002">Gloin</card>
  </section>
  <section name="Ally" shared="False">
    <card qty="3" id="51223bd0-ffd1-11df-a976-0801200c9016">Guard of the Citadel</card>
  </section>
  <section name="Quest" shared="True" />
</deck>
"""


def test_parse_deck_flattens_sections_in_order():
    cards = parse_deck(SAMPLE_DECK)

    assert cards == [
        DeckCard("51223bd0-ffd1-11df-a976-0801200c9001", 1, "Aragorn"),
        DeckCard("51223bd0-ffd1-11df-a976-0801200c9002", 1, "Gloin"),
        DeckCard("51223bd0-ffd1-11df-a976-0801200c9016", 3, "Guard of the Citadel"),
    ]


@pytest.mark.parametrize(
    "xml",
    [
        b"<deck><section>",
        b'<deck><section><card qty="two" id="x">X</card></section></deck>',
        b'<deck><section><card qty="0" id="x">X</card></section></deck>',
        b'<deck><section><card qty="1">X</card></section></deck>',
    ],
)
def test_parse_deck_rejects_bad_input(xml):
    with pytest.raises(DecodeError):
        parse_deck(xml)


def test_read_deck_file(tmp_path):
    path = tmp_path / "deck.o8d"
    path.write_bytes(deck_xml([("a-1", 2)]))

    assert read_deck_file(path) == [DeckCard("a-1", 2, "Card a-1")]


def test_read_missing_deck_file(tmp_path):
    with pytest.raises(DecodeError, match="could not read deck file"):
        read_deck_file(tmp_path / "missing.o8d")


def test_resolve_deck_fills_asset_names():
    cards = [DeckCard("a-1", 2), DeckCard("b-2", 1)]

    entries = resolve_deck(cards, {"a-1": "01001.png", "b-2": "01002.jpg"})

    assert entries == [DeckEntry("a-1", 2, "01001.png"), DeckEntry("b-2", 1, "01002.jpg")]


def test_resolve_deck_reports_every_unresolved_identifier():
    cards = [DeckCard("a-1", 1), DeckCard("zz", 1), DeckCard("no-image", 1), DeckCard("zz", 2)]

    with pytest.raises(UnresolvedIdentifierError) as excinfo:
        resolve_deck(cards, {"a-1": "01001.png", "no-image": ""})

    assert excinfo.value.identifiers == ["zz", "no-image"]
    assert "zz, no-image" in str(excinfo.value)
