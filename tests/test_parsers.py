from __future__ import annotations

import pytest

from comline_edge.core.normalize import ProductAttributes
from comline_edge.parsers import categorize, normalize_image_url, parse_attributes

FULL_DESCRIPTION = (
    "CTO Variante der Grundkonfiguration MX2Y3D/A: "
    "#Apple M4 Pro Chip 14‑Core CPU 20‑Core GPU 16-Core NE "
    "#48 GB gemeinsamer Arbeitsspeicher "
    "#4TB SSD Speicher "
    "#140W USB‑C Power Adapter "
    "#Beleuchtetes Magic Keyboard mit Touch ID (britisch) "
    "#Standardglas "
    "##Urheberrechtsabgabe nach §54a UrhG abgeführt und im Kaufpreis enthalten "
    "- Artikel auftragsbezogen bestellt, Stornierung oder Rückgabe ausgeschlossen "
    "- We can not accept a cancellation or return for this build to order configuration."
)


def test_parse_full_description() -> None:
    result = parse_attributes(FULL_DESCRIPTION)

    assert result.base_configuration == "CTO Variante der Grundkonfiguration MX2Y3D/A"
    assert result.processor == "Apple M4 Pro Chip 14‑Core CPU 20‑Core GPU 16-Core NE"
    assert result.memory == "48 GB gemeinsamer Arbeitsspeicher"
    assert result.storage == "4TB SSD Speicher"
    assert result.power_adapter == "140W USB‑C Power Adapter"
    assert result.keyboard == "Beleuchtetes Magic Keyboard mit Touch ID (britisch)"
    assert result.display == "Standardglas"
    assert result.legal == ("Urheberrechtsabgabe nach §54a UrhG abgeführt und im Kaufpreis enthalten",)
    assert result.other == ()


def test_parse_short_scenario() -> None:
    result = parse_attributes("Base: #Apple M4 Pro Chip #48 GB RAM ##Copyright notice")

    assert result.base_configuration == "Base"
    assert result.processor == "Apple M4 Pro Chip"
    assert result.memory == "48 GB RAM"
    assert result.legal == ("Copyright notice",)


@pytest.mark.parametrize("description", [None, "", "   ", "#", "##", "###", "# #  ##\t"])
def test_parse_empty_inputs_give_empty_attributes(description: str | None) -> None:
    result = parse_attributes(description)

    assert result == ProductAttributes()
    assert result.is_empty


def test_description_without_delimiter_is_ignored() -> None:
    assert parse_attributes("CTO Variante der Grundkonfiguration MX2Y3D/A").is_empty


def test_no_base_configuration_when_description_starts_with_delimiter() -> None:
    result = parse_attributes("#Apple M4 Pro Chip #64 GB RAM #2TB SSD Speicher")

    assert result.base_configuration is None
    assert result.processor == "Apple M4 Pro Chip"
    assert result.memory == "64 GB RAM"
    assert result.storage == "2TB SSD Speicher"


def test_base_configuration_only_colon_is_dropped() -> None:
    result = parse_attributes(" : #Standardglas")

    assert result.base_configuration is None
    assert result.display == "Standardglas"


@pytest.mark.parametrize(
    ("slot", "value"),
    [
        ("processor", "Apple M4 Pro Chip 14‑Core CPU"),
        ("processor", "M4 Max Chip"),
        ("processor", "Intel Core i9 Processor"),
        ("processor", "Intel Core Ultra 7"),
        ("processor", "AMD Ryzen 9 CPU"),
        ("processor", "AMD Threadripper 7980X"),
        ("memory", "48 GB gemeinsamer Arbeitsspeicher"),
        ("memory", "64GB RAM"),
        ("memory", "128 GB Memory"),
        ("memory", "16GB Arbeitsspeicher"),
        ("storage", "4TB SSD Speicher"),
        ("storage", "2TB NVMe"),
        ("storage", "512GB SSD"),
        ("storage", "1 TB SSD Storage"),
        ("power_adapter", "140W USB‑C Power Adapter"),
        ("power_adapter", "96W Netzteil"),
        ("power_adapter", "67W USB-C Ladegerät"),
        ("power_adapter", "30W Power Adapter"),
        ("keyboard", "Beleuchtetes Magic Keyboard mit Touch ID (britisch)"),
        ("keyboard", "Magic Keyboard (US)"),
        ("keyboard", "Wireless Keyboard"),
        ("keyboard", "Tastatur QWERTZ"),
        ("display", "Standardglas"),
        ("display", "Retina Display"),
        ("display", "Nano-texture glass"),
        ("display", "14-inch Display"),
    ],
)
def test_categorizes_known_formats(slot: str, value: str) -> None:
    result = parse_attributes(f"#{value}")

    assert getattr(result, slot) == value
    assert result.other == ()


def test_uncategorized_attributes_keep_order() -> None:
    result = parse_attributes("#Some random feature #Another custom option")

    assert result.other == ("Some random feature", "Another custom option")


def test_multiple_legal_notices_are_not_categorized() -> None:
    result = parse_attributes(
        "#Apple M4 Pro ##Urheberrechtsabgabe nach §54a UrhG ##Retina Display warranty ##Additional legal disclaimer"
    )

    assert result.legal == (
        "Urheberrechtsabgabe nach §54a UrhG",
        "Retina Display warranty",
        "Additional legal disclaimer",
    )
    assert result.display is None


def test_notes_after_dash_or_newline_are_cut() -> None:
    result = parse_attributes(
        "#Apple M4 Pro Chip - This is a note that should be ignored #64 GB RAM\nanother note"
    )

    assert result.processor == "Apple M4 Pro Chip"
    assert result.memory == "64 GB RAM"


def test_hyphen_inside_word_is_not_a_note() -> None:
    assert parse_attributes("#USB-C Hub").other == ("USB-C Hub",)


def test_repeated_category_keeps_first_match() -> None:
    result = parse_attributes("#Apple M4 Pro Chip #Intel Core i9 Processor")

    assert result.processor == "Apple M4 Pro Chip"
    assert result.other == ("Intel Core i9 Processor",)


def test_triple_delimiter_opens_legal_segment() -> None:
    result = parse_attributes("###Copyright notice")

    assert result.legal == ("Copyright notice",)
    assert result.other == ()


def test_long_segment_is_stored_untruncated() -> None:
    keyword_late = "x" * 250 + " Keyboard"
    keyword_early = "Magic Keyboard " + "y" * 400

    result = parse_attributes(f"#{keyword_late} #{keyword_early}")

    # Ключевое слово за пределами окна сканирования не учитывается.
    assert result.other == (keyword_late,)
    assert result.keyboard == keyword_early


def test_adversarial_input_is_handled() -> None:
    description = "#" + "1 GB " * 5000 + "##" + "W" * 10000

    result = parse_attributes(description)

    assert len(result.other) == 1
    assert len(result.legal) == 1


def test_parse_is_idempotent() -> None:
    assert parse_attributes(FULL_DESCRIPTION) == parse_attributes(FULL_DESCRIPTION)


def test_categorize_priority() -> None:
    # CPU выигрывает у памяти, если в сегменте есть оба признака.
    assert categorize("M4 Chip with 16 GB RAM") == "processor"
    assert categorize("Something else") is None


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("//h/p", "https://h/p"),
        ("http://h/p", "http://h/p"),
        ("https://cdn.example.com/a.jpg?x=1", "https://cdn.example.com/a.jpg?x=1"),
        (None, None),
        ("", None),
        ("   ", None),
        ("http://exa mple.com/a.jpg", None),
        ("https://example.com:99999/a.jpg", None),
        ("http://[::1/a.jpg", None),
        ("https://example.com/%zz.jpg", None),
    ],
)
def test_normalize_image_url(raw: str | None, expected: str | None) -> None:
    assert normalize_image_url(raw) == expected
