"""
Разбор `comline_artikelbeschreibung` в структурированные атрибуты.

Формат описания:
- базовая конфигурация до первого '#';
- '#' открывает обычный атрибут, '##' открывает юридическое примечание;
- ' -' или перевод строки внутри атрибута начинают примечание, оно отбрасывается.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from comline_edge.core.normalize import ProductAttributes

DELIMITER = "#"
MAX_CATEGORY_SCAN_LENGTH = 200

# '##' забирает два символа, если за ними есть содержимое; иначе откатывается на '#'.
SEGMENT_PATTERN = re.compile(r"(##?)([^#]+)")
NOTE_SEPARATOR_PATTERN = re.compile(r"\s-|\n")

_FLAGS = re.IGNORECASE | re.DOTALL

# Порядок важен: первое совпадение определяет слот.
CATEGORY_RULES: tuple[tuple[str, re.Pattern[str]], ...] = (
    (
        "processor",
        re.compile(
            r"M\d+\s*(?:Pro|Max|Ultra)?\s*Chip|Core\s*(?:i\d+|Ultra)|CPU|Processor|Ryzen|Threadripper",
            _FLAGS,
        ),
    ),
    ("memory", re.compile(r"\d+\s*GB.{0,50}?(?:Arbeitsspeicher|RAM|Memory|gemeinsam)", _FLAGS)),
    ("storage", re.compile(r"\d+\s*(?:TB|GB)\s*(?:SSD|NVMe|Speicher|Storage)", _FLAGS)),
    (
        "power_adapter",
        re.compile(r"\d+\s*W.{0,50}?(?:Power Adapter|Netzteil|USB[-‑]C|Ladegerät)", _FLAGS),
    ),
    ("keyboard", re.compile(r"Keyboard|Tastatur", _FLAGS)),
    ("display", re.compile(r"Display|Bildschirm|Retina|Glass|Glas|Monitor|Screen", _FLAGS)),
)


@dataclass(slots=True)
class _AttributeAccumulator:
    base_configuration: str | None = None
    slots: dict[str, str] = field(default_factory=dict)
    legal: list[str] = field(default_factory=list)
    other: list[str] = field(default_factory=list)

    def build(self) -> ProductAttributes:
        return ProductAttributes(
            base_configuration=self.base_configuration,
            legal=tuple(self.legal),
            other=tuple(self.other),
            **self.slots,
        )


def _extract_base_configuration(description: str) -> str | None:
    first_delimiter = description.find(DELIMITER)
    if first_delimiter <= 0:
        return None

    base = description[:first_delimiter].strip()
    if base.endswith(":"):
        base = base[:-1].strip()
    return base or None


def _clean_segment(content: str) -> str:
    text = content.strip()
    separator = NOTE_SEPARATOR_PATTERN.search(text)
    if separator:
        text = text[: separator.start()].strip()
    return text


def categorize(segment: str) -> str | None:
    scan = segment[:MAX_CATEGORY_SCAN_LENGTH]
    for slot, pattern in CATEGORY_RULES:
        if pattern.search(scan):
            return slot
    return None


def parse_attributes(description: str | None) -> ProductAttributes:
    if not description or not description.strip():
        return ProductAttributes()

    acc = _AttributeAccumulator(base_configuration=_extract_base_configuration(description))

    for match in SEGMENT_PATTERN.finditer(description):
        marker, content = match.group(1), match.group(2)
        segment = _clean_segment(content)
        if not segment:
            continue

        if marker == "##":
            acc.legal.append(segment)
            continue

        slot = categorize(segment)
        if slot is None or slot in acc.slots:
            # Слот уже занят первым совпадением, повтор не теряем.
            acc.other.append(segment)
        else:
            acc.slots[slot] = segment

    return acc.build()
