"""
Representation Builder

Derives the three textual forms of a parsed record:

- pretty_ai:   "(01) 04600000000000 (21) ABC (93) 19AB"     display only
- ai_text:     "(01)04600000000000(21)ABC<GS>(93)19AB"     transcribable
- raw_with_gs: "010460000000000021ABC\\x1d9319AB"          byte-exact

raw_with_gs always carries a GS before every tail element, whether or not
the scanned input had one there. It is the canonical form handed to the
barcode renderer, not a byte-for-byte replay of the input.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..core.parser import ElementStringRecord
from ..validators.validators import GS


GS_PLACEHOLDER = "<GS>"

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class Representations:
    """Textual forms of one ElementStringRecord."""
    pretty_ai: str
    ai_text: str
    raw_with_gs: str

    @property
    def raw_visible(self) -> str:
        """raw_with_gs with each GS shown as <GS>."""
        return gs_to_placeholder(self.raw_with_gs)


def build(record: ElementStringRecord) -> Representations:
    """Build the display, transcribable and byte-exact forms of a record."""
    pretty = [f"(01) {record.gtin}", f"(21) {record.serial}"]
    pretty.extend(f"({t.ai}) {t.value}" for t in record.tails)

    ai_text = [f"(01){record.gtin}", f"(21){record.serial}"]
    ai_text.extend(f"{GS_PLACEHOLDER}({t.ai}){t.value}" for t in record.tails)

    raw = ["01" + record.gtin, "21" + record.serial]
    raw.extend(GS + t.ai + t.value for t in record.tails)

    return Representations(
        pretty_ai=" ".join(pretty),
        ai_text="".join(ai_text),
        raw_with_gs="".join(raw),
    )


def gs_to_placeholder(text: str) -> str:
    return text.replace(GS, GS_PLACEHOLDER)


def compact_ai(text: str) -> str:
    """Strip whitespace from a parenthesised AI string (renderer input)."""
    return _WHITESPACE_RE.sub("", text)
