"""
Scan Input Normalizer

Turns free-form operator input (scanner output, pasted text, hand-typed
placeholders) into an element string whose only separators are real
Group Separator characters (ASCII 29, 0x1D).

Recognised GS placeholders:
- <GS>, [GS]          (case-insensitive)
- ^]                  (caret notation emitted by some terminals)
- U+2194 (arrow)      (glyph used by label software; may carry U+FE0F)
- \\x1d               (escaped literal, case-insensitive)

Recognised FNC1 placeholders (removed; the leader is implicit):
- <FNC1>, \\F         (case-insensitive)

The normalizer never fails. Anything it does not recognise is passed
through for the parser to reject.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Optional

from ..validators.validators import GS


# Cyrillic (JCUKEN) -> US QWERTY, same physical key
_LAYOUT_LOWER = dict(zip(
    "йцукенгшщзхъфывапролджэячсмитьбюё",
    "qwertyuiop[]asdfghjkl;'zxcvbnm,.`",
))
_LAYOUT_UPPER = dict(zip(
    "ЙЦУКЕНГШЩЗХЪФЫВАПРОЛДЖЭЯЧСМИТЬБЮЁ",
    'QWERTYUIOP{}ASDFGHJKL:"ZXCVBNM<>~',
))
CYRILLIC_LAYOUT_MAP: Dict[str, str] = {**_LAYOUT_LOWER, **_LAYOUT_UPPER}

_CYRILLIC_RE = re.compile("[А-Яа-яЁё]")

# Whitespace without the ASCII information separators (0x1C-0x1F),
# which str.isspace() and re's \s would otherwise treat as blanks
_OUTER_WHITESPACE_RE = re.compile(r"^[^\S\x1c-\x1f]+|[^\S\x1c-\x1f]+$")
_LINE_CONTROL_RE = re.compile(r"[\r\n\t]+")
_VARIATION_SELECTOR_RE = re.compile("[\ufe00-\ufe0f]")
_GS_PLACEHOLDER_RE = re.compile(r"<GS>|\[GS\]|\^\]|\u2194|\\x1d", re.IGNORECASE)
_FNC1_PLACEHOLDER_RE = re.compile(r"<FNC1>|\\F", re.IGNORECASE)
_GS_RUN_RE = re.compile(GS + "{2,}")


@dataclass(frozen=True)
class NormalizeOptions:
    """
    Configuration options for normalization.

    Attributes:
        remap_cyrillic_layout: Rewrite Cyrillic letters typed on a Russian
            layout to the Latin character on the same key. Off by default:
            it silently changes payloads that are meant to be Cyrillic.
    """
    remap_cyrillic_layout: bool = False


DEFAULT_OPTIONS = NormalizeOptions()


def contains_cyrillic(text: str) -> bool:
    """True if the text contains any Cyrillic letter."""
    return bool(_CYRILLIC_RE.search(text))


def remap_cyrillic_layout(text: str) -> str:
    """Replace Cyrillic letters by the Latin key in the same position."""
    return _CYRILLIC_RE.sub(lambda m: CYRILLIC_LAYOUT_MAP.get(m.group(0), m.group(0)), text)


def trim(text: str) -> str:
    """Strip outer whitespace, keeping GS and the other ASCII separators."""
    return _OUTER_WHITESPACE_RE.sub("", text)


def _remove_fnc1_placeholders(text: str) -> str:
    # Removing one placeholder can close another one around it
    while True:
        text, count = _FNC1_PLACEHOLDER_RE.subn("", text)
        if not count:
            return text


def normalize(raw: str, options: Optional[NormalizeOptions] = None) -> str:
    """
    Normalize raw scan input.

    Args:
        raw: Text as typed, pasted or scanned
        options: Optional normalization options

    Returns:
        Element string containing only real GS separators

    Examples:
        >>> normalize("010001234567890521ABC123<GS>9319AB")
        '010001234567890521ABC123\\x1d9319AB'
    """
    options = options or DEFAULT_OPTIONS

    text = trim(raw)
    text = _LINE_CONTROL_RE.sub("", text)

    if options.remap_cyrillic_layout:
        text = remap_cyrillic_layout(text)

    text = _VARIATION_SELECTOR_RE.sub("", text)
    text = _remove_fnc1_placeholders(text)
    text = _GS_PLACEHOLDER_RE.sub(GS, text)
    text = _GS_RUN_RE.sub(GS, text)

    return trim(text)
