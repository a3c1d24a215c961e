"""
GS1 Validation Functions

Length and character-set rules for the fixed set of Application Identifiers
accepted by the label printer:

- AI (01) GTIN: exactly 14 digits
- AI (21) Serial: 1..20 characters, terminated by GS or a tail AI
- AI (91) / (93): exactly 4 characters
- AI (92): 44 or 88 characters from the base64/base64url alphabet

Check digits are not validated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional, Tuple


GS = "\x1d"

NUMERIC = frozenset("0123456789")

# Base64 and base64url alphabets together, plus '.' used by some issuers
AI92_CHARSET = frozenset(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "abcdefghijklmnopqrstuvwxyz"
    "0123456789"
    "+/=_.-"
)

TAIL_AIS: Tuple[str, ...] = ("91", "92", "93")


@dataclass(frozen=True)
class AIRule:
    """
    Length/charset rule for one Application Identifier.

    Attributes:
        ai: Application Identifier code
        title: Human-readable name
        fixed_length: Exact value length, or None for variable length
        max_length: Maximum value length (variable-length AIs)
        allowed_lengths: Exact set of accepted lengths, if restricted
        charset: Allowed characters, or None for any
    """
    ai: str
    title: str
    fixed_length: Optional[int] = None
    max_length: int = 0
    allowed_lengths: Optional[FrozenSet[int]] = None
    charset: Optional[FrozenSet[str]] = None


AI_RULES: Dict[str, AIRule] = {
    "01": AIRule("01", "GTIN", fixed_length=14),
    "21": AIRule("21", "Serial Number", max_length=20),
    "91": AIRule("91", "Verification Key ID", fixed_length=4),
    "92": AIRule(
        "92",
        "Verification Code",
        allowed_lengths=frozenset({44, 88}),
        charset=AI92_CHARSET,
    ),
    "93": AIRule("93", "Verification Code (short)", fixed_length=4),
}

SERIAL_MAX_LENGTH = AI_RULES["21"].max_length


def is_digits(value: str, length: int) -> bool:
    """True if value is exactly `length` ASCII decimal digits."""
    return len(value) == length and all(ch in NUMERIC for ch in value)


def is_tail_ai(text: str, index: int) -> Optional[str]:
    """
    Return the tail AI starting at `index`, if any.

    Args:
        text: Normalized element string
        index: Cursor position

    Returns:
        "91", "92" or "93" when the two characters at the cursor form one
        of the recognised tail AIs, otherwise None.
    """
    candidate = text[index:index + 2]
    if candidate in TAIL_AIS:
        return candidate
    return None


def validate_ai92(value: str) -> bool:
    """AI (92) value must be 44 or 88 characters from AI92_CHARSET."""
    rule = AI_RULES["92"]
    if len(value) not in rule.allowed_lengths:
        return False
    return set(value) <= rule.charset


def ai_title(ai: str) -> str:
    rule = AI_RULES.get(ai)
    return rule.title if rule else f"AI {ai}"
