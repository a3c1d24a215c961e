"""
Validation modules for the GS1 label printer.
"""

from .validators import (
    AIRule,
    AI_RULES,
    AI92_CHARSET,
    GS,
    NUMERIC,
    SERIAL_MAX_LENGTH,
    TAIL_AIS,
    ai_title,
    is_digits,
    is_tail_ai,
    validate_ai92,
)

__all__ = [
    "AIRule",
    "AI_RULES",
    "AI92_CHARSET",
    "GS",
    "NUMERIC",
    "SERIAL_MAX_LENGTH",
    "TAIL_AIS",
    "ai_title",
    "is_digits",
    "is_tail_ai",
    "validate_ai92",
]
