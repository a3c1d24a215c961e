"""
Core parsing modules for the GS1 label printer.
"""

from .normalizer import (
    NormalizeOptions,
    contains_cyrillic,
    normalize,
    remap_cyrillic_layout,
    trim,
)
from .parser import (
    Ai91LengthError,
    Ai92InvalidError,
    Ai93LengthError,
    BadGtinError,
    ElementStringRecord,
    ErrorCode,
    GS1ParseError,
    MissingSerialError,
    SerialEmptyError,
    SerialTooLongError,
    TailElement,
    UnknownAiError,
    parse,
    parse_from_user_input,
)

__all__ = [
    "NormalizeOptions",
    "contains_cyrillic",
    "normalize",
    "remap_cyrillic_layout",
    "trim",
    "Ai91LengthError",
    "Ai92InvalidError",
    "Ai93LengthError",
    "BadGtinError",
    "ElementStringRecord",
    "ErrorCode",
    "GS1ParseError",
    "MissingSerialError",
    "SerialEmptyError",
    "SerialTooLongError",
    "TailElement",
    "UnknownAiError",
    "parse",
    "parse_from_user_input",
]
