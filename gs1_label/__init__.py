"""
GS1 DataMatrix Label Printer

Normalizes scanned or pasted element strings, parses them into a GTIN +
serial + verification-tail record (AIs 01, 21, 91, 92, 93) and prints
58 x 40 mm DataMatrix labels.
"""

from .core.normalizer import NormalizeOptions, contains_cyrillic, normalize
from .core.parser import (
    ElementStringRecord,
    ErrorCode,
    GS1ParseError,
    TailElement,
    parse,
    parse_from_user_input,
)
from .formatters.representations import Representations, build, gs_to_placeholder
from .formatters.json_formatter import parse_to_dict, parse_to_json
from .config import LabelSettings, load_settings

__version__ = "1.0.0"
__all__ = [
    "NormalizeOptions",
    "contains_cyrillic",
    "normalize",
    "ElementStringRecord",
    "ErrorCode",
    "GS1ParseError",
    "TailElement",
    "parse",
    "parse_from_user_input",
    "Representations",
    "build",
    "gs_to_placeholder",
    "parse_to_dict",
    "parse_to_json",
    "LabelSettings",
    "load_settings",
]
