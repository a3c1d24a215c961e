"""
Output formatters for the GS1 label printer.
"""

from .representations import (
    GS_PLACEHOLDER,
    Representations,
    build,
    compact_ai,
    gs_to_placeholder,
)
from .json_formatter import (
    format_error_dict,
    format_record_dict,
    parse_to_dict,
    parse_to_json,
)

__all__ = [
    "GS_PLACEHOLDER",
    "Representations",
    "build",
    "compact_ai",
    "gs_to_placeholder",
    "format_error_dict",
    "format_record_dict",
    "parse_to_dict",
    "parse_to_json",
]
