"""
JSON Formatter for parsed element strings

Provides clean JSON output with:
- Human-readable field names
- The three representations (prettyAI, aiText, raw with visible <GS>)
- Error objects carrying the failure code for operator display
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from ..core.normalizer import NormalizeOptions
from ..core.parser import ElementStringRecord, GS1ParseError, parse_from_user_input
from ..validators.validators import ai_title
from .representations import Representations, build


def format_record_dict(
    record: ElementStringRecord,
    representations: Optional[Representations] = None,
    include_separator_flags: bool = False,
) -> Dict[str, Any]:
    """
    Format a record as a name -> value dictionary.

    Args:
        record: Parsed record
        representations: Prebuilt representations (built if omitted)
        include_separator_flags: Add "had_leading_separator" per tail

    Returns:
        Dictionary ready for json.dumps()
    """
    representations = representations or build(record)
    output: Dict[str, Any] = {
        ai_title("01"): record.gtin,
        ai_title("21"): record.serial,
    }

    for tail in record.tails:
        key = ai_title(tail.ai)
        if key in output:
            # Repeated tail AIs keep input order under numbered keys
            index = 2
            while f"{key} #{index}" in output:
                index += 1
            key = f"{key} #{index}"
        output[key] = tail.value

    output["prettyAI"] = representations.pretty_ai
    output["aiText"] = representations.ai_text
    output["raw"] = representations.raw_visible

    if include_separator_flags:
        output["tails"] = [
            {"ai": t.ai, "had_leading_separator": t.had_leading_separator}
            for t in record.tails
        ]
    return output


def format_error_dict(error: GS1ParseError, raw: str) -> Dict[str, Any]:
    return {"error": str(error), **error.to_dict(), "input": raw}


def parse_to_dict(
    raw: str,
    options: Optional[NormalizeOptions] = None,
) -> Dict[str, Any]:
    """
    Parse operator input and return a dictionary.

    Raises:
        GS1ParseError: on the first grammar violation
    """
    record = parse_from_user_input(raw, options)
    return format_record_dict(record)


def parse_to_json(
    raw: str,
    options: Optional[NormalizeOptions] = None,
) -> str:
    """
    Parse operator input and return clean JSON output.

    Parse failures are returned as a JSON error object instead of raising.

    Example:
        >>> print(parse_to_json("0100012345678905211234567"))
        {
          "GTIN": "00012345678905",
          "Serial Number": "1234567",
          "prettyAI": "(01) 00012345678905 (21) 1234567",
          "aiText": "(01)00012345678905(21)1234567",
          "raw": "0100012345678905211234567"
        }
    """
    try:
        output = parse_to_dict(raw, options)
    except GS1ParseError as exc:
        output = format_error_dict(exc, raw)
    return json.dumps(output, ensure_ascii=False, indent=2)
