"""
GS1 parser integration for the UI.
"""

from __future__ import annotations

from typing import Any, Dict, Tuple

from gs1_label.config import LabelSettings
from gs1_label.core.normalizer import NormalizeOptions, contains_cyrillic, trim
from gs1_label.core.parser import GS1ParseError, parse_from_user_input
from gs1_label.formatters.json_formatter import format_record_dict
from gs1_label.formatters.representations import build
from gs1_label.log import get_logger


logger = get_logger(__name__)

WRONG_LAYOUT_MESSAGE = "Switch the keyboard layout to EN"


def parse_scan(scan_text: str, settings: LabelSettings) -> Tuple[bool, Dict[str, Any], str]:
    """
    Parse a scan string for display and printing.

    Returns:
        (success, data, error_message); data holds "record",
        "representations" and the display "fields"
    """
    if not scan_text or not trim(scan_text):
        return False, {}, "Empty scan input"

    if contains_cyrillic(scan_text) and settings.reject_cyrillic and not settings.remap_cyrillic_layout:
        logger.info("scan_rejected", code="WRONG_LAYOUT")
        return False, {}, WRONG_LAYOUT_MESSAGE

    options = NormalizeOptions(remap_cyrillic_layout=settings.remap_cyrillic_layout)
    try:
        record = parse_from_user_input(scan_text, options)
    except GS1ParseError as exc:
        logger.info("scan_rejected", code=exc.code.value, at_index=exc.at_index)
        return False, {}, str(exc)

    reps = build(record)
    logger.info("scan_parsed", gtin=record.gtin, tails=[t.ai for t in record.tails])
    return True, {
        "record": record,
        "representations": reps,
        "fields": format_record_dict(record, reps),
    }, ""
