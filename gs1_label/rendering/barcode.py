"""
GS1 DataMatrix rendering via BWIPP (treepoem).

Three ways to hand a parsed record to BWIPP:

- gs1:         bcid "gs1datamatrix" over the parenthesised AI string;
               BWIPP parses the AIs and inserts the FNC1 leader and separators
- fnc1-caret:  bcid "datamatrix" with parsefnc; data is "^FNC1" followed by
               raw_with_gs, each GS written as the ordinal escape "^029"
- raw:         bcid "datamatrix" over the raw bytes, no FNC1 leader

Ghostscript must be installed on the system for treepoem to work.
"""

from __future__ import annotations

from io import BytesIO
from typing import Dict

import treepoem
from PIL import Image

from ..config import RENDER_MODES
from ..formatters.representations import Representations, compact_ai
from ..log import get_logger
from ..validators.validators import GS


logger = get_logger(__name__)


class BarcodeRenderError(RuntimeError):
    """BWIPP/Ghostscript could not render the symbol."""


def _caret_escaped(raw_with_gs: str) -> str:
    # "^" itself must be escaped once parsefnc is on
    return "^FNC1" + raw_with_gs.replace("^", "^094").replace(GS, "^029")


def _gs1_request(ai_parenthesized: str) -> Dict[str, object]:
    return {
        "barcode_type": "gs1datamatrix",
        "data": compact_ai(ai_parenthesized),
        "options": {"parse": True},
    }


def barcode_request(
    representations: Representations,
    mode: str = "gs1",
) -> Dict[str, object]:
    """
    Build the BWIPP request for a mode.

    Returns:
        dict with barcode_type, data and options for treepoem

    Raises:
        ValueError: unknown mode
    """
    if mode == "gs1":
        return _gs1_request(representations.pretty_ai)
    if mode == "fnc1-caret":
        return {
            "barcode_type": "datamatrix",
            "data": _caret_escaped(representations.raw_with_gs),
            "options": {"parsefnc": True},
        }
    if mode == "raw":
        return {
            "barcode_type": "datamatrix",
            "data": representations.raw_with_gs.encode("utf-8"),
            "options": {},
        }
    raise ValueError(f"Unknown render mode {mode!r}; expected one of {', '.join(RENDER_MODES)}")


def render_datamatrix(
    representations: Representations,
    mode: str = "gs1",
    scale: int = 4,
) -> Image.Image:
    """
    Render the DataMatrix symbol for a record.

    Args:
        representations: Output of formatters.representations.build()
        mode: gs1, fnc1-caret or raw
        scale: Pixels per module (values below 1 are raised to 1)

    Returns:
        PIL.Image.Image in RGB mode

    Raises:
        ValueError: unknown mode
        BarcodeRenderError: BWIPP or Ghostscript failure
    """
    return _generate(barcode_request(representations, mode), mode, scale)


def render_ai_string(ai_parenthesized: str, scale: int = 4) -> Image.Image:
    """
    Render a parenthesised AI string such as "(01)...(21)...(93)...".

    Whitespace is removed before the string is handed to BWIPP.
    """
    return _generate(_gs1_request(ai_parenthesized), "gs1", scale)


def _generate(request: Dict[str, object], mode: str, scale: int) -> Image.Image:
    scale = max(1, int(scale))
    try:
        image = treepoem.generate_barcode(
            barcode_type=request["barcode_type"],
            data=request["data"],
            options=request["options"],
            scale=scale,
        )
    except treepoem.TreepoemError as exc:
        logger.error("barcode_render_failed", mode=mode, error=str(exc))
        raise BarcodeRenderError(f"DataMatrix rendering failed ({mode}): {exc}") from exc

    image = image.convert("RGB")
    logger.debug("barcode_rendered", mode=mode, scale=scale, size=image.size)
    return image


def image_to_png(image: Image.Image) -> bytes:
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def render_datamatrix_png(
    representations: Representations,
    mode: str = "gs1",
    scale: int = 4,
) -> bytes:
    """Render the symbol and return PNG bytes."""
    return image_to_png(render_datamatrix(representations, mode=mode, scale=scale))

