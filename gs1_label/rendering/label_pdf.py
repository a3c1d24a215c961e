"""
Label PDF generation (ReportLab).

One label per page, 58 x 40 mm by default: the DataMatrix centred
horizontally above a word-wrapped, ASCII-only caption.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from io import BytesIO
from typing import List, Optional, Sequence, Tuple

from PIL import Image
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from ..config import LabelSettings
from ..formatters.representations import gs_to_placeholder
from ..log import get_logger
from .barcode import render_ai_string


logger = get_logger(__name__)

CAPTION_FONT = "Helvetica"
LINE_GAP = 0.5 * mm
CAPTION_OFFSET = 2 * mm
BOTTOM_LIMIT = 2 * mm
# Room left for the caption when the symbol size is automatic
CAPTION_RESERVE_MM = 12

_NON_PRINTABLE_RE = re.compile(r"[^\x20-\x7e]")


@dataclass(frozen=True)
class LabelOptions:
    """
    Label layout options.

    Attributes:
        ai: Parenthesised AI string used to render the symbol (required)
        width_mm: Page width
        height_mm: Page height
        margin_mm: Page margin
        dm_box_mm: Symbol side; None = min(w, h) - 2 * margin - 12
        caption: Custom caption text (defaults to raw_with_gs)
        font_size: Caption font size in points
        render_scale: BWIPP scale used when the symbol is rendered here
    """
    ai: str
    width_mm: float = 58.0
    height_mm: float = 40.0
    margin_mm: float = 3.0
    dm_box_mm: Optional[float] = None
    caption: Optional[str] = None
    font_size: float = 5.0
    render_scale: int = 6

    @classmethod
    def from_settings(
        cls,
        settings: LabelSettings,
        ai: str,
        caption: Optional[str] = None,
    ) -> "LabelOptions":
        return cls(
            ai=ai,
            width_mm=settings.label_width_mm,
            height_mm=settings.label_height_mm,
            margin_mm=settings.margin_mm,
            dm_box_mm=settings.dm_box_mm,
            caption=caption,
            font_size=settings.caption_font_size,
            render_scale=settings.render_scale,
        )

    @property
    def dm_side_mm(self) -> float:
        if self.dm_box_mm is not None:
            return self.dm_box_mm
        return min(self.width_mm, self.height_mm) - 2 * self.margin_mm - CAPTION_RESERVE_MM


@dataclass(frozen=True)
class LabelLayout:
    """Computed positions, in points."""
    page_width: float
    page_height: float
    dm_x: float
    dm_y: float
    dm_side: float
    caption_height: float
    caption_max_width: float


def make_safe_caption(raw_with_gs: str, custom: Optional[str] = None) -> str:
    """Show GS as <GS> and keep printable ASCII only."""
    source = gs_to_placeholder(custom if custom is not None else raw_with_gs)
    return _NON_PRINTABLE_RE.sub("", source)


def wrap_text_lines(
    text: str,
    font_size: float,
    max_width: float,
    font_name: str = CAPTION_FONT,
) -> List[str]:
    """
    Word-wrap text to max_width points.

    Words wider than a line are hard-cut character by character.
    """
    def width(s: str) -> float:
        return stringWidth(s, font_name, font_size)

    lines: List[str] = []
    line = ""
    for word in text.split():
        candidate = f"{line} {word}" if line else word
        if width(candidate) <= max_width:
            line = candidate
            continue

        if line:
            lines.append(line)
        if width(word) <= max_width:
            line = word
            continue

        buf = ""
        for ch in word:
            if buf and width(buf + ch) > max_width:
                lines.append(buf)
                buf = ch
            else:
                buf += ch
        line = buf

    if line:
        lines.append(line)
    return lines


def caption_height(line_count: int, font_size: float) -> float:
    return line_count * font_size + max(0, line_count - 1) * LINE_GAP + CAPTION_OFFSET


def compute_layout(options: LabelOptions, line_count: int) -> LabelLayout:
    """Place the symbol centred horizontally and above the caption block."""
    width = options.width_mm * mm
    height = options.height_mm * mm
    margin = options.margin_mm * mm
    side = options.dm_side_mm * mm
    text_height = caption_height(line_count, options.font_size)

    dm_x = (width - side) / 2
    dm_y = max(margin + text_height, (height - side - text_height) / 2 + text_height)

    return LabelLayout(
        page_width=width,
        page_height=height,
        dm_x=dm_x,
        dm_y=dm_y,
        dm_side=side,
        caption_height=text_height,
        caption_max_width=width - 2 * margin,
    )


def draw_label(
    c: canvas.Canvas,
    image: Image.Image,
    caption: str,
    options: LabelOptions,
) -> int:
    """
    Draw one label on the current page.

    Returns:
        Number of caption lines drawn
    """
    width = options.width_mm * mm
    max_width = width - 2 * options.margin_mm * mm
    lines = wrap_text_lines(caption, options.font_size, max_width)
    layout = compute_layout(options, len(lines))

    c.drawImage(
        ImageReader(image),
        layout.dm_x,
        layout.dm_y,
        width=layout.dm_side,
        height=layout.dm_side,
    )

    c.setFont(CAPTION_FONT, options.font_size)
    c.setFillColorRGB(0, 0, 0)
    drawn = 0
    y = layout.dm_y - CAPTION_OFFSET - options.font_size
    for line in lines:
        if y < BOTTOM_LIMIT:
            break
        line_width = stringWidth(line, CAPTION_FONT, options.font_size)
        c.drawString((layout.page_width - line_width) / 2, y, line)
        y -= options.font_size + LINE_GAP
        drawn += 1
    return drawn


def _check_options(options: LabelOptions) -> None:
    if not options.ai or not options.ai.strip():
        raise ValueError("build_label_pdf: options.ai (parenthesized AI string) is required")
    if options.dm_side_mm <= 0:
        raise ValueError(
            f"Label {options.width_mm}x{options.height_mm} mm leaves no room for the DataMatrix"
        )


def build_label_pdf(
    raw_with_gs: str,
    options: LabelOptions,
    image: Optional[Image.Image] = None,
) -> bytes:
    """
    Build a one-page label PDF.

    Args:
        raw_with_gs: Byte-exact element string; the caption unless
            options.caption is set
        options: Layout options; options.ai is required
        image: Prerendered symbol; rendered from options.ai when omitted

    Returns:
        PDF bytes

    Raises:
        ValueError: missing options.ai or no room for the symbol
    """
    return build_labels_pdf([(raw_with_gs, options, image)])


def build_labels_pdf(
    labels: Sequence[Tuple[str, LabelOptions, Optional[Image.Image]]],
) -> bytes:
    """
    Build a multi-page PDF, one label per page.

    Args:
        labels: (raw_with_gs, LabelOptions, image-or-None) per page
    """
    for _, options, _ in labels:
        _check_options(options)

    buffer = BytesIO()
    c = None
    for raw_with_gs, options, image in labels:
        page_size = (options.width_mm * mm, options.height_mm * mm)
        if c is None:
            c = canvas.Canvas(buffer, pagesize=page_size)
        else:
            c.setPageSize(page_size)
        if image is None:
            image = render_ai_string(options.ai, scale=options.render_scale)
        caption = make_safe_caption(raw_with_gs, options.caption)
        drawn = draw_label(c, image, caption, options)
        c.showPage()
        logger.debug("label_page_drawn", ai=options.ai, caption_lines=drawn)

    if c is None:
        raise ValueError("No labels to print")
    c.save()

    data = buffer.getvalue()
    logger.info("label_pdf_built", pages=len(labels), size=len(data))
    return data
