"""
Tests for label layout and PDF output.

A plain Pillow image stands in for the rendered symbol so that these tests
do not need Ghostscript.
"""

import pytest
from PIL import Image
from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth

from gs1_label.config import load_settings
from gs1_label.rendering import label_pdf
from gs1_label.rendering.label_pdf import (
    CAPTION_FONT,
    LabelOptions,
    build_label_pdf,
    build_labels_pdf,
    caption_height,
    compute_layout,
    make_safe_caption,
    wrap_text_lines,
)

GS = "\x1d"
AI = "(01) 00012345678905 (21) ABC123 (93) 19AB"
RAW = "010001234567890521ABC123" + GS + "9319AB"


@pytest.fixture
def symbol():
    return Image.new("RGB", (44, 44), "white")


class TestLayout:
    """Symbol size and placement."""

    def test_automatic_symbol_side(self):
        """58 x 40 mm with 3 mm margins leaves a 22 mm symbol."""
        assert LabelOptions(ai=AI).dm_side_mm == pytest.approx(22.0)

    def test_explicit_symbol_side(self):
        assert LabelOptions(ai=AI, dm_box_mm=18).dm_side_mm == 18

    def test_centred_horizontally(self):
        layout = compute_layout(LabelOptions(ai=AI), line_count=1)

        assert layout.dm_x == pytest.approx(18 * mm)
        assert layout.dm_side == pytest.approx(22 * mm)
        assert layout.page_width == pytest.approx(58 * mm)
        assert layout.caption_max_width == pytest.approx(52 * mm)

    def test_vertical_position(self):
        options = LabelOptions(ai=AI)
        text_height = caption_height(2, options.font_size)

        layout = compute_layout(options, line_count=2)

        expected = max(3 * mm + text_height, (40 * mm - 22 * mm - text_height) / 2 + text_height)
        assert layout.dm_y == pytest.approx(expected)
        assert layout.dm_y + layout.dm_side <= 40 * mm

    def test_symbol_never_overlaps_caption(self):
        options = LabelOptions(ai=AI, dm_box_mm=30)

        layout = compute_layout(options, line_count=6)

        assert layout.dm_y >= 3 * mm + layout.caption_height

    def test_caption_height(self):
        assert caption_height(1, 5) == pytest.approx(5 + 2 * mm)
        assert caption_height(3, 5) == pytest.approx(15 + 1 * mm + 2 * mm)

    def test_from_settings(self):
        settings = load_settings({"label_width_mm": 70, "dm_box_mm": 25, "caption_font_size": 6})

        options = LabelOptions.from_settings(settings, ai=AI, caption="custom")

        assert options.width_mm == 70
        assert options.dm_side_mm == 25
        assert options.font_size == 6
        assert options.caption == "custom"


class TestCaption:
    """Caption text and wrapping."""

    def test_gs_shown_as_placeholder(self):
        assert make_safe_caption(RAW) == "010001234567890521ABC123<GS>9319AB"

    def test_non_ascii_dropped(self):
        assert make_safe_caption("ABCéЖ\x01" + GS + "D") == "ABC<GS>D"

    def test_custom_caption_wins(self):
        assert make_safe_caption(RAW, "Lot " + GS + " 7") == "Lot <GS> 7"

    def test_short_text_single_line(self):
        assert wrap_text_lines("short caption", 5, 52 * mm) == ["short caption"]

    def test_word_wrap(self):
        lines = wrap_text_lines("alpha beta gamma delta", 5, stringWidth("gamma delta", CAPTION_FONT, 5))

        assert lines == ["alpha beta", "gamma delta"]

    def test_long_word_hard_cut(self):
        word = "0100012345678905215NtEuRRYbQofV<GS>93M/r1" * 3
        max_width = 52 * mm

        lines = wrap_text_lines(word, 5, max_width)

        assert len(lines) > 1
        assert "".join(lines) == word
        assert all(stringWidth(line, CAPTION_FONT, 5) <= max_width for line in lines)

    def test_empty_text(self):
        assert wrap_text_lines("", 5, 100) == []


class TestBuildPdf:
    """PDF bytes."""

    def test_single_label(self, symbol):
        pdf = build_label_pdf(RAW, LabelOptions(ai=AI), image=symbol)

        assert pdf.startswith(b"%PDF")
        assert pdf.rstrip().endswith(b"%%EOF")

    def test_missing_ai(self, symbol):
        with pytest.raises(ValueError, match="options.ai"):
            build_label_pdf(RAW, LabelOptions(ai="  "), image=symbol)

    def test_label_too_small(self, symbol):
        with pytest.raises(ValueError, match="no room"):
            build_label_pdf(RAW, LabelOptions(ai=AI, width_mm=15, height_mm=15), image=symbol)

    def test_no_labels(self):
        with pytest.raises(ValueError):
            build_labels_pdf([])

    def test_one_page_per_label(self, symbol, monkeypatch):
        calls = []
        draw = label_pdf.draw_label

        def counting_draw(c, image, caption, options):
            calls.append(caption)
            return draw(c, image, caption, options)

        monkeypatch.setattr(label_pdf, "draw_label", counting_draw)

        pdf = build_labels_pdf([
            (RAW, LabelOptions(ai=AI), symbol),
            ("0100012345678905211234567", LabelOptions(ai="(01) 00012345678905 (21) 1234567"), symbol),
        ])

        assert pdf.startswith(b"%PDF")
        assert calls == ["010001234567890521ABC123<GS>9319AB", "0100012345678905211234567"]

    def test_symbol_rendered_from_ai_when_missing(self, symbol, monkeypatch):
        requested = []

        def fake_render(ai, scale=4):
            requested.append((ai, scale))
            return symbol

        monkeypatch.setattr(label_pdf, "render_ai_string", fake_render)

        pdf = build_label_pdf(RAW, LabelOptions(ai=AI, render_scale=3))

        assert pdf.startswith(b"%PDF")
        assert requested == [(AI, 3)]
