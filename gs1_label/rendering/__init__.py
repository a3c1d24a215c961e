"""
Rendering collaborators: DataMatrix symbol (BWIPP) and label PDF (ReportLab).
"""

from .barcode import (
    BarcodeRenderError,
    barcode_request,
    image_to_png,
    render_ai_string,
    render_datamatrix,
    render_datamatrix_png,
)
from .label_pdf import (
    LabelLayout,
    LabelOptions,
    build_label_pdf,
    build_labels_pdf,
    compute_layout,
    make_safe_caption,
    wrap_text_lines,
)

__all__ = [
    "BarcodeRenderError",
    "barcode_request",
    "image_to_png",
    "render_ai_string",
    "render_datamatrix",
    "render_datamatrix_png",
    "LabelLayout",
    "LabelOptions",
    "build_label_pdf",
    "build_labels_pdf",
    "compute_layout",
    "make_safe_caption",
    "wrap_text_lines",
]
