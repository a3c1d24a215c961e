"""
Batch printing and report generation (CSV/Excel/PDF).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

import pandas as pd

from .config import LabelSettings
from .core.normalizer import NormalizeOptions, trim
from .core.parser import ElementStringRecord, GS1ParseError, parse_from_user_input
from .formatters.representations import Representations, build, gs_to_placeholder
from .log import get_logger
from .rendering.barcode import render_datamatrix
from .rendering.label_pdf import LabelOptions, build_labels_pdf


logger = get_logger(__name__)

EXPORTS_DIR = Path.cwd() / "exports"

REPORT_COLUMNS = [
    "line",
    "input",
    "status",
    "message",
    "gtin",
    "serial",
    "tails",
    "pretty_ai",
    "ai_text",
    "raw",
]


@dataclass(frozen=True)
class BatchItem:
    """One input line and its outcome."""
    line: int
    raw: str
    record: Optional[ElementStringRecord] = None
    representations: Optional[Representations] = None
    error: Optional[GS1ParseError] = None

    @property
    def ok(self) -> bool:
        return self.record is not None


def ensure_exports_dir(exports_dir: Optional[Path] = None) -> Path:
    path = exports_dir or EXPORTS_DIR
    path.mkdir(parents=True, exist_ok=True)
    return path


def split_scan_lines(text: str) -> List[str]:
    """
    Split a batch file into scans.

    Splits on newlines only; str.splitlines() would also split on GS.
    """
    return text.split("\n")


def parse_batch(
    lines: Iterable[str],
    options: Optional[NormalizeOptions] = None,
) -> List[BatchItem]:
    """
    Parse each non-blank line independently.

    A failing line never stops the batch; its error is kept on the item.
    """
    items: List[BatchItem] = []
    for number, raw in enumerate(lines, 1):
        if not trim(raw):
            continue
        try:
            record = parse_from_user_input(raw, options)
        except GS1ParseError as exc:
            logger.warning("batch_line_rejected", line=number, code=exc.code.value)
            items.append(BatchItem(line=number, raw=raw, error=exc))
            continue
        items.append(BatchItem(line=number, raw=raw, record=record, representations=build(record)))
    return items


def to_dataframe(items: List[BatchItem]) -> pd.DataFrame:
    rows = []
    for item in items:
        row = {
            "line": item.line,
            "input": gs_to_placeholder(trim(item.raw)),
            "status": "OK" if item.ok else item.error.code.value,
            "message": "" if item.ok else item.error.message,
            "gtin": "",
            "serial": "",
            "tails": "",
            "pretty_ai": "",
            "ai_text": "",
            "raw": "",
        }
        if item.ok:
            reps = item.representations
            row.update({
                "gtin": item.record.gtin,
                "serial": item.record.serial,
                "tails": " ".join(f"({t.ai}){t.value}" for t in item.record.tails),
                "pretty_ai": reps.pretty_ai,
                "ai_text": reps.ai_text,
                "raw": reps.raw_visible,
            })
        rows.append(row)
    return pd.DataFrame(rows, columns=REPORT_COLUMNS)


def parse_lines(
    lines: Iterable[str],
    options: Optional[NormalizeOptions] = None,
) -> pd.DataFrame:
    """Parse lines and return the summary table."""
    return to_dataframe(parse_batch(lines, options))


def export_csv(df: pd.DataFrame, filename: str, exports_dir: Optional[Path] = None) -> Path:
    path = ensure_exports_dir(exports_dir) / filename
    df.to_csv(path, index=False)
    return path


def export_excel(df: pd.DataFrame, filename: str, exports_dir: Optional[Path] = None) -> Path:
    path = ensure_exports_dir(exports_dir) / filename
    summary = df.groupby("status").size().reset_index(name="count")
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name="Labels", index=False)
        summary.to_excel(writer, sheet_name="Summary", index=False)
    return path


def export_report(df: pd.DataFrame, path: Path) -> Path:
    """Write the summary as .csv or .xlsx depending on the suffix."""
    path = Path(path)
    if path.suffix.lower() in (".xlsx", ".xls"):
        return export_excel(df, path.name, path.parent)
    return export_csv(df, path.name, path.parent)


def build_batch_pdf(items: List[BatchItem], settings: LabelSettings) -> bytes:
    """
    One label page per successfully parsed line.

    Raises:
        ValueError: no line parsed successfully
    """
    labels = []
    for item in items:
        if not item.ok:
            continue
        reps = item.representations
        image = render_datamatrix(reps, mode=settings.render_mode, scale=settings.render_scale)
        labels.append((reps.raw_with_gs, LabelOptions.from_settings(settings, ai=reps.pretty_ai), image))

    if not labels:
        raise ValueError("No valid scans to print")
    logger.info("batch_pdf", labels=len(labels), rejected=len(items) - len(labels))
    return build_labels_pdf(labels)
