"""
CLI interface for the GS1 label printer.

Usage:
    python -m gs1_label "<scan text>" [options]
    python -m gs1_label --batch scans.txt --pdf labels.pdf [--report report.csv]

Options:
    --json              Output as JSON
    --pdf PATH          Write the label PDF
    --png PATH          Write the DataMatrix image
    --mode MODE         Render mode: gs1, fnc1-caret, raw
    --scale N           Render scale (pixels per module)
    --remap-cyrillic    Fix input typed on a Russian keyboard layout
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from .config import RENDER_MODES, LabelSettings, load_settings
from .core.normalizer import NormalizeOptions
from .core.parser import ElementStringRecord, GS1ParseError, parse_from_user_input
from .formatters.json_formatter import format_error_dict, format_record_dict
from .formatters.representations import Representations, build
from .log import configure_logging, get_logger
from .rendering.barcode import BarcodeRenderError, image_to_png, render_datamatrix
from .rendering.label_pdf import LabelOptions, build_label_pdf
from .reports import build_batch_pdf, export_report, parse_batch, split_scan_lines, to_dataframe


logger = get_logger(__name__)


def format_result(record: ElementStringRecord, reps: Representations) -> str:
    """Format a parsed record for display."""
    lines = [
        "=" * 60,
        "GS1 Element String",
        "=" * 60,
        f"(01) {record.gtin}",
        f"(21) {record.serial}",
    ]
    for tail in record.tails:
        marker = "  [GS]" if tail.had_leading_separator else ""
        lines.append(f"({tail.ai}) {tail.value}{marker}")

    lines.extend([
        "",
        "-" * 40,
        f"prettyAI: {reps.pretty_ai}",
        f"aiText:   {reps.ai_text}",
        f"raw (GS=<GS>): {reps.raw_visible}",
    ])
    return "\n".join(lines)


def _settings_from_args(args: argparse.Namespace) -> LabelSettings:
    return load_settings({
        "render_mode": args.mode,
        "render_scale": args.scale,
        "remap_cyrillic_layout": True if args.remap_cyrillic else None,
        "log_level": args.log_level,
    })


def _write_label_outputs(
    reps: Representations,
    settings: LabelSettings,
    pdf_path: Optional[str],
    png_path: Optional[str],
) -> None:
    if not pdf_path and not png_path:
        return
    image = render_datamatrix(reps, mode=settings.render_mode, scale=settings.render_scale)
    if png_path:
        Path(png_path).write_bytes(image_to_png(image))
        logger.info("png_written", path=png_path)
    if pdf_path:
        options = LabelOptions.from_settings(settings, ai=reps.pretty_ai)
        Path(pdf_path).write_bytes(build_label_pdf(reps.raw_with_gs, options, image=image))
        logger.info("pdf_written", path=pdf_path)


def _run_batch(args: argparse.Namespace, settings: LabelSettings) -> int:
    text = Path(args.batch).read_text(encoding="utf-8")
    options = NormalizeOptions(remap_cyrillic_layout=settings.remap_cyrillic_layout)
    items = parse_batch(split_scan_lines(text), options)
    df = to_dataframe(items)

    if args.report:
        path = export_report(df, Path(args.report))
        logger.info("report_written", path=str(path))
    if args.pdf and any(item.ok for item in items):
        Path(args.pdf).write_bytes(build_batch_pdf(items, settings))
        logger.info("pdf_written", path=args.pdf)

    if args.json:
        print(df.to_json(orient="records", force_ascii=False, indent=2))
    else:
        print(df[["line", "status", "gtin", "serial", "message"]].to_string(index=False))

    return 0 if items and all(item.ok for item in items) else 1


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='gs1_label',
        description='Parse GS1 element strings and print DataMatrix labels'
    )

    parser.add_argument(
        'scan',
        nargs='?',
        help='Scanned or pasted element string'
    )

    parser.add_argument(
        '--batch',
        metavar='FILE',
        help='Text file with one scan per line'
    )

    parser.add_argument(
        '--report',
        metavar='PATH',
        help='Batch summary report (.csv or .xlsx)'
    )

    parser.add_argument(
        '--json',
        action='store_true',
        help='Output result as JSON'
    )

    parser.add_argument(
        '--pdf',
        metavar='PATH',
        help='Write the label PDF to PATH'
    )

    parser.add_argument(
        '--png',
        metavar='PATH',
        help='Write the DataMatrix PNG to PATH'
    )

    parser.add_argument(
        '--mode',
        choices=RENDER_MODES,
        default=None,
        help='DataMatrix render mode'
    )

    parser.add_argument(
        '--scale',
        type=int,
        default=None,
        help='Render scale (pixels per module)'
    )

    parser.add_argument(
        '--remap-cyrillic',
        action='store_true',
        help='Rewrite Cyrillic letters typed on a Russian layout to Latin'
    )

    parser.add_argument(
        '--log-level',
        default=None,
        help='DEBUG, INFO, WARNING or ERROR'
    )

    args = parser.parse_args(argv)

    if not args.scan and not args.batch:
        parser.error("a scan argument or --batch FILE is required")

    try:
        settings = _settings_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))

    configure_logging(settings.log_level, settings.log_format)

    if args.batch:
        try:
            return _run_batch(args, settings)
        except BarcodeRenderError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1

    options = NormalizeOptions(remap_cyrillic_layout=settings.remap_cyrillic_layout)
    try:
        record = parse_from_user_input(args.scan, options)
    except GS1ParseError as exc:
        logger.warning("scan_rejected", code=exc.code.value, at_index=exc.at_index)
        if args.json:
            print(json.dumps(format_error_dict(exc, args.scan), indent=2, ensure_ascii=False))
        else:
            print(f"Error: {exc}", file=sys.stderr)
        return 1

    reps = build(record)
    if args.json:
        output = format_record_dict(record, reps, include_separator_flags=True)
        print(json.dumps(output, indent=2, ensure_ascii=False))
    else:
        print(format_result(record, reps))

    try:
        _write_label_outputs(reps, settings, args.pdf, args.png)
    except BarcodeRenderError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
