"""
Demo: one label PDF from a scan.

Needs Ghostscript for the DataMatrix image.

    python examples/print_label.py "0104600439931256215NtEuRRYbQofV<GS>93M/r1" label.pdf
"""

import sys
from pathlib import Path

from gs1_label import build, load_settings, parse_from_user_input
from gs1_label.log import configure_logging
from gs1_label.rendering import LabelOptions, build_label_pdf, render_datamatrix


def main(scan: str, output: str) -> None:
    settings = load_settings()
    configure_logging(settings.log_level, settings.log_format)

    reps = build(parse_from_user_input(scan))
    print(f"prettyAI: {reps.pretty_ai}")
    print(f"aiText:   {reps.ai_text}")

    image = render_datamatrix(reps, mode=settings.render_mode, scale=settings.render_scale)
    options = LabelOptions.from_settings(settings, ai=reps.pretty_ai)
    Path(output).write_bytes(build_label_pdf(reps.raw_with_gs, options, image=image))
    print(f"Written {output}")


if __name__ == "__main__":
    if len(sys.argv) != 3:
        sys.exit(__doc__)
    main(sys.argv[1], sys.argv[2])
