from datetime import datetime

import streamlit as st
import streamlit.components.v1 as components

from gs1_label.config import RENDER_MODES
from gs1_label.log import configure_logging
from gs1_label.rendering.barcode import BarcodeRenderError, render_datamatrix
from gs1_label.rendering.label_pdf import LabelOptions, build_label_pdf
from gs1_label.reports import build_batch_pdf, parse_batch, split_scan_lines, to_dataframe
from gs1_label.core.normalizer import NormalizeOptions
from modules.gs1_client import parse_scan
from modules.settings import current_settings, reset_settings, save_settings


st.set_page_config(page_title="DataMatrix Label Printer", layout="centered")

SCAN_PLACEHOLDER = "e.g. 0100087703157811215NtEuRRYbQofV93M/r1"

# WebAudio tones, no audio files
_BEEP_JS = """
<script>
(async () => {
  const Ctx = window.AudioContext || window.webkitAudioContext;
  if (!Ctx) return;
  const ctx = new Ctx();
  if (ctx.state === "suspended") { await ctx.resume(); }
  const tone = (freq, durMs, type, gain, when) => {
    const t0 = ctx.currentTime + when;
    const osc = ctx.createOscillator();
    const g = ctx.createGain();
    osc.type = type;
    osc.frequency.value = freq;
    g.gain.setValueAtTime(gain, t0);
    g.gain.linearRampToValueAtTime(0, t0 + durMs / 1000);
    osc.connect(g).connect(ctx.destination);
    osc.start(t0);
    osc.stop(t0 + durMs / 1000);
  };
  %s
})();
</script>
"""
_OK_TONES = "tone(880, 90, 'sine', 0.06, 0); tone(1320, 110, 'sine', 0.05, 0.09);"
_ERR_TONES = "tone(360, 140, 'square', 0.08, 0); tone(260, 180, 'square', 0.07, 0.12);"


def _ensure_session_state():
    if "last_scan" not in st.session_state:
        st.session_state.last_scan = None
    if "last_error" not in st.session_state:
        st.session_state.last_error = None
    if "logging_ready" not in st.session_state:
        st.session_state.logging_ready = False


def _beep(ok: bool, settings) -> None:
    if not settings.beep_enabled:
        return
    components.html(_BEEP_JS % (_OK_TONES if ok else _ERR_TONES), height=0)


def _bind_enter_to_print():
    # Enter prints, Shift+Enter keeps the newline
    components.html(
        """
        <script>
        const area = window.parent.document.querySelector('textarea[aria-label="Scan input"]');
        if (area && !area.dataset.enterBind) {
            area.dataset.enterBind = "1";
            area.addEventListener("keydown", (e) => {
                if (e.key === "Enter" && !e.shiftKey) {
                    e.preventDefault();
                    const buttons = Array.from(window.parent.document.querySelectorAll("button"));
                    const target = buttons.find(b => b.textContent.trim() === "Print (Enter)");
                    if (target) target.click();
                }
            });
            area.focus();
        }
        </script>
        """,
        height=0,
    )


def _render_parsed(data: dict, settings):
    record = data["record"]
    reps = data["representations"]

    col1, col2 = st.columns(2)
    with col1:
        st.caption("DataMatrix preview (GS1)")
        try:
            image = render_datamatrix(reps, mode=settings.render_mode, scale=4)
            st.image(image, width=220)
        except BarcodeRenderError as exc:
            st.error(str(exc))
            image = None
    with col2:
        st.caption("Parsed")
        lines = [f"(01) {record.gtin}", f"(21) {record.serial}"]
        lines.extend(f"({t.ai}) {t.value}" for t in record.tails)
        st.code("\n".join(lines), language="text")

    st.caption("Strings to check / copy")
    st.markdown(f"**prettyAI**: `{reps.pretty_ai}`")
    st.markdown(f"**aiText**: `{reps.ai_text}`")
    st.markdown(f"**raw (GS=&lt;GS&gt;)**: `{reps.raw_visible}`")
    return image


def _print_page(settings):
    st.header("Print DataMatrix")

    with st.form("scan_form", clear_on_submit=True):
        scan_text = st.text_area(
            "Scan input",
            placeholder=SCAN_PLACEHOLDER,
            help="Scanner or paste",
            height=110,
        )
        submitted = st.form_submit_button("Print (Enter)")

    if settings.auto_print_on_enter:
        _bind_enter_to_print()

    if submitted:
        ok, data, err = parse_scan(scan_text, settings)
        st.session_state.last_scan = data if ok else None
        st.session_state.last_error = None if ok else err
        _beep(ok, settings)

    if st.session_state.last_error:
        st.error(f"Error: {st.session_state.last_error}")

    data = st.session_state.last_scan
    if not data:
        return

    image = _render_parsed(data, settings)
    if image is None:
        return

    reps = data["representations"]
    options = LabelOptions.from_settings(settings, ai=reps.pretty_ai)
    try:
        pdf_bytes = build_label_pdf(reps.raw_with_gs, options, image=image)
    except ValueError as exc:
        st.error(str(exc))
        return
    st.download_button(
        label=f"Download PDF {settings.label_width_mm:g}x{settings.label_height_mm:g}",
        data=pdf_bytes,
        file_name=f"label_{data['record'].gtin}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.pdf",
        mime="application/pdf",
    )

    st.caption(
        "The FNC1 leader is added by the renderer. Some verifiers report group "
        "separators as FNC1 rather than GS; marking apps still read the code correctly."
    )


def _batch_page(settings):
    st.header("Batch Print")
    uploaded = st.file_uploader("Scans file (one per line)", type=["txt", "csv"])
    if not uploaded:
        return

    text = uploaded.getvalue().decode("utf-8", errors="replace")
    options = NormalizeOptions(remap_cyrillic_layout=settings.remap_cyrillic_layout)
    items = parse_batch(split_scan_lines(text), options)
    df = to_dataframe(items)

    valid = sum(1 for item in items if item.ok)
    cols = st.columns(3)
    cols[0].metric("Lines", len(items))
    cols[1].metric("Valid", valid)
    cols[2].metric("Rejected", len(items) - valid)
    st.dataframe(df, use_container_width=True)

    st.download_button(
        "Download report (CSV)",
        data=df.to_csv(index=False).encode("utf-8"),
        file_name=f"labels_{datetime.now().strftime('%Y%m%d_%H%M%S')}.csv",
        mime="text/csv",
    )

    if valid and st.button("Build labels PDF"):
        try:
            pdf_bytes = build_batch_pdf(items, settings)
        except (BarcodeRenderError, ValueError) as exc:
            st.error(str(exc))
            return
        st.download_button(
            "Download labels PDF",
            data=pdf_bytes,
            file_name=f"labels_{datetime.now().strftime('%Y%m%d_%H%M%S')}.pdf",
            mime="application/pdf",
        )


def _settings_page(settings):
    st.header("Settings")
    with st.form("settings_form"):
        col1, col2 = st.columns(2)
        width = col1.number_input("Label width (mm)", min_value=10.0, value=float(settings.label_width_mm))
        height = col2.number_input("Label height (mm)", min_value=10.0, value=float(settings.label_height_mm))
        margin = col1.number_input("Margin (mm)", min_value=0.0, value=float(settings.margin_mm))
        auto_box = col2.checkbox("Automatic DataMatrix size", value=settings.dm_box_mm is None)
        dm_box = col2.number_input(
            "DataMatrix size (mm)",
            min_value=1.0,
            value=float(settings.dm_box_mm or 22.0),
        )
        font_size = col1.number_input("Caption font size (pt)", min_value=1.0, value=float(settings.caption_font_size))
        mode = col1.selectbox("Render mode", RENDER_MODES, index=RENDER_MODES.index(settings.render_mode))
        scale = col2.number_input("Render scale", min_value=1, value=int(settings.render_scale), step=1)
        remap = st.checkbox(
            "Fix Russian keyboard layout automatically (may corrupt Cyrillic payloads)",
            value=settings.remap_cyrillic_layout,
        )
        reject = st.checkbox("Reject input with Cyrillic letters", value=settings.reject_cyrillic)
        auto_print = st.checkbox("Print on Enter", value=settings.auto_print_on_enter)
        beep = st.checkbox("Sound cues", value=settings.beep_enabled)
        submitted = st.form_submit_button("Save")

    if submitted:
        try:
            save_settings({
                "label_width_mm": width,
                "label_height_mm": height,
                "margin_mm": margin,
                "dm_box_mm": None if auto_box else dm_box,
                "caption_font_size": font_size,
                "render_mode": mode,
                "render_scale": scale,
                "remap_cyrillic_layout": remap,
                "reject_cyrillic": reject,
                "auto_print_on_enter": auto_print,
                "beep_enabled": beep,
            })
        except ValueError as exc:
            st.error(str(exc))
        else:
            st.success("Settings saved for this session.")
            st.rerun()

    if st.button("Reset to defaults"):
        reset_settings()
        st.rerun()


def main():
    _ensure_session_state()
    settings = current_settings()
    if not st.session_state.logging_ready:
        configure_logging(settings.log_level, settings.log_format)
        st.session_state.logging_ready = True

    st.sidebar.title("Navigation")
    page = st.sidebar.radio("Go to", ["Print Label", "Batch Print", "Settings"])

    if page == "Print Label":
        _print_page(settings)
    elif page == "Batch Print":
        _batch_page(settings)
    elif page == "Settings":
        _settings_page(settings)


if __name__ == "__main__":
    main()
