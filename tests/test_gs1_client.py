"""
Tests for the UI scan integration (no Streamlit needed).
"""

from gs1_label.config import load_settings
from modules.gs1_client import WRONG_LAYOUT_MESSAGE, parse_scan


def _settings(**overrides):
    return load_settings(overrides)


class TestParseScan:

    def test_success(self):
        ok, data, err = parse_scan("010001234567890521ABC123<GS>9319AB", _settings())

        assert ok
        assert err == ""
        assert data["record"].serial == "ABC123"
        assert data["representations"].ai_text == "(01)00012345678905(21)ABC123<GS>(93)19AB"
        assert data["fields"]["Verification Code (short)"] == "19AB"

    def test_empty_input(self):
        assert parse_scan("   ", _settings()) == (False, {}, "Empty scan input")
        assert parse_scan("", _settings()) == (False, {}, "Empty scan input")

    def test_parse_error_message(self):
        ok, data, err = parse_scan("0100012345678905", _settings())

        assert not ok
        assert data == {}
        assert err == "MISSING_SERIAL: (21) is missing"

    def test_cyrillic_rejected(self):
        ok, _, err = parse_scan("010001234567890521ФЫВА", _settings())

        assert not ok
        assert err == WRONG_LAYOUT_MESSAGE

    def test_cyrillic_remapped(self):
        ok, data, _ = parse_scan("010001234567890521ФЫВА", _settings(remap_cyrillic_layout=True))

        assert ok
        assert data["record"].serial == "ASDF"

    def test_cyrillic_passed_through_when_allowed(self):
        """Without reject or remap the parser sees the Cyrillic serial as is."""
        ok, data, _ = parse_scan("010001234567890521ФЫВА", _settings(reject_cyrillic=False))

        assert ok
        assert data["record"].serial == "ФЫВА"

    def test_separator_only_scan_reaches_parser(self):
        ok, _, err = parse_scan("\x1d", _settings())

        assert not ok
        assert err.startswith("BAD_GTIN")
