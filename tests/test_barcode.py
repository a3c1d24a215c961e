"""
Tests for DataMatrix rendering requests.

BWIPP itself is replaced by a fake unless Ghostscript is installed.
"""

import shutil

import pytest
import treepoem
from PIL import Image

from gs1_label import build, parse_from_user_input
from gs1_label.rendering import barcode
from gs1_label.rendering.barcode import (
    BarcodeRenderError,
    barcode_request,
    image_to_png,
    render_ai_string,
    render_datamatrix,
    render_datamatrix_png,
)

GS = "\x1d"


@pytest.fixture
def reps():
    return build(parse_from_user_input("010001234567890521A^C<GS>9319AB"))


@pytest.fixture
def fake_generate(monkeypatch):
    calls = []

    def generate_barcode(barcode_type, data, options=None, scale=2):
        calls.append({"barcode_type": barcode_type, "data": data, "options": options, "scale": scale})
        return Image.new("1", (20, 20), 1)

    monkeypatch.setattr(barcode.treepoem, "generate_barcode", generate_barcode)
    return calls


class TestBarcodeRequest:

    def test_gs1_mode(self, reps):
        request = barcode_request(reps, "gs1")

        assert request == {
            "barcode_type": "gs1datamatrix",
            "data": "(01)00012345678905(21)A^C(93)19AB",
            "options": {"parse": True},
        }

    def test_fnc1_caret_mode(self, reps):
        request = barcode_request(reps, "fnc1-caret")

        assert request["barcode_type"] == "datamatrix"
        assert request["data"] == "^FNC1010001234567890521A^094C^0299319AB"
        assert request["options"] == {"parsefnc": True}

    def test_raw_mode(self, reps):
        request = barcode_request(reps, "raw")

        assert request["data"] == ("010001234567890521A^C" + GS + "9319AB").encode("utf-8")
        assert request["options"] == {}

    def test_unknown_mode(self, reps):
        with pytest.raises(ValueError, match="Unknown render mode"):
            barcode_request(reps, "qr")


class TestRender:

    def test_render_uses_request(self, reps, fake_generate):
        image = render_datamatrix(reps, mode="fnc1-caret", scale=3)

        assert image.mode == "RGB"
        assert fake_generate[0]["barcode_type"] == "datamatrix"
        assert fake_generate[0]["scale"] == 3

    def test_scale_raised_to_one(self, reps, fake_generate):
        render_datamatrix(reps, scale=0)

        assert fake_generate[0]["scale"] == 1

    def test_render_ai_string_compacts(self, fake_generate):
        render_ai_string("(01) 00012345678905 (21) ABC")

        assert fake_generate[0]["data"] == "(01)00012345678905(21)ABC"

    def test_png_bytes(self, reps, fake_generate):
        assert render_datamatrix_png(reps).startswith(b"\x89PNG")
        assert image_to_png(Image.new("RGB", (2, 2))).startswith(b"\x89PNG")

    def test_failure_wrapped(self, reps, monkeypatch):
        def broken(**kwargs):
            raise treepoem.TreepoemError("bad data")

        monkeypatch.setattr(barcode.treepoem, "generate_barcode", broken)

        with pytest.raises(BarcodeRenderError, match="gs1"):
            render_datamatrix(reps)


@pytest.mark.skipif(shutil.which("gs") is None, reason="Ghostscript not installed")
class TestGhostscript:
    """Real BWIPP rendering."""

    @pytest.mark.parametrize("mode", ["gs1", "fnc1-caret", "raw"])
    def test_each_mode_renders(self, mode):
        reps = build(parse_from_user_input("010001234567890521ABC123<GS>9319AB"))

        image = render_datamatrix(reps, mode=mode, scale=2)

        assert image.size[0] > 0
        assert image.size[0] == image.size[1]
