"""
Tests for the three textual forms of a parsed record and the JSON output.
"""

import json

import pytest

from gs1_label import build, parse, parse_from_user_input, parse_to_dict, parse_to_json
from gs1_label.formatters.representations import compact_ai, gs_to_placeholder

GS = "\x1d"
GTIN = "00012345678905"
CODE44 = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQR"


class TestRepresentations:
    """pretty_ai, ai_text and raw_with_gs."""

    def test_no_tails(self):
        reps = build(parse("0100012345678905211234567"))

        assert reps.pretty_ai == "(01) 00012345678905 (21) 1234567"
        assert reps.ai_text == "(01)00012345678905(21)1234567"
        assert reps.raw_with_gs == "0100012345678905211234567"

    def test_one_tail(self):
        reps = build(parse_from_user_input("010001234567890521ABC123<GS>9319AB"))

        assert reps.pretty_ai == "(01) 00012345678905 (21) ABC123 (93) 19AB"
        assert reps.ai_text == "(01)00012345678905(21)ABC123<GS>(93)19AB"
        assert reps.raw_with_gs == "010001234567890521ABC123" + GS + "9319AB"
        assert reps.raw_visible == "010001234567890521ABC123<GS>9319AB"

    def test_two_tails(self):
        reps = build(parse("0100012345678905215NtEuRRYbQofV" + GS + "91EE07" + GS + "92" + CODE44))

        assert reps.ai_text == "(01)00012345678905(21)5NtEuRRYbQofV<GS>(91)EE07<GS>(92)" + CODE44
        assert reps.raw_with_gs.count(GS) == 2

    def test_representations_are_frozen(self):
        reps = build(parse("0100012345678905211234567"))

        with pytest.raises(AttributeError):
            reps.pretty_ai = "changed"


class TestCanonicalSeparators:
    """raw_with_gs always separates every tail, whatever the input did."""

    def test_separator_inserted_when_input_had_none(self):
        record = parse("010001234567890521AB93CDEF")

        assert record.tails[0].had_leading_separator is False
        assert build(record).raw_with_gs == "010001234567890521AB" + GS + "93CDEF"

    def test_mixed_separators(self):
        record = parse("010001234567890521ABC" + GS + "91EE07" + "9319AB")

        assert [t.had_leading_separator for t in record.tails] == [True, False]
        assert build(record).raw_with_gs == "010001234567890521ABC" + GS + "91EE07" + GS + "9319AB"


class TestRoundTrip:
    """raw_with_gs parses back to the same GTIN, serial and tails."""

    @pytest.mark.parametrize("text", [
        "0100012345678905211234567",
        "010001234567890521ABC123" + GS + "9319AB",
        "010001234567890521AB93CDEF",
        "010001234567890521ABC" + GS + "91EE07" + GS + "92" + CODE44,
        "010001234567890521ABC" + GS + "92" + CODE44 + "93" + "19AB",
    ])
    def test_round_trip(self, text):
        record = parse(text)
        again = parse(build(record).raw_with_gs)

        assert again.gtin == record.gtin
        assert again.serial == record.serial
        assert [(t.ai, t.value) for t in again.tails] == [(t.ai, t.value) for t in record.tails]
        assert all(t.had_leading_separator for t in again.tails)

    def test_visible_form_round_trips_through_normalizer(self):
        reps = build(parse("010001234567890521AB93CDEF"))

        assert build(parse_from_user_input(reps.raw_visible)) == reps


class TestHelpers:

    def test_gs_to_placeholder(self):
        assert gs_to_placeholder("a" + GS + "b" + GS) == "a<GS>b<GS>"

    def test_compact_ai(self):
        assert compact_ai("(01) 00012345678905 (21) ABC (93) 19AB") == "(01)00012345678905(21)ABC(93)19AB"


class TestJSONOutput:
    """Field names, representations and error objects."""

    def test_field_names(self):
        data = parse_to_dict("010001234567890521ABC<GS>91EE07<GS>92" + CODE44)

        assert data["GTIN"] == GTIN
        assert data["Serial Number"] == "ABC"
        assert data["Verification Key ID"] == "EE07"
        assert data["Verification Code"] == CODE44
        assert data["raw"].count("<GS>") == 2

    def test_repeated_tail_keys(self):
        data = parse_to_dict("010001234567890521ABC<GS>93ABCD<GS>93EFGH")

        assert data["Verification Code (short)"] == "ABCD"
        assert data["Verification Code (short) #2"] == "EFGH"

    def test_json_is_valid(self):
        data = json.loads(parse_to_json("0100012345678905211234567"))

        assert data == {
            "GTIN": GTIN,
            "Serial Number": "1234567",
            "prettyAI": "(01) 00012345678905 (21) 1234567",
            "aiText": "(01)00012345678905(21)1234567",
            "raw": "0100012345678905211234567",
        }

    def test_json_error_object(self):
        data = json.loads(parse_to_json("0100012345678905"))

        assert data["code"] == "MISSING_SERIAL"
        assert data["error"] == "MISSING_SERIAL: (21) is missing"
        assert data["at_index"] == 16
        assert data["input"] == "0100012345678905"
