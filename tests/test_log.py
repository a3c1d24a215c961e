"""
Tests for structured logging setup.
"""

import json

from gs1_label.log import configure_logging, get_logger


class TestLogging:

    def test_json_lines_on_stderr(self, capsys):
        configure_logging("INFO", "json")

        get_logger("tests.log").info("scan_parsed", gtin="00012345678905")

        captured = capsys.readouterr()
        assert captured.out == ""
        event = json.loads(captured.err.strip().splitlines()[-1])
        assert event["event"] == "scan_parsed"
        assert event["gtin"] == "00012345678905"
        assert event["level"] == "info"

    def test_level_filters(self, capsys):
        configure_logging("WARNING", "console")

        get_logger("tests.log").info("hidden_event")

        assert "hidden_event" not in capsys.readouterr().err
