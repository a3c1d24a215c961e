import logging
import os

import pytest


@pytest.fixture(autouse=True)
def _clean_label_environment(monkeypatch):
    """Settings tests start from the defaults, whatever the shell exports."""
    for name in list(os.environ):
        if name.upper().startswith("GS1_LABEL_"):
            monkeypatch.delenv(name)


@pytest.fixture(autouse=True)
def _drop_log_handlers():
    """configure_logging() binds the root handler to the captured stderr."""
    yield
    logging.getLogger().handlers.clear()
