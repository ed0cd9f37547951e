"""Tests for structured logging setup."""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Iterator

import pytest

from serpbridge.config.settings import ObservabilitySettings
from serpbridge.observability.logging import setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


class TestSetupLogging:
    def test_json_lines(self) -> None:
        stream = io.StringIO()
        setup_logging(ObservabilitySettings(log_level="info", log_format="json"), stream=stream)

        logging.getLogger("serpbridge.adapters.serper").info("Registered adapter: %s", "serper")

        record = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert record["event"] == "Registered adapter: serper"
        assert record["level"] == "info"
        assert record["logger"] == "serpbridge.adapters.serper"
        assert "timestamp" in record

    def test_level_filters(self) -> None:
        stream = io.StringIO()
        setup_logging(ObservabilitySettings(log_level="warning"), stream=stream)

        logging.getLogger("serpbridge.test").info("hidden")
        logging.getLogger("serpbridge.test").warning("shown")

        output = stream.getvalue()
        assert "hidden" not in output
        assert "shown" in output

    def test_console_format(self) -> None:
        stream = io.StringIO()
        setup_logging(ObservabilitySettings(log_format="console"), stream=stream)

        logging.getLogger("serpbridge.test").warning("plain text")

        line = stream.getvalue().strip()
        assert "plain text" in line
        assert not line.startswith("{")

    def test_defaults(self) -> None:
        setup_logging()
        assert logging.getLogger().level == logging.INFO
