"""
Unit tests for structlog setup.
"""

import json
from unittest.mock import patch

import pytest
import structlog

from prompt_dissector.config import settings
from prompt_dissector.logging_config import setup_logging


class TestSetupLogging:
    """Tests for setup_logging()."""

    @pytest.mark.unit
    def test_json_logs_go_to_stderr(self, capsys):
        """Rendered events land on stderr and stdout stays empty."""
        with patch.object(settings, "log_json", True), patch.object(settings, "log_level", "info"):
            setup_logging()
            logger = structlog.get_logger("prompt_dissector.tests")
            logger.debug("hidden_event")
            logger.info("dissector_ready", blocks_count=2)

        captured = capsys.readouterr()
        assert captured.out == ""

        lines = captured.err.strip().splitlines()
        assert len(lines) == 1
        record = json.loads(lines[0])
        assert record["event"] == "dissector_ready"
        assert record["level"] == "info"
        assert record["blocks_count"] == 2
        assert "timestamp" in record
