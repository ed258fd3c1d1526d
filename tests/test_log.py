"""Tests for logging setup."""

import logging
import tempfile
from pathlib import Path

from ojt_tracker.core.log import setup_logging


class TestSetupLogging:
    """Test setup_logging."""

    def teardown_method(self) -> None:
        setup_logging("INFO")

    def test_level(self) -> None:
        """Test that the package logger takes the configured level."""
        setup_logging("DEBUG")
        assert logging.getLogger("ojt_tracker").level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self) -> None:
        """Test an unknown level name."""
        setup_logging("LOUD")
        assert logging.getLogger("ojt_tracker").level == logging.INFO

    def test_repeated_calls_replace_handlers(self) -> None:
        """Test that handlers do not accumulate."""
        setup_logging("INFO")
        setup_logging("INFO")

        logger = logging.getLogger("ojt_tracker")
        assert len(logger.handlers) == 1

    def test_log_file(self) -> None:
        """Test logging to a file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            log_file = Path(tmpdir) / "logs" / "ojt.log"
            setup_logging("INFO", str(log_file))

            logging.getLogger("ojt_tracker.test").info("hello from test")
            setup_logging("INFO")

            content = log_file.read_text()
            assert "ojt_tracker.test - INFO - hello from test" in content
