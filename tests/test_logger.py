"""
Tests for logger functionality.
"""

import logging

import pytest
from pathlib import Path
from gigboard.logger import StructuredLogger, get_logger, reset_logger


class TestStructuredLogger:
    """Test structured logging functionality."""

    def test_logger_creation(self, tmp_path):
        """Logger should be created with default settings."""
        logger = StructuredLogger(
            name="test",
            level="INFO",
            log_dir=tmp_path,
            enable_console=False,
        )

        assert logger.logger.name == "test"
        assert logger.get_metrics()["operations_attempted"] == 0

    def test_log_file_created(self, tmp_path):
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)
        logger.info("Gig posted", gig_id=1, employer="alice")

        log_files = list(tmp_path.glob("gigboard_*.log"))
        assert len(log_files) == 1
        content = log_files[0].read_text(encoding="utf-8")
        assert "Gig posted" in content
        assert '"gig_id": 1' in content

    def test_log_methods(self, tmp_path):
        """All log level methods should work."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        logger.debug("Debug message")
        logger.info("Info message")
        logger.warning("Warning message")
        logger.error("Error message")

    def test_metrics_tracking(self):
        logger = StructuredLogger(name="test", enable_console=False, enable_file=False)

        logger.record_attempt("post")
        logger.record_success("post")
        logger.record_attempt("assign")
        logger.record_failure("assign", "InvalidState")
        logger.record_attempt("assign")
        logger.record_failure("assign", "InvalidState")

        metrics = logger.get_metrics()
        assert metrics["operations_attempted"] == 3
        assert metrics["operations_succeeded"] == 1
        assert metrics["operations_failed"] == 2
        assert metrics["errors_by_type"]["InvalidState"] == 2
        assert metrics["operation_success_rate"]["post"]["success_rate"] == 1.0
        assert metrics["operation_success_rate"]["assign"]["success_rate"] == 0.0

    def test_metrics_summary(self, tmp_path):
        """Summary should be written to the log."""
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)
        logger.record_attempt("approve")
        logger.record_success("approve")

        logger.log_metrics_summary()

        content = next(tmp_path.glob("gigboard_*.log")).read_text(encoding="utf-8")
        assert "approve: 1/1 (100.0%)" in content


class TestGlobalLogger:

    def test_get_logger_returns_singleton(self):
        reset_logger()
        first = get_logger(enable_console=False, enable_file=False)
        second = get_logger()
        assert first is second

    def test_reset_logger(self):
        reset_logger()
        first = get_logger(enable_console=False, enable_file=False)
        reset_logger()
        second = get_logger(enable_console=False, enable_file=False)
        assert first is not second


class TestSummary:

    def test_summary_lines(self):
        logger = StructuredLogger(name="test", enable_console=False, enable_file=False)
        logger.record_attempt("assign")
        logger.record_failure("assign", "InvalidState")

        assert logger.summary_lines() == [
            "Operations: 0/1 succeeded",
            "  assign: 0/1 (0.0%)",
            "  InvalidState: 1",
        ]

    def test_summary_below_level_is_dropped(self, tmp_path):
        logger = StructuredLogger(name="test", level="INFO", log_dir=tmp_path, enable_console=False)
        logger.record_attempt("post")
        logger.record_success("post")

        logger.log_metrics_summary(level=logging.DEBUG)

        content = next(tmp_path.glob("gigboard_*.log")).read_text(encoding="utf-8")
        assert "post: 1/1" not in content
