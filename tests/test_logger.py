"""
Tests for logger functionality.
"""

import pytest
from jobtracker.logger import StructuredLogger, get_logger, reset_logger


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
        assert logger.metrics["jobs_added"] == 0

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

    def test_log_with_context(self, tmp_path):
        """Context is appended as JSON, including values json can't encode natively."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        logger.info("Message with context", url="https://example.com", path=tmp_path)

        content = next(tmp_path.glob("*.log")).read_text()
        assert '"url": "https://example.com"' in content
        assert str(tmp_path) in content

    def test_fetch_metrics(self, tmp_path):
        """Fetch counters and success rate."""
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)

        for _ in range(3):
            logger.record_fetch_attempt()
        logger.record_fetch_success()
        logger.record_fetch_success()
        logger.record_fetch_failure("FetchHTTPError")

        metrics = logger.get_metrics()
        assert metrics["fetches_attempted"] == 3
        assert metrics["fetches_successful"] == 2
        assert metrics["fetches_failed"] == 1
        assert metrics["errors_by_type"] == {"FetchHTTPError": 1}
        assert metrics["fetch_success_rate"] == pytest.approx(0.667, rel=0.01)

    def test_job_change_metrics(self, tmp_path):
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)

        logger.record_job_change("added")
        logger.record_job_change("added")
        logger.record_job_change("deleted")

        assert logger.metrics["jobs_added"] == 2
        assert logger.metrics["jobs_deleted"] == 1
        assert logger.metrics["jobs_updated"] == 0

    def test_unknown_job_change(self, tmp_path):
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)
        with pytest.raises(KeyError):
            logger.record_job_change("archived")

    def test_get_metrics_returns_copy(self, tmp_path):
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)
        metrics = logger.get_metrics()
        metrics["errors_by_type"]["Boom"] = 1
        assert logger.metrics["errors_by_type"] == {}

    def test_log_file_creation(self, tmp_path):
        """Log file should be created in specified directory."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        logger.info("Test message")

        log_files = list(tmp_path.glob("*.log"))
        assert len(log_files) == 1
        assert "Test message" in log_files[0].read_text()

    def test_metrics_summary(self, tmp_path):
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)
        logger.record_job_change("added")
        logger.record_extraction_failure("ExtractionError")

        logger.log_metrics_summary()

        content = next(tmp_path.glob("*.log")).read_text()
        assert "1 added" in content
        assert "ExtractionError: 1" in content


class TestGlobalLogger:
    """Test global logger singleton."""

    def test_get_logger_singleton(self, tmp_path):
        """get_logger should return same instance."""
        reset_logger()

        logger1 = get_logger(log_dir=tmp_path, enable_console=False)
        logger2 = get_logger()

        assert logger1 is logger2

    def test_reset_logger(self, tmp_path):
        """reset_logger should create new instance."""
        reset_logger()

        logger1 = get_logger(log_dir=tmp_path, enable_console=False)
        logger1.record_job_change("added")

        reset_logger()

        logger2 = get_logger(log_dir=tmp_path, enable_console=False)

        assert logger2 is not logger1
        assert logger2.metrics["jobs_added"] == 0
