"""
Structured logging for the job tracker.

Console and file output with optional JSON context, plus per-session
counters for fetches, extractions and store changes.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime
import json


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks session metrics for the add/update/delete workflow.
    """

    def __init__(
        self,
        name: str = "jobtracker",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.handlers.clear()
        self.logger.propagate = False

        self.metrics = {
            "fetches_attempted": 0,
            "fetches_successful": 0,
            "fetches_failed": 0,
            "extractions_failed": 0,
            "jobs_added": 0,
            "jobs_updated": 0,
            "jobs_deleted": 0,
            "errors_by_type": {},
        }

        if enable_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(message)s',
                datefmt='%H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"jobtracker_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with optional context."""
        self._log(logging.ERROR, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_fetch_attempt(self):
        self.metrics["fetches_attempted"] += 1

    def record_fetch_success(self):
        self.metrics["fetches_successful"] += 1

    def record_fetch_failure(self, error_type: str):
        self.metrics["fetches_failed"] += 1
        self.record_error(error_type)

    def record_extraction_failure(self, error_type: str):
        self.metrics["extractions_failed"] += 1
        self.record_error(error_type)

    def record_job_change(self, action: str):
        """Count a committed change; action is one of added, updated, deleted."""
        key = f"jobs_{action}"
        if key not in self.metrics:
            raise KeyError(f"Unknown job action: {action}")
        self.metrics[key] += 1

    def record_error(self, error_type: str):
        errors = self.metrics["errors_by_type"]
        errors[error_type] = errors.get(error_type, 0) + 1

    def get_metrics(self) -> dict:
        """Return a copy of the current metrics."""
        metrics_copy = dict(self.metrics)
        metrics_copy["errors_by_type"] = dict(self.metrics["errors_by_type"])
        attempts = metrics_copy["fetches_attempted"]
        if attempts > 0:
            metrics_copy["fetch_success_rate"] = round(
                metrics_copy["fetches_successful"] / attempts, 3
            )
        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        self.info("=== Session Summary ===")
        self.info(
            f"Fetches: {metrics['fetches_successful']}/{metrics['fetches_attempted']} succeeded"
        )
        self.info(
            f"Jobs: {metrics['jobs_added']} added, {metrics['jobs_updated']} updated, "
            f"{metrics['jobs_deleted']} deleted"
        )

        if metrics["errors_by_type"]:
            self.info("Error Types:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "jobtracker",
    level: str = "INFO",
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
