"""
Structured logging for stationpref.

Provides centralized logging to console and a daily log file, plus
thread-safe counters for monitoring lookup health during a batch run.
"""

import logging
import sys
import threading
from pathlib import Path
from typing import Optional
from datetime import datetime
import json


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks metrics for remote lookups and per-item outcomes.
    """

    def __init__(
        self,
        name: str = "stationpref",
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

        # Workers update these concurrently
        self._lock = threading.Lock()
        self.metrics = {
            "api_calls": {},
            "items_attempted": 0,
            "items_resolved": 0,
            "items_no_match": 0,
            "items_failed": 0,
            "errors_by_type": {},
        }

        if enable_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(threadName)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"stationpref_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(threadName)s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    def close(self):
        """Detach and close all handlers."""
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)

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

    def critical(self, message: str, **kwargs):
        """Log critical message with optional context."""
        self._log(logging.CRITICAL, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if context:
            message = f"{message} | Context: {json.dumps(context, ensure_ascii=False)}"
        # stacklevel points %(lineno)d at the caller of debug()/info()/...
        self.logger.log(level, message, stacklevel=3)

    # Metric tracking methods

    def record_api_call(self, service: str):
        """Increment the call counter for a remote service."""
        with self._lock:
            calls = self.metrics["api_calls"]
            calls[service] = calls.get(service, 0) + 1

    def record_item_attempt(self):
        with self._lock:
            self.metrics["items_attempted"] += 1

    def record_item_resolved(self):
        with self._lock:
            self.metrics["items_resolved"] += 1

    def record_item_no_match(self):
        with self._lock:
            self.metrics["items_no_match"] += 1

    def record_item_failure(self, error_type: str):
        """Record a failed item and the type of error behind it."""
        with self._lock:
            self.metrics["items_failed"] += 1
            errors = self.metrics["errors_by_type"]
            errors[error_type] = errors.get(error_type, 0) + 1

    def get_metrics(self) -> dict:
        """Return a snapshot of current metrics."""
        with self._lock:
            snapshot = {
                k: (dict(v) if isinstance(v, dict) else v)
                for k, v in self.metrics.items()
            }

        attempted = snapshot["items_attempted"]
        snapshot["success_rate"] = (
            round(snapshot["items_resolved"] / attempted, 3) if attempted > 0 else 0.0
        )
        return snapshot

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        total = metrics["items_attempted"]
        rate = round(metrics["success_rate"] * 100, 1)

        self.info("=== Resolution Session Metrics ===")
        self.info(f"Items: {metrics['items_resolved']}/{total} resolved ({rate}% success)")
        self.info(f"No match: {metrics['items_no_match']}, failed: {metrics['items_failed']}")

        if metrics["api_calls"]:
            self.info("API Calls:")
            for service, count in metrics["api_calls"].items():
                self.info(f"  {service}: {count}")

        if metrics["errors_by_type"]:
            self.info("Error Types:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "stationpref",
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
    if _global_logger is not None:
        _global_logger.close()
    _global_logger = None
