"""
Structured logging system for skillmatch.

Provides centralized logging with console and file outputs, log levels,
and counters for monitoring matching runs and job-search calls.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime
import json


def resolve_level(level: Optional[str]) -> int:
    """Map a level name such as "debug" or "WARNING" to its number, INFO if unknown."""
    value = logging.getLevelName(str(level or "INFO").strip().upper())
    # getLevelName returns a "Level X" string for names it does not know
    return value if isinstance(value, int) else logging.INFO


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks counters for matching runs and job-search API health.
    """

    def __init__(
        self,
        name: str = "skillmatch",
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
        log_level = resolve_level(level)
        self.logger = logging.getLogger(name)
        self.logger.setLevel(log_level)
        self.logger.handlers.clear()  # Remove existing handlers

        self.metrics = {
            "matches_computed": 0,
            "jobs_ranked": 0,
            "api_calls": 0,
            "fetches_attempted": 0,
            "fetches_successful": 0,
            "fetches_failed": 0,
            "errors_by_type": {},
        }

        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(log_level)
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"skillmatch_{datetime.now().strftime('%Y%m%d')}.log"
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

    def critical(self, message: str, **kwargs):
        """Log critical message with optional context."""
        self._log(logging.CRITICAL, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if not self.logger.isEnabledFor(level):
            return
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Counters

    def record_matches(self, count: int = 1):
        """Add to the number of candidate/job comparisons performed."""
        self.metrics["matches_computed"] += count

    def record_ranking(self, job_count: int):
        """Record a ranking run over job_count jobs."""
        self.metrics["jobs_ranked"] += job_count
        self.record_matches(job_count)

    def record_api_call(self):
        """Increment API call counter."""
        self.metrics["api_calls"] += 1

    def record_fetch_attempt(self):
        self.metrics["fetches_attempted"] += 1

    def record_fetch_success(self):
        self.metrics["fetches_successful"] += 1

    def record_fetch_failure(self, error_type: str):
        """Record a failed job-search fetch."""
        self.metrics["fetches_failed"] += 1

        if error_type not in self.metrics["errors_by_type"]:
            self.metrics["errors_by_type"][error_type] = 0
        self.metrics["errors_by_type"][error_type] += 1

    def get_metrics(self) -> dict:
        """Return current metrics, with the fetch success rate when any fetch ran."""
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

        self.info("=== Matching Session Metrics ===")
        self.info(f"Matches computed: {metrics['matches_computed']}")
        self.info(f"Jobs ranked: {metrics['jobs_ranked']}")

        attempts = metrics["fetches_attempted"]
        if attempts:
            rate = metrics.get("fetch_success_rate", 0) * 100
            self.info(f"API Calls: {metrics['api_calls']}")
            self.info(f"Fetches: {metrics['fetches_successful']}/{attempts} ({rate:.1f}% success)")

        if metrics["errors_by_type"]:
            self.info("Error Types:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "skillmatch",
    level: Optional[str] = None,
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Level and file output default to SKILLMATCH_LOG_LEVEL,
    SKILLMATCH_LOG_FILE and SKILLMATCH_LOG_DIR.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        if level is None:
            level = os.getenv("SKILLMATCH_LOG_LEVEL", "INFO")
        kwargs.setdefault(
            "enable_file",
            os.getenv("SKILLMATCH_LOG_FILE", "").lower() in ("1", "true", "yes"),
        )
        kwargs.setdefault("log_dir", Path(os.getenv("SKILLMATCH_LOG_DIR", "logs")))
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
