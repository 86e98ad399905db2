"""
Structured logging system for candidmatch.

Provides centralized logging with console and file outputs, log levels,
and counters for monitoring batch match generation.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime
import json


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks metrics for monitoring match generation runs.
    """

    def __init__(
        self,
        name: str = "candidmatch",
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

        self.metrics = self._empty_metrics()

        if enable_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(getattr(logging, level.upper()))
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

            log_file = log_dir / f"candidmatch_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    @staticmethod
    def _empty_metrics() -> dict:
        return {
            "batches": 0,
            "pairs_evaluated": 0,
            "pairs_kept": 0,
            "pairs_below_threshold": 0,
            "authorities_unresolved": 0,
            "status_counts": {},
            "strength_counts": {},
        }

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

    def record_batch(self):
        self.metrics["batches"] += 1

    def record_pair(self, kept: bool, status: Optional[str] = None, strength: Optional[str] = None):
        """Record one scored (job seeker, authority) pair."""
        self.metrics["pairs_evaluated"] += 1
        if not kept:
            self.metrics["pairs_below_threshold"] += 1
            return
        self.metrics["pairs_kept"] += 1
        if status:
            counts = self.metrics["status_counts"]
            counts[status] = counts.get(status, 0) + 1
        if strength:
            counts = self.metrics["strength_counts"]
            counts[strength] = counts.get(strength, 0) + 1

    def record_unresolved_authority(self):
        self.metrics["authorities_unresolved"] += 1

    def get_metrics(self) -> dict:
        """Return current metrics with the keep rate filled in."""
        metrics_copy = json.loads(json.dumps(self.metrics))
        evaluated = metrics_copy["pairs_evaluated"]
        metrics_copy["keep_rate"] = (
            round(metrics_copy["pairs_kept"] / evaluated, 3) if evaluated else 0.0
        )
        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        self.info("=== Match Generation Metrics ===")
        self.info(f"Batches: {metrics['batches']}")
        self.info(
            f"Pairs: {metrics['pairs_kept']}/{metrics['pairs_evaluated']} kept "
            f"({metrics['keep_rate'] * 100:.1f}%)"
        )
        if metrics["authorities_unresolved"]:
            self.info(f"Unresolved authorities: {metrics['authorities_unresolved']}")

        if metrics["status_counts"]:
            self.info("Status:")
            for status, count in metrics["status_counts"].items():
                self.info(f"  {status}: {count}")

        if metrics["strength_counts"]:
            self.info("Connection strength:")
            for strength, count in metrics["strength_counts"].items():
                self.info(f"  {strength}: {count}")


_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "candidmatch",
    level: Optional[str] = None,
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Level and file output default to CANDIDMATCH_LOG_LEVEL and
    CANDIDMATCH_LOG_DIR; without a log directory only the console is used.

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
            level = os.getenv("CANDIDMATCH_LOG_LEVEL", "INFO")
        if "log_dir" not in kwargs and "enable_file" not in kwargs:
            env_dir = os.getenv("CANDIDMATCH_LOG_DIR")
            kwargs["enable_file"] = bool(env_dir)
            if env_dir:
                kwargs["log_dir"] = Path(env_dir)
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
