"""
Structured logging for oeisbot.

Centralized logger with console and optional file output, plus counters
for OEIS lookups and random-sampling rejections.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime
import json


class StructuredLogger:
    """
    Logger with keyword context and lookup/sampling metrics.
    """

    def __init__(
        self,
        name: str = "oeisbot",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = False,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to a daily file in log_dir
            enable_console: Output logs to stderr
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.handlers.clear()

        self.metrics = {
            "api_calls": 0,
            "lookups_attempted": 0,
            "lookups_successful": 0,
            "lookups_not_found": 0,
            "lookups_failed": 0,
            "draws": 0,
            "rejected_not_found": 0,
            "rejected_excluded": 0,
            "errors_by_type": {},
        }

        # stdout is reserved for command output (e.g. --json)
        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
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

            log_file = log_dir / f"oeisbot_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs):
        self._log(logging.CRITICAL, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_api_call(self):
        self.metrics["api_calls"] += 1

    def record_lookup_attempt(self):
        self.metrics["lookups_attempted"] += 1

    def record_lookup_success(self):
        self.metrics["lookups_successful"] += 1

    def record_lookup_not_found(self):
        self.metrics["lookups_not_found"] += 1

    def record_lookup_failure(self, error_type: str):
        """Record a fatal lookup failure (transport or parse)."""
        self.metrics["lookups_failed"] += 1
        if error_type not in self.metrics["errors_by_type"]:
            self.metrics["errors_by_type"][error_type] = 0
        self.metrics["errors_by_type"][error_type] += 1

    def record_draw(self):
        self.metrics["draws"] += 1

    def record_rejection(self, reason: str):
        """Record a discarded random draw; reason is 'not_found' or 'excluded'."""
        key = f"rejected_{reason}"
        if key not in self.metrics:
            raise ValueError(f"Unknown rejection reason: {reason}")
        self.metrics[key] += 1

    def get_metrics(self) -> dict:
        """Return a copy of current metrics with derived acceptance rate."""
        metrics_copy = dict(self.metrics)
        metrics_copy["errors_by_type"] = dict(self.metrics["errors_by_type"])
        draws = metrics_copy["draws"]
        rejected = metrics_copy["rejected_not_found"] + metrics_copy["rejected_excluded"]
        if draws > 0:
            metrics_copy["acceptance_rate"] = round((draws - rejected) / draws, 3)
        return metrics_copy

    def log_metrics_summary(self):
        metrics = self.get_metrics()

        self.info("=== Sampling Session Metrics ===")
        self.info(f"API Calls: {metrics['api_calls']}")
        self.info(
            f"Lookups: {metrics['lookups_successful']}/{metrics['lookups_attempted']} "
            f"(not found: {metrics['lookups_not_found']}, failed: {metrics['lookups_failed']})"
        )
        if metrics["draws"]:
            self.info(
                f"Draws: {metrics['draws']} "
                f"(rejected not found: {metrics['rejected_not_found']}, "
                f"rejected excluded: {metrics['rejected_excluded']})"
            )

        if metrics["errors_by_type"]:
            self.info("Error Types:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "oeisbot",
    level: str = "INFO",
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Arguments only take effect on the first call; use reset_logger() to
    reconfigure.
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
