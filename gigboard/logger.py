"""
Structured logging for gigboard.

Console and daily file output plus per-operation counters, so a run can
report how many posts, assignments and approvals went through and which
guard rejected the rest.
"""

import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional
from datetime import datetime
import json

LINE_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
FILE_LINE_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class StructuredLogger:
    """
    Wraps a stdlib logger; keyword arguments to the level methods are
    appended to the message as JSON context.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for log files (default: logs/)
        enable_file: Write logs to file
        enable_console: Write logs to stderr
    """

    def __init__(
        self,
        name: str = "gigboard",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        numeric_level = getattr(logging, level.upper())
        self.logger = logging.getLogger(name)
        self.logger.setLevel(numeric_level)
        self.logger.handlers.clear()

        # operation -> {"attempts", "successes"}
        self.operations: Dict[str, Dict[str, int]] = {}
        self.errors_by_type: Dict[str, int] = {}

        if enable_console:
            # stderr keeps command output on stdout parseable
            handler = logging.StreamHandler(sys.stderr)
            handler.setLevel(numeric_level)
            handler.setFormatter(logging.Formatter(fmt=LINE_FORMAT, datefmt=DATE_FORMAT))
            self.logger.addHandler(handler)

        if enable_file:
            log_dir = log_dir or Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)
            log_file = log_dir / f"gigboard_{datetime.now().strftime('%Y%m%d')}.log"
            handler = logging.FileHandler(log_file, encoding='utf-8')
            handler.setFormatter(logging.Formatter(fmt=FILE_LINE_FORMAT, datefmt=DATE_FORMAT))
            self.logger.addHandler(handler)

    def log(self, level: int, message: str, **context):
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    def debug(self, message: str, **context):
        self.log(logging.DEBUG, message, **context)

    def info(self, message: str, **context):
        self.log(logging.INFO, message, **context)

    def warning(self, message: str, **context):
        self.log(logging.WARNING, message, **context)

    def error(self, message: str, **context):
        self.log(logging.ERROR, message, **context)

    # Operation counters

    def record_attempt(self, operation: str):
        stats = self.operations.setdefault(operation, {"attempts": 0, "successes": 0})
        stats["attempts"] += 1

    def record_success(self, operation: str):
        self.operations[operation]["successes"] += 1

    def record_failure(self, operation: str, error_type: str):
        self.errors_by_type[error_type] = self.errors_by_type.get(error_type, 0) + 1

    def get_metrics(self) -> dict:
        """Totals, per-operation counts with success rate, and failures by error type."""
        attempted = sum(s["attempts"] for s in self.operations.values())
        succeeded = sum(s["successes"] for s in self.operations.values())
        per_operation = {
            op: dict(s, success_rate=round(s["successes"] / s["attempts"], 3))
            for op, s in self.operations.items()
        }
        return {
            "operations_attempted": attempted,
            "operations_succeeded": succeeded,
            "operations_failed": attempted - succeeded,
            "errors_by_type": dict(self.errors_by_type),
            "operation_success_rate": per_operation,
        }

    def summary_lines(self) -> List[str]:
        metrics = self.get_metrics()
        lines = [f"Operations: {metrics['operations_succeeded']}/{metrics['operations_attempted']} succeeded"]
        for op, stats in metrics["operation_success_rate"].items():
            lines.append(
                f"  {op}: {stats['successes']}/{stats['attempts']} ({stats['success_rate'] * 100:.1f}%)"
            )
        for error_type, count in metrics["errors_by_type"].items():
            lines.append(f"  {error_type}: {count}")
        return lines

    def log_metrics_summary(self, level: int = logging.INFO):
        for line in self.summary_lines():
            self.log(level, line)


_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "gigboard",
    level: str = "INFO",
    **kwargs
) -> StructuredLogger:
    """
    Get or create the process-wide logger. Arguments only apply on creation.
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Drop the process-wide logger (useful for testing)."""
    global _global_logger
    _global_logger = None
