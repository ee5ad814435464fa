"""
logging.py - Log Setup for the Interest Engine

The engine logs through module loggers under the "interest_engine"
namespace: the registry reports created loans and override writes at INFO
and rejected writes at WARNING/DEBUG; formulas report DIVISION_BY_ZERO at
DEBUG. Messages are plain %-style strings with no structured payload.

setup_logging() installs one stdout handler on the root logger, either as
pipe-separated text or as one JSON object per line.
"""

import json
import logging
import sys
from datetime import datetime, timezone


STANDARD_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class JsonFormatter(logging.Formatter):
    """One JSON object per record: timestamp, level, logger and message."""

    def format(self, record: logging.LogRecord) -> str:
        return json.dumps({
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        })


def setup_logging(level: str = "INFO", format_type: str = "standard") -> None:
    """
    Configure the root logger for the interest engine.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL). Unknown
            names fall back to INFO.
        format_type: "json" for JsonFormatter, anything else for text.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if format_type == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(fmt=STANDARD_FORMAT, datefmt=DATE_FORMAT)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    logging.getLogger("interest_engine").setLevel(log_level)


def get_logger(name: str) -> logging.Logger:
    """Logger for a module of this package (pass __name__)."""
    return logging.getLogger(name)
