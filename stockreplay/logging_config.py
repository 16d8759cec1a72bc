"""
Logging setup for stockreplay.

Every record carries a trace_id naming what it is about: an input file
path, an output directory or a stock key. With the json format this lets a
replay log be filtered down to a single stock line.

Environment Variables:
    STOCKREPLAY_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR - default: INFO
    STOCKREPLAY_LOG_FORMAT: text or json - default: text

Usage:
    from stockreplay.logging_config import setup_logging, get_logger

    setup_logging(level="DEBUG")
    log = get_logger(__name__, trace_id="PLSTORE_ES_BESTAND_EOD.csv")
    log.info("Loaded 120 stock records")
"""

import logging
import os
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger

DEFAULT_TRACE_ID = "N/A"

LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s [trace_id=%(trace_id)s]"
JSON_FIELDS = "%(asctime)s %(name)s %(levelname)s %(message)s %(trace_id)s"


def _formatter(log_format: str) -> logging.Formatter:
    if log_format == "json":
        return jsonlogger.JsonFormatter(
            JSON_FIELDS,
            rename_fields={"asctime": "timestamp", "name": "logger", "levelname": "level"},
        )
    return logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def setup_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """
    Install a single stderr handler on the root logger.

    Args:
        level: Level name; falls back to STOCKREPLAY_LOG_LEVEL, then INFO
        log_format: "text" or "json"; falls back to STOCKREPLAY_LOG_FORMAT, then text

    Output goes to stderr so `--json` command output on stdout stays parseable.
    Calling this again replaces the previous handler.
    """
    level_name = (level or os.getenv("STOCKREPLAY_LOG_LEVEL", "INFO")).upper()
    fmt = (log_format or os.getenv("STOCKREPLAY_LOG_FORMAT", "text")).lower()
    resolved = LEVEL_MAP.get(level_name, logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(resolved)
    handler.addFilter(TraceIDFilter())
    handler.setFormatter(_formatter(fmt))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.setLevel(resolved)
    root.addHandler(handler)


def get_logger(name: str, trace_id: Optional[str] = None) -> logging.LoggerAdapter:
    """
    Module logger bound to a trace_id.

    Args:
        name: Logger name, usually __name__
        trace_id: File path, directory or stock key the messages are about

    Returns:
        LoggerAdapter that adds trace_id to every record
    """
    return logging.LoggerAdapter(logging.getLogger(name), {"trace_id": trace_id or DEFAULT_TRACE_ID})


class TraceIDFilter(logging.Filter):
    """Fill in trace_id for records logged without an adapter (third-party loggers)."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "trace_id"):
            record.trace_id = DEFAULT_TRACE_ID  # type: ignore
        return True
