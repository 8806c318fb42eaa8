"""
Logging helpers for testweaver.

User-facing output goes through the ``testweaver`` logger: informational
records to stdout, warnings and errors to stderr with a distinct prefix.
"""

from __future__ import annotations

import logging
import sys
from enum import IntEnum

LOGGER_NAME = "testweaver"
VERBOSE = 15

logging.addLevelName(VERBOSE, "VERBOSE")


class LogLevel(IntEnum):
    # SILENT still lets critical (fatal) errors through.
    SILENT = logging.CRITICAL
    ERROR = logging.ERROR
    WARN = logging.WARNING
    INFO = logging.INFO
    VERBOSE = VERBOSE
    DEBUG = logging.DEBUG


class _PrefixFormatter(logging.Formatter):
    PREFIXES = {
        logging.WARNING: "warning: ",
        logging.ERROR: "error: ",
        logging.CRITICAL: "error: ",
    }

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        return self.PREFIXES.get(record.levelno, "") + message


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(LOGGER_NAME if not name else f"{LOGGER_NAME}.{name}")


def set_log_level(level: LogLevel | int) -> None:
    logging.getLogger(LOGGER_NAME).setLevel(int(level))


def configure_logging(level: LogLevel | int = LogLevel.INFO) -> logging.Logger:
    """
    Install the console handlers on the package logger.

    Safe to call more than once; previous handlers are replaced.
    """
    log = logging.getLogger(LOGGER_NAME)
    for handler in list(log.handlers):
        log.removeHandler(handler)

    formatter = _PrefixFormatter("%(message)s")

    out_handler = logging.StreamHandler(sys.stdout)
    out_handler.addFilter(lambda record: record.levelno < logging.WARNING)
    out_handler.setFormatter(formatter)

    err_handler = logging.StreamHandler(sys.stderr)
    err_handler.setLevel(logging.WARNING)
    err_handler.setFormatter(formatter)

    log.addHandler(out_handler)
    log.addHandler(err_handler)
    set_log_level(level)
    return log


def verbose(log: logging.Logger, message: str, *args: object) -> None:
    log.log(VERBOSE, message, *args)
