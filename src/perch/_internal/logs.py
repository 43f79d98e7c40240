"""Logging setup for the ``perch`` command.

Library modules only create named loggers (``perch.server``,
``perch.supervisor``, ``perch.routing``); handlers are attached here, once,
by the CLI.
"""

import json
import logging
import sys

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_FORMATS = ("text", "json")


class JSONFormatter(logging.Formatter):
    """One JSON object per record, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(level: str = "info", fmt: str = "text") -> logging.Logger:
    """Attach a stderr handler to the ``perch`` logger and return it."""
    logger = logging.getLogger("perch")
    logger.handlers.clear()
    logger.setLevel(level.upper())

    handler = logging.StreamHandler(sys.stderr)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
