"""Logger factory for the client.

Every call re-applies the requested level and format to the named logger, so
the most recently constructed client's settings are the ones in effect.
"""
from __future__ import annotations

import json
import logging
from logging import Logger
from typing import Optional

PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload = {
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def _formatter(json_output: bool) -> logging.Formatter:
    return JsonFormatter() if json_output else logging.Formatter(PLAIN_FORMAT)


def _client_handler(logger: Logger) -> logging.Handler:
    """Return the stream handler owned by this module, attaching one if needed."""
    for handler in logger.handlers:
        if getattr(handler, "_bestbuy_handler", False):
            return handler
    handler = logging.StreamHandler()
    handler._bestbuy_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return handler


def configure_logger(name: str, level: str = "INFO", json_output: bool = True) -> Logger:
    """Apply ``level`` and the output format to the named logger."""
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    _client_handler(logger).setFormatter(_formatter(json_output))
    logger.propagate = False
    return logger


def get_logger(name: Optional[str] = None, level: str = "INFO", json_output: bool = True) -> Logger:
    return configure_logger(name or "bestbuy", level=level, json_output=json_output)
