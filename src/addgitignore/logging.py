"""
Logging for addgitignore.

Modules log through get_logger(__name__). Output is configured once by the
host via setup_logging(); library users who never call it get the stdlib
default (warnings and above to stderr via the root logger).
"""

from __future__ import annotations

import json
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "addgitignore"

_HANDLER_NAME = "addgitignore-handler"


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def get_logger(name: str) -> logging.Logger:
    """Get a logger below the package root."""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logging(level: str = "INFO", json_output: bool = False) -> logging.Logger:
    """
    Install the package log handler.

    Calling it again replaces the previous handler, so it is safe to call
    from every CLI invocation.

    Args:
        level: Log level name.
        json_output: Emit JSON lines instead of rich console output.

    Returns:
        The package root logger.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)

    if json_output:
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(JsonFormatter())
    else:
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))

    handler.set_name(_HANDLER_NAME)
    root.addHandler(handler)
    root.setLevel(level.upper())
    root.propagate = False
    return root


__all__ = ["get_logger", "setup_logging", "JsonFormatter"]
