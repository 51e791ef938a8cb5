"""Log formatting for caseforge.

Library modules log through ``logging.getLogger(__name__)`` and never
configure handlers themselves. The command line calls setup_logging()
to pick between a human-readable format and JSON lines.

Example:
    >>> from caseforge.logs import setup_logging
    >>> setup_logging("DEBUG", json_format=True)
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, TextIO


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Attributes:
        include_location: Whether to include file/line/function in output.
        extra_fields: Additional fields to include in every log record.
    """

    def __init__(
        self,
        include_location: bool = False,
        extra_fields: dict[str, Any] | None = None,
    ) -> None:
        super().__init__()
        self.include_location = include_location
        self.extra_fields = extra_fields or {}

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }

        if self.include_location:
            log_data["location"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info and record.exc_info[0] is not None:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        for key, value in self.extra_fields.items():
            if key not in log_data:
                log_data[key] = value

        return json.dumps(log_data, default=str, ensure_ascii=False)


class HumanReadableFormatter(logging.Formatter):
    """Colored single-line formatter for terminals."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True, stream: TextIO | None = None) -> None:
        super().__init__()
        self.use_colors = use_colors and self._supports_color(stream or sys.stderr)

    @staticmethod
    def _supports_color(stream: TextIO) -> bool:
        if os.environ.get("NO_COLOR"):
            return False
        if sys.platform == "win32":
            return os.environ.get("ANSICON") is not None or "WT_SESSION" in os.environ
        return hasattr(stream, "isatty") and stream.isatty()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]

        if self.use_colors:
            color = self.COLORS.get(record.levelname, "")
            level = f"{color}{record.levelname:8}{self.RESET}"
        else:
            level = f"{record.levelname:8}"

        base = f"{timestamp} {level} [{record.name}] {record.getMessage()}"

        if record.exc_info:
            base += f"\n{self.formatException(record.exc_info)}"

        return base


def setup_logging(
    level: int | str = logging.INFO,
    json_format: bool = False,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Attach a single handler to the ``caseforge`` logger.

    Calling it again replaces the handler installed by the previous call.

    Args:
        level: Log level (int or name such as "DEBUG").
        json_format: Emit JSON lines instead of human-readable text.
        stream: Output stream (defaults to sys.stderr).

    Returns:
        The installed handler.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    output = stream or sys.stderr
    handler = logging.StreamHandler(output)
    if json_format:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(HumanReadableFormatter(stream=output))

    logger = logging.getLogger("caseforge")
    for existing in list(logger.handlers):
        if getattr(existing, "_caseforge_handler", False):
            logger.removeHandler(existing)
    handler._caseforge_handler = True  # type: ignore[attr-defined]

    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return handler


__all__ = ["StructuredFormatter", "HumanReadableFormatter", "setup_logging"]
