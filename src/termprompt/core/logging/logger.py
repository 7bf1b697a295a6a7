"""
Structured logging helpers.

Loggers accept a message plus an optional ``data`` mapping that is attached to
the record (``record.data``) and appended to the formatted message, so call
sites read ``logger.debug("Prompt closed", data={"name": name})``.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Logger:
    """Thin wrapper over a stdlib logger that carries structured context."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._logger = logging.getLogger(name)

    def _log(self, level: int, message: str, data: Mapping[str, Any] | None) -> None:
        if not self._logger.isEnabledFor(level):
            return
        if data:
            rendered = " ".join(f"{key}={value!r}" for key, value in data.items())
            message = f"{message} [{rendered}]"
        self._logger.log(level, message, extra={"data": dict(data or {})}, stacklevel=3)

    def debug(self, message: str, data: Mapping[str, Any] | None = None) -> None:
        self._log(logging.DEBUG, message, data)

    def info(self, message: str, data: Mapping[str, Any] | None = None) -> None:
        self._log(logging.INFO, message, data)

    def warning(self, message: str, data: Mapping[str, Any] | None = None) -> None:
        self._log(logging.WARNING, message, data)

    def error(self, message: str, data: Mapping[str, Any] | None = None) -> None:
        self._log(logging.ERROR, message, data)

    def exception(self, message: str, data: Mapping[str, Any] | None = None) -> None:
        """Log at error level with the active exception's traceback."""
        if data:
            rendered = " ".join(f"{key}={value!r}" for key, value in data.items())
            message = f"{message} [{rendered}]"
        self._logger.exception(message, extra={"data": dict(data or {})}, stacklevel=2)


_loggers: dict[str, Logger] = {}


def get_logger(name: str) -> Logger:
    """Return the shared :class:`Logger` for ``name``."""
    logger = _loggers.get(name)
    if logger is None:
        logger = Logger(name)
        _loggers[name] = logger
    return logger


def configure_logging(level: str | int = "warning") -> None:
    """Route ``termprompt`` logs to stderr at ``level``.

    Frames are written to stdout while a prompt runs, so log output must not
    share that stream.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    root = logging.getLogger("termprompt")
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
