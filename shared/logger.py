"""
KeyLength Structured Logger
============================

Provides :class:`KeyLengthLogger`, a logging facade that writes Rich
console output to stderr and, optionally, plain or JSON-lines records to
a rotating log file.

Console output goes to stderr so that JSON reports written to stdout stay
machine-readable.

References:
    - Python logging HOWTO. https://docs.python.org/3/howto/logging.html
    - Rich library. https://github.com/Textualize/rich
"""

from __future__ import annotations

import json
import logging
import time
from contextlib import contextmanager
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterator

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

if TYPE_CHECKING:
    from shared.config import GlobalConfig

LOGGER_NAMESPACE = "keylength"

_LOG_THEME = Theme(
    {
        "log.level.debug": "dim cyan",
        "log.level.info": "bold bright_blue",
        "log.level.warning": "bold yellow",
        "log.level.error": "bold red",
        "log.level.critical": "bold white on red",
    }
)

_TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_TEXT_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


# ========================== JSON Formatter =================================


class _JSONFormatter(logging.Formatter):
    """Emit each log record as a single-line JSON object.

    Output fields::

        {
          "timestamp": "...",
          "level": "WARNING",
          "logger": "keylength.keycheck",
          "message": "...",
          "tool_name": "keycheck",
          "operation": "tls_scan",
          "extra": {"host": "example.com", "port": "443"}
        }
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for attr in ("tool_name", "operation"):
            val = getattr(record, attr, None)
            if val is not None:
                entry[attr] = val

        extra = getattr(record, "key_extra", None)
        if extra:
            entry["extra"] = extra

        if record.exc_info and record.exc_info[1] is not None:
            entry["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


# ========================== KeyLengthLogger ================================


class KeyLengthLogger:
    """Context-aware logger bound to one tool.

    Keyword arguments that are not stdlib logging options are collected
    into the record's ``extra`` field, which the JSON formatter emits.

    Usage::

        log = KeyLengthLogger("keycheck", log_level="DEBUG")
        with log.operation("tls_scan"):
            log.warning("Connection failed", host=host, port=port)

    Args:
        tool_name:       Name bound to every record (``keylength.<tool_name>``).
        log_level:       Minimum severity (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file:        Rotating log file path. ``None`` or ``""`` disables it.
        json_logs:       If ``True`` the file handler emits JSON lines.
        max_bytes:       Maximum log-file size before rotation (default 10 MiB).
        backup_count:    Number of rotated backup files to keep.
        console_output:  If ``True`` attach a Rich handler on stderr.
    """

    def __init__(
        self,
        tool_name: str,
        *,
        log_level: str = "WARNING",
        log_file: str | Path | None = None,
        json_logs: bool = False,
        max_bytes: int = 10_485_760,
        backup_count: int = 5,
        console_output: bool = True,
    ) -> None:
        self._tool_name = tool_name
        self._operation: str | None = None

        self._logger = logging.getLogger(f"{LOGGER_NAMESPACE}.{tool_name}")
        self._logger.setLevel(_level(log_level))
        self._logger.propagate = False
        self._logger.handlers.clear()

        if console_output:
            handler = RichHandler(
                console=Console(theme=_LOG_THEME, stderr=True),
                level=_level(log_level),
                show_path=False,
                rich_tracebacks=True,
                markup=False,
            )
            self._logger.addHandler(handler)

        if log_file:
            file_path = Path(log_file)
            file_path.parent.mkdir(parents=True, exist_ok=True)
            fh = RotatingFileHandler(
                filename=str(file_path),
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
            fh.setLevel(_level(log_level))
            if json_logs:
                fh.setFormatter(_JSONFormatter())
            else:
                fh.setFormatter(logging.Formatter(_TEXT_FORMAT, _TEXT_DATEFMT))
            self._logger.addHandler(fh)

        if not self._logger.handlers:
            self._logger.addHandler(logging.NullHandler())

    @classmethod
    def from_config(
        cls,
        tool_name: str,
        settings: GlobalConfig,
        *,
        console_output: bool = True,
    ) -> KeyLengthLogger:
        """Build a logger from the ``[global]`` configuration section."""
        level = "DEBUG" if settings.debug else settings.log_level
        return cls(
            tool_name,
            log_level=level,
            log_file=settings.log_file or None,
            json_logs=settings.log_json,
            console_output=console_output,
        )

    # ------------------------------------------------------------------ #
    #  Context
    # ------------------------------------------------------------------ #

    @contextmanager
    def operation(self, name: str) -> Iterator[KeyLengthLogger]:
        """Bind *name* as the ``operation`` field while the block runs."""
        previous = self._operation
        self._operation = name
        try:
            yield self
        finally:
            self._operation = previous

    @contextmanager
    def timed(self, label: str) -> Iterator[None]:
        """Log start at DEBUG and elapsed time at INFO.

        Usage::

            with log.timed("tls scan example.com"):
                report = orchestrator.scan(...)
        """
        start = time.perf_counter()
        self.debug("Started: %s", label)
        try:
            yield
        finally:
            self.info("Completed: %s (%.3f sec)", label, time.perf_counter() - start)

    # ------------------------------------------------------------------ #
    #  Log methods
    # ------------------------------------------------------------------ #

    def _log(self, level: int, msg: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        if not self._logger.isEnabledFor(level):
            return
        exc_info = kwargs.pop("exc_info", None)
        extra = {
            "tool_name": self._tool_name,
            "operation": self._operation,
            "key_extra": kwargs,
        }
        self._logger.log(level, msg, *args, exc_info=exc_info, extra=extra)

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, args, kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, args, kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, args, kwargs)

