"""Structured logging configuration (structlog)."""

from __future__ import annotations

import logging
from pathlib import Path

import structlog


def configure_structlog(level: int = logging.INFO) -> None:
    """Configure structlog for human-readable console output.

    Call once at process startup.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_json_file_logger(log_path: Path) -> structlog.BoundLogger:
    """Return a structlog logger that writes JSON lines to *log_path*.

    Creates an independent logger backed by a stdlib FileHandler,
    bypassing the global console configuration.  Calling it twice for the
    same path replaces the handler instead of stacking a second one.
    """
    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(str(log_path), mode="a")
    file_handler.setLevel(logging.DEBUG)

    stdlib_logger = logging.getLogger(f"structlog.{log_path}")
    for old in stdlib_logger.handlers:
        old.close()
    stdlib_logger.handlers = [file_handler]
    stdlib_logger.setLevel(logging.DEBUG)
    stdlib_logger.propagate = False

    return structlog.wrap_logger(
        stdlib_logger,
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
    )


def close_json_file_logger(log_path: Path) -> None:
    """Flush and detach the file handler created for *log_path*."""
    stdlib_logger = logging.getLogger(f"structlog.{log_path}")
    for handler in stdlib_logger.handlers:
        handler.close()
    stdlib_logger.handlers = []


class EventLog:
    """Emit each event to the console logger and, if given, a JSON-lines file.

    Usage::

        log = EventLog("sweep", results_dir / "sweep.jsonl")
        log.info("run_started", entities=256)
    """

    def __init__(self, name: str, log_path: Path | None = None) -> None:
        self._console = structlog.get_logger(name)
        self._file_log = get_json_file_logger(log_path) if log_path else None
        self._log_path = log_path

    def _emit(self, level: str, event: str, **fields) -> None:
        getattr(self._console, level)(event, **fields)
        if self._file_log is not None:
            getattr(self._file_log, level)(event, **fields)

    def info(self, event: str, **fields) -> None:
        self._emit("info", event, **fields)

    def warning(self, event: str, **fields) -> None:
        self._emit("warning", event, **fields)

    def error(self, event: str, **fields) -> None:
        self._emit("error", event, **fields)

    def close(self) -> None:
        if self._log_path is not None:
            close_json_file_logger(self._log_path)
            self._file_log = None
