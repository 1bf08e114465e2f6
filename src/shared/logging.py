"""Logging for the storefront contexts.

structlog renders on top of stdlib logging. Records go to stdout and to
rotating files under ``logs/`` (``storefront.log`` plus an errors-only
``storefront_error.log``). Production and staging emit JSON lines; every other
environment gets the rich console renderer.

Each HTTP request binds ``request_id``, ``method`` and ``path`` once via
``bind_request`` so every event logged while serving it carries them.
"""

import logging
import logging.handlers
import os
import sys
import time
from pathlib import Path

import structlog

_MAX_LOG_BYTES = 10 * 1024 * 1024
_LOG_BACKUPS = 5

_JSON_ENVIRONMENTS = ("production", "staging")

_DEFAULT_LEVELS = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

# Libraries that are too chatty at DEBUG
_QUIET_LOGGERS = ("protean", "urllib3", "asyncio", "httpx", "multipart")


def get_environment() -> str:
    """Name of the running environment, lower-cased."""
    return (os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", _DEFAULT_LEVELS.get(get_environment(), "INFO")).upper()


def _rotating_file(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=_MAX_LOG_BYTES,
        backupCount=_LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def _configure_stdlib(level: str, log_dir: Path) -> None:
    log_dir.mkdir(parents=True, exist_ok=True)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [
        console,
        _rotating_file(log_dir / "storefront.log", level),
        _rotating_file(log_dir / "storefront_error.log", logging.ERROR),
    ]

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _renderer(environment: str):
    if environment in _JSON_ENVIRONMENTS:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [
        structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=4),
        )
    ]


def _configure_structlog(environment: str) -> None:
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.MODULE,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ),
        *_renderer(environment),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(log_dir: str | None = None) -> None:
    """Configure stdlib logging and structlog for the current environment.

    ``log_dir`` defaults to ``LOG_DIR`` or ``logs``.
    """
    environment = get_environment()
    _configure_stdlib(get_log_level(), Path(log_dir or os.getenv("LOG_DIR", "logs")))
    _configure_structlog(environment)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request(request_id: str, method: str, path: str) -> None:
    """Start a fresh log context for one HTTP request."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, method=method, path=path)


def log_request(logger, started: float, status_code: int) -> None:
    """Log the completion of the request bound by ``bind_request``."""
    duration_ms = round((time.perf_counter() - started) * 1000, 2)
    if status_code >= 500:
        logger.error("request_failed", status_code=status_code, duration_ms=duration_ms)
    else:
        logger.info("request_completed", status_code=status_code, duration_ms=duration_ms)
