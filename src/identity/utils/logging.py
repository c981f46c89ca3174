"""Logging for the LuxMall backend and storefront client.

Records flow through stdlib logging, which owns the handlers: stdout plus a
rotating `luxmall.log` and a rotating `luxmall_error.log`. structlog formats
them as JSON in production and staging and as a coloured console view with
rich tracebacks everywhere else.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

_ENV_VARIABLES = ("ENV", "ENVIRONMENT", "PROTEAN_ENV")
_DEPLOYED = frozenset({"production", "staging"})
_DEFAULT_LEVELS = {"production": "INFO", "staging": "INFO", "development": "DEBUG", "test": "WARNING"}

# Third-party loggers that would otherwise flood the DEBUG console.
_QUIET_LOGGERS = {
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "protean": logging.WARNING,
    "passlib": logging.ERROR,
}

_MAX_LOG_BYTES = 10 * 1024 * 1024
_LOG_BACKUPS = 5


def current_environment() -> str:
    for variable in _ENV_VARIABLES:
        if os.getenv(variable):
            return os.environ[variable].lower()
    return "development"


def resolve_level(environment: str | None = None) -> str:
    """`LOG_LEVEL` wins; otherwise the environment's default, INFO if unknown."""
    environment = environment or current_environment()
    return os.getenv("LOG_LEVEL", _DEFAULT_LEVELS.get(environment, "INFO")).upper()


def _rotating_handler(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path, maxBytes=_MAX_LOG_BYTES, backupCount=_LOG_BACKUPS, encoding="utf-8"
    )
    handler.setLevel(level)
    return handler


def _install_handlers(level: str, log_dir: Path, prefix: str) -> None:
    log_dir.mkdir(parents=True, exist_ok=True)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [
        console,
        _rotating_handler(log_dir / f"{prefix}.log", level),
        _rotating_handler(log_dir / f"{prefix}_error.log", logging.ERROR),
    ]

    for name, quiet_level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)


def build_renderer(environment: str):
    if environment in _DEPLOYED:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=True, max_frames=2),
    )


def configure_logging(log_dir: str = "logs", log_file_prefix: str = "luxmall") -> None:
    """Wire stdlib handlers and structlog processors. Safe to call more than once."""
    environment = current_environment()
    _install_handlers(resolve_level(environment), Path(os.getenv("LOG_DIR", log_dir)), log_file_prefix)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            build_renderer(environment),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    """Bind values that every later record in this context carries."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
