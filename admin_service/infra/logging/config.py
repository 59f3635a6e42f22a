"""Logging configuration setup.

- dictConfig for formatters and the root logger
- QueueHandler + QueueListener so request handlers never block on I/O
- JSONL or plain text output on stderr
"""

from __future__ import annotations

import atexit
import logging
import logging.config
from logging.handlers import QueueHandler, QueueListener
from queue import Queue
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from admin_service.core.settings.logs import LoggingSettings

logger = logging.getLogger(__name__)

_log_queue: Queue[logging.LogRecord] | None = None
_listener: QueueListener | None = None
_LOGGING_INITIALIZED = False

TEXT_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
    **configure_kwargs: Any,
) -> None:
    """Ensure logging is configured once across entrypoints.

    Args:
        log_settings: Optional logging settings instance. If omitted, settings
            are loaded via get_logging_settings().
        force: Reconfigure logging even if it was already initialized.
        **configure_kwargs: Explicit overrides for configure_logging().
    """
    global _LOGGING_INITIALIZED

    if _LOGGING_INITIALIZED and not force:
        return

    if log_settings is None:
        from admin_service.core.settings import get_logging_settings

        log_settings = get_logging_settings()

    configure_logging(**{**log_settings.to_logging_kwargs(), **configure_kwargs})
    _LOGGING_INITIALIZED = True


def configure_logging(
    log_level: str = "INFO",
    *,
    json_logs: bool = True,
    service_name: str = "admin-service",
    console_enabled: bool = True,
    console_level: str | None = None,
    capture_warnings: bool = True,
    library_log_levels: dict[str, str] | None = None,
    **kwargs: Any,
) -> None:
    """Configure the root logger.

    All handlers live behind a QueueListener; the root logger only gets a
    QueueHandler, and application loggers propagate to it.
    """
    if kwargs:
        logger.debug("Unused logging kwargs supplied: %s", ", ".join(sorted(kwargs)))

    shutdown()

    if capture_warnings:
        logging.captureWarnings(True)

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "root": {"level": log_level.upper(), "handlers": []},
            "loggers": {
                name: {"level": level.upper()}
                for name, level in (library_log_levels or {}).items()
            },
        }
    )

    handlers: list[logging.Handler] = []
    if console_enabled:
        console = logging.StreamHandler()
        console.setLevel((console_level or log_level).upper())
        console.setFormatter(_make_formatter(json_logs, service_name))
        handlers.append(console)

    _start_queue(handlers)


def _make_formatter(json_logs: bool, service_name: str) -> logging.Formatter:
    if json_logs:
        from admin_service.infra.logging.formatters import JSONFormatter

        return JSONFormatter(static={"service": service_name})
    return logging.Formatter(fmt=TEXT_FORMAT, datefmt=DATE_FORMAT)


def _start_queue(handlers: list[logging.Handler]) -> None:
    global _log_queue, _listener

    root = logging.getLogger()
    if not handlers:
        return

    _log_queue = Queue()
    _listener = QueueListener(_log_queue, *handlers, respect_handler_level=True)
    _listener.start()
    root.addHandler(QueueHandler(_log_queue))
    atexit.register(shutdown)


def shutdown() -> None:
    """Stop the QueueListener, flushing pending records, and detach its handler."""
    global _log_queue, _listener

    if _listener is not None:
        # QueueListener.stop() drains the queue before returning.
        _listener.stop()
        _listener = None

    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, QueueHandler) and handler.queue is _log_queue:
            root.removeHandler(handler)
    _log_queue = None
