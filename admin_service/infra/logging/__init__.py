"""Logging infrastructure: dictConfig setup, JSONL formatter, lazy adapter."""

from __future__ import annotations

from .config import configure_logging, setup_logging, shutdown
from .formatters import JSONFormatter
from .lazy import LazyLoggerAdapter, get_lazy_logger

__all__ = [
    "JSONFormatter",
    "LazyLoggerAdapter",
    "configure_logging",
    "get_lazy_logger",
    "setup_logging",
    "shutdown",
]
