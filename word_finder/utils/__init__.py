"""Utility helpers shared across the :mod:`word_finder` package."""

from __future__ import annotations

from .logging_config import configure_logging
from .observability import (
    StructuredLoggerAdapter,
    create_counter,
    create_histogram,
    get_logger,
)
from .telemetry import StructuredTelemetry, TelemetryLogger

__all__ = [
    "configure_logging",
    "StructuredLoggerAdapter",
    "StructuredTelemetry",
    "TelemetryLogger",
    "create_counter",
    "create_histogram",
    "get_logger",
]
