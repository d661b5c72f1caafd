"""Lightweight observability helpers used across the project.

Loggers are plain :mod:`logging` loggers wrapped in an adapter that renders a
structured ``context`` mapping inline. Metrics are Prometheus collectors
wrapped so that re-registering a metric (common when the application facade
or the tests build several services in one process) reuses the existing
collector instead of raising.
"""

from __future__ import annotations

import json
import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, Optional

from prometheus_client import REGISTRY, Counter, Histogram


class StructuredLoggerAdapter(logging.LoggerAdapter):
    """Simple adapter that renders structured context inline with messages."""

    def bind(self, **context: Any) -> "StructuredLoggerAdapter":
        merged = dict(self.extra)
        merged.update(context)
        return StructuredLoggerAdapter(self.logger, merged)

    def process(self, msg: str, kwargs: Dict[str, Any]):
        event_context: Dict[str, Any] = dict(self.extra)
        provided = kwargs.pop("context", None)
        if isinstance(provided, dict):
            event_context.update(provided)
        if event_context:
            try:
                payload = json.dumps(event_context, sort_keys=True, default=str)
            except TypeError:
                payload = json.dumps({k: str(v) for k, v in event_context.items()})
            msg = f"{msg} | {payload}"
        return msg, kwargs


def get_logger(name: str, **context: Any) -> StructuredLoggerAdapter:
    """Return a project logger with optional bound context."""

    base_logger = logging.getLogger(name)
    return StructuredLoggerAdapter(base_logger, context)


class _MetricWrapper:
    """Base wrapper providing ``labels`` passthrough for metrics."""

    def __init__(self, impl: Any = None) -> None:
        self._impl = impl

    def labels(self, **labels: Any):
        impl = getattr(self._impl, "labels", None)
        if impl is None:
            return self.__class__(None)
        return self.__class__(impl(**labels))


class CounterHandle(_MetricWrapper):
    """Wrapper around Prometheus counters."""

    def inc(self, amount: float = 1.0) -> None:
        if self._impl is None:
            return
        self._impl.inc(amount)


class HistogramHandle(_MetricWrapper):
    """Wrapper around Prometheus histograms."""

    def observe(self, value: float) -> None:
        if self._impl is None:
            return
        self._impl.observe(value)

    @contextmanager
    def time(self) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        finally:
            self.observe(time.perf_counter() - start)


def _existing_collector(name: str) -> Any:
    # Counters register both ``name`` and ``name_total``; either key resolves.
    collectors = getattr(REGISTRY, "_names_to_collectors", {})
    return collectors.get(name) or collectors.get(f"{name}_total")


def create_counter(
    name: str,
    documentation: str,
    label_names: Optional[Iterable[str]] = None,
) -> CounterHandle:
    """Create a counter, reusing the registered one when it already exists."""

    try:
        impl = Counter(name, documentation, labelnames=tuple(label_names or ()))
    except ValueError:
        impl = _existing_collector(name)
    return CounterHandle(impl)


def create_histogram(
    name: str,
    documentation: str,
    label_names: Optional[Iterable[str]] = None,
) -> HistogramHandle:
    """Create a histogram, reusing the registered one when it already exists."""

    try:
        impl = Histogram(name, documentation, labelnames=tuple(label_names or ()))
    except ValueError:
        impl = _existing_collector(name)
    return HistogramHandle(impl)


__all__ = [
    "StructuredLoggerAdapter",
    "get_logger",
    "CounterHandle",
    "HistogramHandle",
    "create_counter",
    "create_histogram",
]
