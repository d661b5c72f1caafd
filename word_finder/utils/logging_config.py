"""Helpers for configuring consistent project logging output."""

from __future__ import annotations

import logging
import os
from typing import Optional

_DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_CONFIGURED = False

# Client libraries that log every HTTP round trip at INFO.
_CHATTY_LOGGERS = ("httpx", "httpcore", "openai")


def _resolve_level(level: str | int | None) -> int:
    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level
    try:
        return int(level)
    except (TypeError, ValueError):
        normalized = str(level).strip().upper()
        return getattr(logging, normalized, logging.INFO)


def configure_logging(level: Optional[str | int] = None, *, force: bool = False) -> None:
    """Initialise root logging handlers for the application.

    The level comes from ``level`` or ``WORD_FINDER_LOG_LEVEL`` and defaults
    to ``INFO``. HTTP client chatter is kept at ``WARNING`` unless the project
    itself is logging at ``DEBUG``.
    """

    global _CONFIGURED

    if _CONFIGURED and not force:
        return

    env_level = os.environ.get("WORD_FINDER_LOG_LEVEL")
    resolved_level = _resolve_level(level if level is not None else env_level)

    logging.basicConfig(level=resolved_level, format=_DEFAULT_FORMAT, force=force)
    logging.getLogger("word_finder").setLevel(resolved_level)
    client_level = resolved_level if resolved_level <= logging.DEBUG else logging.WARNING
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(client_level)
    _CONFIGURED = True


__all__ = ["configure_logging"]
