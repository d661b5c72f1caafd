"""Saved-search history kept in local key-value storage."""

from __future__ import annotations

import json
import threading
import time
from typing import Callable, List, Optional

from word_finder.core.models import HistoryItem, SearchMode
from word_finder.utils.observability import get_logger

from .storage import KeyValueStorage

HISTORY_STORAGE_KEY = "wordFinderHistory"
MAX_HISTORY_ITEMS = 8


def _now_ms() -> int:
    return int(time.time() * 1000)


class HistoryStore:
    """Bounded, deduplicated, most-recent-first list of past searches.

    Every mutation rewrites the whole list under ``key`` as JSON. Entries are
    deduplicated on ``(text.lower(), mode)``: recording the same search again
    moves it to the front with a fresh id.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: str = HISTORY_STORAGE_KEY,
        capacity: int = MAX_HISTORY_ITEMS,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self._storage = storage
        self._key = key
        self._capacity = max(1, int(capacity))
        self._clock = clock or _now_ms
        self._lock = threading.RLock()
        self._items: List[HistoryItem] = []
        self._logger = get_logger(__name__).bind(component="history_store", key=key)

    @property
    def capacity(self) -> int:
        return self._capacity

    def load(self) -> List[HistoryItem]:
        """Read the persisted list; unreadable data yields an empty history."""

        raw = self._storage.get_item(self._key)
        items: List[HistoryItem] = []
        if raw:
            try:
                decoded = json.loads(raw)
                if not isinstance(decoded, list):
                    raise ValueError(f"expected a list, got {type(decoded).__name__}")
                items = [HistoryItem.from_dict(entry) for entry in decoded]
            except (ValueError, TypeError, KeyError) as exc:
                self._logger.warning(
                    "Failed to parse history; starting empty",
                    context={"error": str(exc)},
                )
                items = []

        with self._lock:
            self._items = self._dedupe(items)[: self._capacity]
            self._logger.info("History loaded", context={"count": len(self._items)})
            return list(self._items)

    def items(self) -> List[HistoryItem]:
        with self._lock:
            return list(self._items)

    get_history = items

    def record(self, text: str, mode: SearchMode | str) -> HistoryItem:
        """Put ``(text, mode)`` at the front, dropping any earlier duplicate."""

        cleaned = (text or "").strip()
        if not cleaned:
            raise ValueError("Cannot record a blank search")
        resolved_mode = SearchMode.coerce(mode)

        new_item = HistoryItem(
            text=cleaned,
            mode=resolved_mode,
            id=HistoryItem.make_id(cleaned, resolved_mode, self._clock()),
        )
        with self._lock:
            remaining = [item for item in self._items if not item.same_search(cleaned, resolved_mode)]
            updated = [new_item, *remaining][: self._capacity]
            self._persist(updated)
            self._items = updated
        return new_item

    def remove(self, item_id: str) -> bool:
        with self._lock:
            remaining = [item for item in self._items if item.id != item_id]
            removed = len(remaining) != len(self._items)
            self._persist(remaining)
            self._items = remaining
        return removed

    def find(self, item_id: str) -> Optional[HistoryItem]:
        with self._lock:
            for item in self._items:
                if item.id == item_id:
                    return item
        return None

    @staticmethod
    def _dedupe(items: List[HistoryItem]) -> List[HistoryItem]:
        # Earlier entries are more recent; later duplicates are dropped.
        kept: List[HistoryItem] = []
        for item in items:
            if not any(existing.same_search(item.text, item.mode) for existing in kept):
                kept.append(item)
        return kept

    def _persist(self, items: List[HistoryItem]) -> None:
        payload = json.dumps([item.as_dict() for item in items])
        self._storage.set_item(self._key, payload)


__all__ = ["HistoryStore", "HISTORY_STORAGE_KEY", "MAX_HISTORY_ITEMS"]
