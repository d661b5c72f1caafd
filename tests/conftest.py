import json
import sqlite3
import sys
from pathlib import Path
from typing import Any, Dict, Iterable, List

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from word_finder.app.data.history import HistoryStore
from word_finder.app.data.storage import InMemoryStorage
from word_finder.app.services.search_service import WordSearchService


def word_payload(*words: str) -> str:
    """Build a JSON reply in the structured word-list shape."""

    return json.dumps(
        {"words": [{"word": word, "definition": f"All about {word}."} for word in words]}
    )


class ScriptedGenerator:
    """Generator stub that replays queued replies and records every call."""

    def __init__(self, replies: Iterable[Any] = ()) -> None:
        self.replies: List[Any] = list(replies)
        self.calls: List[Dict[str, Any]] = []

    def queue(self, *replies: Any) -> None:
        self.replies.extend(replies)

    def generate(self, prompt: str, schema: Dict[str, Any]) -> Any:
        self.calls.append({"prompt": prompt, "schema": schema})
        if not self.replies:
            raise AssertionError("ScriptedGenerator ran out of replies")
        reply = self.replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        return reply


class FailingStorage(InMemoryStorage):
    """Storage whose writes fail like a locked SQLite database."""

    def set_item(self, key: str, value: str) -> None:
        raise sqlite3.OperationalError("database is locked")


class StepClock:
    """Millisecond clock advancing by one tick per call."""

    def __init__(self, start: int = 1_700_000_000_000) -> None:
        self.current = start

    def __call__(self) -> int:
        value = self.current
        self.current += 1
        return value


@pytest.fixture
def generator() -> ScriptedGenerator:
    return ScriptedGenerator()


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def history_store(storage: InMemoryStorage) -> HistoryStore:
    store = HistoryStore(storage, clock=StepClock())
    store.load()
    return store


@pytest.fixture
def search_service(generator: ScriptedGenerator, history_store: HistoryStore) -> WordSearchService:
    return WordSearchService(generator=generator, history_store=history_store)
