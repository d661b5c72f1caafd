"""Shared dataclasses for word lookups and saved searches."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping


class SearchMode(str, Enum):
    """Whether returned words must begin or end with the typed letters."""

    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"

    @classmethod
    def coerce(cls, value: "SearchMode | str") -> "SearchMode":
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())

    def matches(self, word: str, clean_text: str) -> bool:
        """Return whether ``word`` satisfies this mode for ``clean_text``.

        ``clean_text`` is expected to be trimmed and lowercased already; the
        candidate word is lowercased here.
        """

        candidate = word.lower()
        if self is SearchMode.STARTS_WITH:
            return candidate.startswith(clean_text)
        return candidate.endswith(clean_text)


def clean_query(text: str | None) -> str:
    """Normalise user input the way prompts and filters compare it."""

    return (text or "").strip().lower()


@dataclass(frozen=True)
class WordResult:
    """A single dictionary word and its short definition."""

    word: str
    definition: str

    def as_dict(self) -> Dict[str, str]:
        return {"word": self.word, "definition": self.definition}


@dataclass(frozen=True)
class HistoryItem:
    """A saved search shown in the recent-search list."""

    text: str
    mode: SearchMode
    id: str

    @staticmethod
    def make_id(text: str, mode: SearchMode, created_at_ms: int) -> str:
        return f"{text}-{mode.value}-{created_at_ms}"

    def same_search(self, text: str, mode: SearchMode) -> bool:
        return self.mode is mode and self.text.lower() == text.lower()

    def as_dict(self) -> Dict[str, str]:
        return {"text": self.text, "mode": self.mode.value, "id": self.id}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "HistoryItem":
        return cls(
            text=str(payload["text"]),
            mode=SearchMode.coerce(payload["mode"]),
            id=str(payload["id"]),
        )


__all__ = ["SearchMode", "WordResult", "HistoryItem", "clean_query"]
