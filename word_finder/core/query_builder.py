"""Prompt and structured-output schema construction for word lookups."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Tuple

from .errors import EmptyQueryError
from .models import SearchMode, clean_query

MIN_WORDS = 12
MAX_WORDS = 15

WORD_LIST_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "words": {
            "type": "array",
            "description": "A list of words and their definitions.",
            "items": {
                "type": "object",
                "properties": {
                    "word": {"type": "string"},
                    "definition": {"type": "string"},
                },
                "required": ["word", "definition"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["words"],
    "additionalProperties": False,
}

_MODE_WORDING: Dict[SearchMode, Tuple[str, str, str]] = {
    SearchMode.STARTS_WITH: (
        'strictly start with the letters "{text}"',
        'All words MUST begin with the exact characters "{text}".',
        'For example, if the prefix is "tra", return "track", "trace", "train". '
        'Do NOT return "tar", "ta", or "t".',
    ),
    SearchMode.ENDS_WITH: (
        'strictly end with the letters "{text}"',
        'All words MUST end with the exact characters "{text}".',
        'For example, if the suffix is "ch", return "such", "beach", "peach". '
        'Do NOT return "chat" or "cheese".',
    ),
}


@dataclass(frozen=True)
class GenerationRequest:
    """Prompt plus response schema for one batch of words."""

    clean_text: str
    mode: SearchMode
    prompt: str
    schema: Dict[str, Any] = field(default_factory=lambda: copy.deepcopy(WORD_LIST_SCHEMA))
    exclude: Tuple[str, ...] = ()


def build_exclusion_clause(exclude: Iterable[str]) -> str:
    words = [str(word).strip() for word in exclude if word and str(word).strip()]
    if not words:
        return ""
    return f"Do not include any of these words: {', '.join(words)}."


def build_prompt(clean_text: str, mode: SearchMode, exclude: Iterable[str] = ()) -> str:
    instruction, critical, example = (
        part.format(text=clean_text) for part in _MODE_WORDING[mode]
    )
    lines = [
        f"List {MIN_WORDS} to {MAX_WORDS} common, distinct English words that {instruction}.",
        "",
        f"CRITICAL INSTRUCTION: {critical}",
        example,
    ]
    exclusion = build_exclusion_clause(exclude)
    if exclusion:
        lines.extend(["", exclusion])
    lines.extend(
        [
            "",
            "For each word, provide a short, simple, and cute definition suitable "
            "for a general audience. Ensure words are family-friendly.",
        ]
    )
    return "\n".join(lines)


def build_request(
    text: str,
    mode: SearchMode | str,
    exclude: Iterable[str] = (),
) -> GenerationRequest:
    """Build the generation request for ``text`` in ``mode``.

    Raises :class:`EmptyQueryError` when ``text`` is blank after trimming;
    callers are expected to skip the lookup entirely in that case.
    """

    resolved_mode = SearchMode.coerce(mode)
    cleaned = clean_query(text)
    if not cleaned:
        raise EmptyQueryError("Cannot build a word request from blank input")

    excluded = tuple(exclude or ())
    return GenerationRequest(
        clean_text=cleaned,
        mode=resolved_mode,
        prompt=build_prompt(cleaned, resolved_mode, excluded),
        exclude=excluded,
    )


__all__ = [
    "GenerationRequest",
    "WORD_LIST_SCHEMA",
    "MIN_WORDS",
    "MAX_WORDS",
    "build_exclusion_clause",
    "build_prompt",
    "build_request",
]
