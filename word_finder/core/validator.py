"""Parsing and re-validation of structured word-list replies.

The generation model is untrusted: even with a schema-constrained reply it may
return words that merely contain the requested letters. Every parsed entry is
therefore checked again with the same predicate the prompt was built from.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping

from pydantic import BaseModel, ValidationError

from ..utils.observability import get_logger
from .errors import ResponseFormatError
from .models import SearchMode, WordResult

_logger = get_logger(__name__).bind(component="response_validator")


class WordEntryPayload(BaseModel):
    word: str
    definition: str


class WordListPayload(BaseModel):
    words: List[WordEntryPayload]


def parse_payload(raw: Any) -> List[WordResult]:
    """Parse ``raw`` into word results without filtering.

    ``raw`` may be JSON text, UTF-8 bytes, or an already-decoded mapping.
    """

    if raw is None:
        raise ResponseFormatError("No response from the word generator")

    try:
        if isinstance(raw, (bytes, bytearray)):
            raw = raw.decode("utf-8")
        if isinstance(raw, str):
            if not raw.strip():
                raise ResponseFormatError("Empty response from the word generator")
            payload = WordListPayload.model_validate_json(raw)
        elif isinstance(raw, Mapping):
            payload = WordListPayload.model_validate(dict(raw))
        else:
            raise ResponseFormatError(
                f"Unsupported response type: {type(raw).__name__}"
            )
    except (ValidationError, UnicodeDecodeError) as exc:
        raise ResponseFormatError(f"Malformed word list: {exc}") from exc

    return [WordResult(word=entry.word, definition=entry.definition) for entry in payload.words]


def filter_matches(
    results: Iterable[WordResult],
    mode: SearchMode | str,
    clean_text: str,
) -> List[WordResult]:
    resolved_mode = SearchMode.coerce(mode)
    accepted: List[WordResult] = []
    for result in results:
        if resolved_mode.matches(result.word, clean_text):
            accepted.append(result)
        else:
            _logger.debug(
                "Discarding word that does not match",
                context={"word": result.word, "mode": resolved_mode.value, "text": clean_text},
            )
    return accepted


def validate_response(raw: Any, mode: SearchMode | str, clean_text: str) -> List[WordResult]:
    """Parse ``raw`` and keep only words satisfying ``mode`` for ``clean_text``."""

    return filter_matches(parse_payload(raw), mode, clean_text)


__all__ = [
    "WordEntryPayload",
    "WordListPayload",
    "parse_payload",
    "filter_matches",
    "validate_response",
]
