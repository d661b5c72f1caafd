"""Core request construction and response validation for word lookups."""

from .errors import (
    LOOKUP_FAILED_MESSAGE,
    EmptyQueryError,
    ResponseFormatError,
    WordFinderError,
    WordLookupError,
)
from .models import HistoryItem, SearchMode, WordResult, clean_query
from .query_builder import WORD_LIST_SCHEMA, GenerationRequest, build_prompt, build_request
from .validator import filter_matches, parse_payload, validate_response

__all__ = [
    "LOOKUP_FAILED_MESSAGE",
    "EmptyQueryError",
    "ResponseFormatError",
    "WordFinderError",
    "WordLookupError",
    "HistoryItem",
    "SearchMode",
    "WordResult",
    "clean_query",
    "WORD_LIST_SCHEMA",
    "GenerationRequest",
    "build_prompt",
    "build_request",
    "filter_matches",
    "parse_payload",
    "validate_response",
]
