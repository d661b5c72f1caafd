"""Exception hierarchy for word lookups."""

from __future__ import annotations

LOOKUP_FAILED_MESSAGE = "Oops! I couldn't find any words right now. Try again!"


class WordFinderError(Exception):
    """Base class for errors raised by the word finder."""


class EmptyQueryError(WordFinderError, ValueError):
    """Raised when a request is built from blank input."""


class ResponseFormatError(WordFinderError):
    """The generation reply was missing or did not match the word-list schema."""


class WordLookupError(WordFinderError):
    """A lookup failed; ``str(error)`` is safe to show to the user."""

    def __init__(self, message: str = LOOKUP_FAILED_MESSAGE) -> None:
        super().__init__(message)
        self.user_message = message


__all__ = [
    "LOOKUP_FAILED_MESSAGE",
    "WordFinderError",
    "EmptyQueryError",
    "ResponseFormatError",
    "WordLookupError",
]
