"""Search service orchestrating word lookups, pagination and history."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from word_finder.core.errors import (
    LOOKUP_FAILED_MESSAGE,
    WordFinderError,
    WordLookupError,
)
from word_finder.core.models import HistoryItem, SearchMode, WordResult, clean_query
from word_finder.core.query_builder import build_request
from word_finder.core.validator import filter_matches, parse_payload

from ..data.history import HistoryStore
from .generator import WordGenerator
from .result_formatter import WordResultFormatter
from ...utils.observability import create_counter, create_histogram, get_logger
from ...utils.telemetry import StructuredTelemetry

# Fewer results than these thresholds ends pagination. This is a heuristic:
# a short batch suggests the model is running out of matching words, but it
# does not prove it.
INITIAL_CONTINUATION_THRESHOLD = 5
LOAD_MORE_CONTINUATION_THRESHOLD = 8


@dataclass
class SearchSession:
    """Mutable state for one user's active search."""

    query: str = ""
    mode: SearchMode = SearchMode.STARTS_WITH
    results: List[WordResult] = field(default_factory=list)
    has_searched: bool = False
    has_more: bool = True
    is_loading: bool = False
    is_loading_more: bool = False
    error: Optional[str] = None
    search_id: int = 0

    def shown_words(self) -> List[str]:
        return [result.word for result in self.results]


class WordQueryOrchestrator:
    """Runs one generation round trip: build, generate, validate."""

    def __init__(
        self,
        *,
        generator: WordGenerator,
        telemetry: Optional[StructuredTelemetry] = None,
    ) -> None:
        self.generator = generator
        self.telemetry = telemetry or StructuredTelemetry()
        self._latest_trace: Dict[str, Any] = {}

        self._logger = get_logger(__name__).bind(
            component="word_query_orchestrator",
            generator=type(generator).__name__,
        )

        self._metric_request_total = create_counter(
            "word_finder_requests_total",
            "Total word generation requests issued.",
            label_names=("kind",),
        )
        self._metric_request_failures = create_counter(
            "word_finder_request_failures_total",
            "Word generation requests that failed or returned an unusable reply.",
            label_names=("kind",),
        )
        self._metric_rejected_words = create_counter(
            "word_finder_rejected_words_total",
            "Generated words dropped for not matching the requested letters.",
            label_names=("mode",),
        )
        self._metric_request_duration = create_histogram(
            "word_finder_request_seconds",
            "Latency of word generation requests.",
        )

    def set_generator(self, generator: WordGenerator) -> None:
        self.generator = generator

    def get_latest_telemetry(self) -> Dict[str, Any]:
        if not self._latest_trace:
            return self.telemetry.latest_snapshot()
        return copy.deepcopy(self._latest_trace)

    def fetch_words(
        self,
        text: str,
        mode: SearchMode | str,
        exclude: Sequence[str] = (),
        *,
        kind: str = "search",
    ) -> List[WordResult]:
        """Return validated words for ``text``; blank input makes no request.

        Any failure of the round trip is raised as :class:`WordLookupError`.
        """

        resolved_mode = SearchMode.coerce(mode)
        cleaned = clean_query(text)
        if not cleaned:
            self._logger.debug("Blank query ignored", context={"kind": kind})
            return []

        request = build_request(cleaned, resolved_mode, exclude)
        request_context = {
            "kind": kind,
            "text": cleaned,
            "mode": resolved_mode.value,
            "excluded": len(request.exclude),
        }

        telemetry = self.telemetry
        telemetry.start_trace(f"{kind}_words")
        for key, value in request_context.items():
            telemetry.annotate(f"input.{key}", value)

        self._metric_request_total.labels(kind=kind).inc()
        self._logger.info("Word request issued", context=request_context)

        try:
            with self._metric_request_duration.time():
                with telemetry.timer("generate", {"kind": kind}):
                    raw = self.generator.generate(request.prompt, request.schema)
            parsed = parse_payload(raw)
        except Exception as exc:
            self._metric_request_failures.labels(kind=kind).inc()
            telemetry.increment("request.failed")
            self._latest_trace = telemetry.snapshot()
            self._logger.error(
                "Word request failed",
                context={**request_context, "error": str(exc), "error_type": type(exc).__name__},
            )
            raise WordLookupError(LOOKUP_FAILED_MESSAGE) from exc

        accepted = filter_matches(parsed, resolved_mode, request.clean_text)
        rejected = len(parsed) - len(accepted)
        if rejected:
            self._metric_rejected_words.labels(mode=resolved_mode.value).inc(rejected)
            telemetry.increment("words.rejected", rejected)

        telemetry.increment("words.accepted", len(accepted))
        telemetry.annotate("result.count", len(accepted))
        self._latest_trace = telemetry.snapshot()
        self._logger.info(
            "Word request completed",
            context={**request_context, "accepted": len(accepted), "rejected": rejected},
        )
        return accepted


class WordSearchService:
    """Facade exposing search, pagination and history to the UI."""

    def __init__(
        self,
        *,
        generator: Optional[WordGenerator] = None,
        history_store: HistoryStore,
        telemetry: Optional[StructuredTelemetry] = None,
        orchestrator: Optional[WordQueryOrchestrator] = None,
        formatter: Optional[WordResultFormatter] = None,
    ) -> None:
        if orchestrator is None:
            if generator is None:
                raise ValueError("Either a generator or an orchestrator is required")
            orchestrator = WordQueryOrchestrator(generator=generator, telemetry=telemetry)
        elif generator is not None:
            orchestrator.set_generator(generator)

        self.orchestrator = orchestrator
        self.history_store = history_store
        self.formatter = formatter or WordResultFormatter()
        self.telemetry = orchestrator.telemetry
        self._logger = get_logger(__name__).bind(component="word_search_service")

    # UI-facing operations -------------------------------------------------
    def search(self, text: str, mode: SearchMode | str) -> List[WordResult]:
        return self.orchestrator.fetch_words(text, mode, kind="search")

    def load_more(
        self,
        text: str,
        mode: SearchMode | str,
        already_shown: Sequence[str],
    ) -> List[WordResult]:
        return self.orchestrator.fetch_words(text, mode, list(already_shown), kind="load_more")

    def get_history(self) -> List[HistoryItem]:
        return self.history_store.items()

    def record_history(self, text: str, mode: SearchMode | str) -> HistoryItem:
        return self.history_store.record(text, mode)

    def remove_history(self, item_id: str) -> bool:
        return self.history_store.remove(item_id)

    def get_latest_telemetry(self) -> Dict[str, Any]:
        return self.orchestrator.get_latest_telemetry()

    # Session handling -----------------------------------------------------
    def start_search(
        self,
        session: SearchSession,
        text: str,
        mode: SearchMode | str,
    ) -> SearchSession:
        """Run a fresh search, replacing whatever ``session`` was showing."""

        trimmed = (text or "").strip()
        if not trimmed:
            return session

        resolved_mode = SearchMode.coerce(mode)
        session.search_id += 1
        session.query = trimmed
        session.mode = resolved_mode
        session.results = []
        session.has_searched = True
        session.has_more = True
        session.is_loading_more = False
        session.error = None
        session.is_loading = True

        try:
            self.record_history(trimmed, resolved_mode)
        except Exception as exc:
            self._logger.warning(
                "Failed to save search history",
                context={"query": trimmed, "mode": resolved_mode.value, "error": str(exc)},
            )

        try:
            results = self.search(trimmed, resolved_mode)
        except WordFinderError as exc:
            session.error = str(exc)
        else:
            session.results = list(results)
            if len(results) < INITIAL_CONTINUATION_THRESHOLD:
                session.has_more = False
        finally:
            session.is_loading = False

        return session

    def continue_search(self, session: SearchSession) -> SearchSession:
        """Append another batch to ``session`` unless one is already loading."""

        if not session.query.strip() or session.is_loading_more or not session.has_more:
            return session

        search_id = session.search_id
        session.is_loading_more = True
        try:
            new_words = self.load_more(session.query, session.mode, session.shown_words())
        except WordFinderError as exc:
            self._logger.warning(
                "Failed to load more words",
                context={"query": session.query, "mode": session.mode.value, "error": str(exc)},
            )
            return session
        finally:
            session.is_loading_more = False

        if session.search_id != search_id:
            self._logger.info(
                "Discarding stale page",
                context={"query": session.query, "stale_search_id": search_id},
            )
            return session

        if not new_words:
            session.has_more = False
            return session

        session.results = [*session.results, *new_words]
        if len(new_words) < LOAD_MORE_CONTINUATION_THRESHOLD:
            session.has_more = False
        return session

    # Rendering --------------------------------------------------------------
    def format_results(self, session: SearchSession) -> str:
        return self.formatter.format_results(session)

    def format_history_label(self, item: HistoryItem) -> str:
        return self.formatter.format_history_label(item)


__all__ = [
    "INITIAL_CONTINUATION_THRESHOLD",
    "LOAD_MORE_CONTINUATION_THRESHOLD",
    "SearchSession",
    "WordQueryOrchestrator",
    "WordSearchService",
]
