"""Result formatting helpers for word lookups."""

from __future__ import annotations

import re
from html import escape
from typing import TYPE_CHECKING, List

from word_finder.core.models import HistoryItem, SearchMode, WordResult

if TYPE_CHECKING:  # pragma: no cover
    from .search_service import SearchSession

_MODE_LABELS = {
    SearchMode.STARTS_WITH: "Start",
    SearchMode.ENDS_WITH: "End",
}

_MARKDOWN_SPECIAL = re.compile(r"([\\`*_{}\[\]()#+\-.!|~])")


def escape_markdown(text: str) -> str:
    """Make user text render literally inside Markdown."""

    return escape(_MARKDOWN_SPECIAL.sub(r"\\\1", text), quote=False)


class WordResultFormatter:
    """Render a search session as HTML word cards."""

    welcome_message = "Type some letters above to start the magic!"
    exhausted_message = "✨ That's all we could find! ✨"

    def format_history_label(self, item: HistoryItem) -> str:
        return f"{_MODE_LABELS[item.mode]}: {item.text}"

    def format_card(self, result: WordResult, index: int) -> str:
        tilt = "wf-tilt-left" if index % 2 else "wf-tilt-right"
        return (
            f'<details class="wf-card {tilt}">'
            f'<summary class="wf-word">{escape(result.word)}</summary>'
            f'<p class="wf-definition">{escape(result.definition)}</p>'
            "</details>"
        )

    def format_results(self, session: "SearchSession") -> str:
        if session.error:
            return f'<div class="wf-error">{escape(session.error)}</div>'

        if not session.has_searched:
            return f'<p class="wf-empty">{escape(self.welcome_message)}</p>'

        if not session.results:
            return (
                '<div class="wf-empty">'
                f"<p>No words found for &quot;{escape(session.query)}&quot; 🥺</p>"
                "<p>Try a different combo!</p>"
                "</div>"
            )

        cards: List[str] = [
            self.format_card(result, index) for index, result in enumerate(session.results)
        ]
        output = ['<div class="wf-grid">', *cards, "</div>"]
        if not session.has_more:
            output.append(f'<p class="wf-footer">{escape(self.exhausted_message)}</p>')
        return "\n".join(output)

    def format_status(self, session: "SearchSession") -> str:
        if not session.has_searched:
            return "Waiting for a search…"
        if session.error:
            return "Search failed."
        count = len(session.results)
        query = escape_markdown(session.query)
        verb = _MODE_LABELS[session.mode].lower()
        if count == 1:
            return f"Found 1 word that {verb}s with **{query}**."
        return f"Found {count} words that {verb} with **{query}**."


__all__ = ["WordResultFormatter", "escape_markdown"]
