"""User interface assembly for the Gradio front-end."""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

import gradio as gr

from word_finder.core.models import SearchMode

from ..services.result_formatter import escape_markdown
from ..services.search_service import SearchSession, WordSearchService

MODE_CHOICES: List[Tuple[str, str]] = [
    ("Starts with", SearchMode.STARTS_WITH.value),
    ("Ends with", SearchMode.ENDS_WITH.value),
]

_PLACEHOLDERS = {
    SearchMode.STARTS_WITH: "Type starting letters (e.g., 'fr')...",
    SearchMode.ENDS_WITH: "Type ending letters (e.g., 'ch')...",
}

LOAD_MORE_LABEL = "Load More Words"
LOADING_MORE_LABEL = "Finding more..."


def _history_choices(search_service: WordSearchService) -> List[Tuple[str, str]]:
    return [
        (search_service.format_history_label(item), item.id)
        for item in search_service.get_history()
    ]


def render_session(search_service: WordSearchService, session: SearchSession) -> Tuple[Any, ...]:
    """Return the output tuple shared by every event handler."""

    choices = _history_choices(search_service)
    show_history = not session.has_searched and bool(choices)
    show_load_more = session.has_more and bool(session.results) and not session.error
    return (
        session,
        search_service.formatter.format_status(session),
        search_service.format_results(session),
        gr.update(
            visible=show_load_more,
            interactive=not session.is_loading_more,
            value=LOADING_MORE_LABEL if session.is_loading_more else LOAD_MORE_LABEL,
        ),
        gr.update(visible=show_history),
        gr.update(choices=choices, value=None),
    )


def create_interface(search_service: WordSearchService) -> gr.Blocks:
    """Construct the interactive Gradio Blocks UI."""

    def _with_inputs(session: SearchSession) -> Tuple[Any, ...]:
        return (
            *render_session(search_service, session),
            gr.update(value=session.query),
            gr.update(value=session.mode.value),
        )

    def search_interface(query: str, mode: str, session: SearchSession):
        """Run a new search, showing a loading status while it is in flight."""

        if not query or not query.strip():
            yield _with_inputs(session)
            return

        outputs = list(_with_inputs(session))
        outputs[1] = f"Finding words for **{escape_markdown(query.strip())}**…"
        yield tuple(outputs)

        search_service.start_search(session, query, mode)
        yield _with_inputs(session)

    def rerun_history(item_id: Optional[str], session: SearchSession):
        item = search_service.history_store.find(item_id) if item_id else None
        if item is None:
            yield _with_inputs(session)
            return
        yield from search_interface(item.text, item.mode.value, session)

    def remove_history(item_id: Optional[str], session: SearchSession):
        if item_id:
            search_service.remove_history(item_id)
        return _with_inputs(session)

    def load_more_interface(session: SearchSession):
        if session.is_loading_more:
            yield render_session(search_service, session)
            return

        # Render the in-flight button state before the request goes out.
        pending = list(render_session(search_service, session))
        pending[3] = gr.update(interactive=False, value=LOADING_MORE_LABEL)
        yield tuple(pending)

        search_service.continue_search(session)
        yield render_session(search_service, session)

    def update_placeholder(mode: str):
        return gr.update(placeholder=_PLACEHOLDERS[SearchMode.coerce(mode)])

    interface_css = """
    .wf-container {max-width: 960px; margin: 0 auto; gap: 24px;}
    .wf-hero {text-align: center; padding-bottom: 12px;}
    .wf-hero h1 {font-size: 3rem; margin-bottom: 0.25rem; color: #ec4899;}
    .wf-hero p {color: #f472b6; font-size: 1.1rem;}
    .wf-panel {border: 1px solid rgba(236, 72, 153, 0.15); border-radius: 24px; background: #ffffff; padding: 20px; box-shadow: 0 8px 24px rgba(236, 72, 153, 0.12);}
    .wf-button {width: 100%; font-weight: 600;}
    .wf-grid {display: grid; grid-template-columns: repeat(auto-fill, minmax(180px, 1fr)); gap: 16px;}
    .wf-card {background: #ffffff; border-radius: 16px; border: 2px solid #fce7f3; padding: 16px; box-shadow: 0 6px 16px rgba(236, 72, 153, 0.1); cursor: pointer;}
    .wf-card[open] {background: #fdf2f8;}
    .wf-tilt-left {transform: rotate(-1deg);}
    .wf-tilt-right {transform: rotate(1deg);}
    .wf-word {font-size: 1.25rem; font-weight: 700; color: #374151; list-style: none; text-align: center;}
    .wf-definition {margin: 8px 0 0; color: #6b7280; font-size: 0.95rem; text-align: center;}
    .wf-empty {text-align: center; color: #f472b6; margin-top: 24px;}
    .wf-error {background: #fef2f2; border-left: 4px solid #fca5a5; padding: 12px 16px; border-radius: 0 12px 12px 0; color: #ef4444; text-align: center;}
    .wf-footer {text-align: center; color: #f472b6; font-weight: 500; margin-top: 24px;}
    """

    with gr.Blocks(
        title="Word Finder",
        theme=gr.themes.Soft(primary_hue="pink"),
        css=interface_css,
    ) as interface:
        session_state = gr.State(SearchSession())

        with gr.Column(elem_classes=["wf-container"]):
            gr.Markdown(
                "<h1>Word Finder</h1>\n<p>Find cute words... 💖</p>",
                elem_classes=["wf-hero"],
            )

            with gr.Group(elem_classes=["wf-panel"]):
                query_input = gr.Textbox(
                    label="Letters",
                    placeholder=_PLACEHOLDERS[SearchMode.STARTS_WITH],
                    lines=1,
                )
                mode_radio = gr.Radio(
                    choices=MODE_CHOICES,
                    value=SearchMode.STARTS_WITH.value,
                    label="Match",
                )
                search_btn = gr.Button(
                    "🔍 Find Words",
                    variant="primary",
                    size="lg",
                    elem_classes=["wf-button"],
                )

            with gr.Column(visible=bool(search_service.get_history())) as history_column:
                gr.Markdown("### Recent Sparkles")
                history_dropdown = gr.Dropdown(
                    choices=_history_choices(search_service),
                    label="Recent searches",
                    value=None,
                )
                with gr.Row():
                    rerun_btn = gr.Button("Search again", size="sm")
                    remove_btn = gr.Button("Remove", size="sm", variant="stop")

            status_md = gr.Markdown(value="Waiting for a search…")
            results_html = gr.HTML(
                value=search_service.format_results(SearchSession()),
            )
            load_more_btn = gr.Button(
                LOAD_MORE_LABEL,
                visible=False,
                elem_classes=["wf-button"],
            )

        session_outputs = [
            session_state,
            status_md,
            results_html,
            load_more_btn,
            history_column,
            history_dropdown,
        ]
        search_outputs = [*session_outputs, query_input, mode_radio]

        search_btn.click(
            fn=search_interface,
            inputs=[query_input, mode_radio, session_state],
            outputs=search_outputs,
        )
        query_input.submit(
            fn=search_interface,
            inputs=[query_input, mode_radio, session_state],
            outputs=search_outputs,
        )
        rerun_btn.click(
            fn=rerun_history,
            inputs=[history_dropdown, session_state],
            outputs=search_outputs,
        )
        remove_btn.click(
            fn=remove_history,
            inputs=[history_dropdown, session_state],
            outputs=search_outputs,
        )
        load_more_btn.click(
            fn=load_more_interface,
            inputs=[session_state],
            outputs=session_outputs,
            concurrency_limit=1,
        )
        mode_radio.change(
            fn=update_placeholder,
            inputs=[mode_radio],
            outputs=[query_input],
        )
        interface.load(
            fn=lambda session: _with_inputs(session),
            inputs=[session_state],
            outputs=search_outputs,
        )

    return interface


__all__ = ["create_interface", "render_session", "MODE_CHOICES"]
