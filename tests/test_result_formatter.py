from html import escape

from word_finder.app.services.result_formatter import WordResultFormatter, escape_markdown
from word_finder.app.services.search_service import SearchSession
from word_finder.core.models import HistoryItem, SearchMode, WordResult


formatter = WordResultFormatter()


def test_history_labels_name_the_mode():
    start = HistoryItem(text="fr", mode=SearchMode.STARTS_WITH, id="1")
    end = HistoryItem(text="ch", mode=SearchMode.ENDS_WITH, id="2")

    assert formatter.format_history_label(start) == "Start: fr"
    assert formatter.format_history_label(end) == "End: ch"


def test_welcome_message_before_first_search():
    assert formatter.welcome_message in formatter.format_results(SearchSession())


def test_empty_search_message_mentions_query():
    session = SearchSession(query="zzq", has_searched=True, has_more=False)

    html = formatter.format_results(session)

    assert "No words found for &quot;zzq&quot;" in html


def test_error_is_rendered_instead_of_results():
    session = SearchSession(
        query="fr",
        has_searched=True,
        results=[WordResult("frog", "A hoppy friend.")],
        error="Oops!",
    )

    html = formatter.format_results(session)

    assert "wf-error" in html
    assert "frog" not in html


def test_cards_escape_model_text_and_show_footer_when_exhausted():
    session = SearchSession(
        query="fr",
        has_searched=True,
        has_more=False,
        results=[WordResult("frog", "A <b>hoppy</b> friend.")],
    )

    html = formatter.format_results(session)

    assert '<summary class="wf-word">frog</summary>' in html
    assert "&lt;b&gt;hoppy&lt;/b&gt;" in html
    assert escape(formatter.exhausted_message) in html


def test_footer_hidden_while_more_pages_available():
    session = SearchSession(
        query="fr",
        has_searched=True,
        results=[WordResult("frog", "A hoppy friend.")],
    )

    assert escape(formatter.exhausted_message) not in formatter.format_results(session)


def test_status_counts_words():
    one = SearchSession(query="fr", has_searched=True, results=[WordResult("frog", "x")])
    many = SearchSession(
        query="ch",
        mode=SearchMode.ENDS_WITH,
        has_searched=True,
        results=[WordResult("beach", "x"), WordResult("such", "y")],
    )

    assert formatter.format_status(one) == "Found 1 word that starts with **fr**."
    assert formatter.format_status(many) == "Found 2 words that end with **ch**."


def test_status_escapes_query_markup():
    session = SearchSession(
        query="*<b>fr</b>_",
        has_searched=True,
        results=[WordResult("frog", "x")],
    )

    status = formatter.format_status(session)

    assert "<b>" not in status
    assert status == r"Found 1 word that starts with **\*&lt;b&gt;fr&lt;/b&gt;\_**."


def test_escape_markdown_leaves_plain_letters_alone():
    assert escape_markdown("frost") == "frost"
