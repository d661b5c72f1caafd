import pytest

from word_finder.core.errors import EmptyQueryError
from word_finder.core.models import SearchMode
from word_finder.core.query_builder import WORD_LIST_SCHEMA, build_prompt, build_request


def test_prefix_prompt_lowercases_and_trims_input():
    request = build_request("  FR ", SearchMode.STARTS_WITH)

    assert request.clean_text == "fr"
    assert 'strictly start with the letters "fr"' in request.prompt
    assert 'All words MUST begin with the exact characters "fr".' in request.prompt
    assert "List 12 to 15 common, distinct English words" in request.prompt
    assert "family-friendly" in request.prompt


def test_prefix_prompt_includes_positive_and_negative_example():
    prompt = build_prompt("fr", SearchMode.STARTS_WITH)

    assert '"track", "trace", "train"' in prompt
    assert 'Do NOT return "tar", "ta", or "t".' in prompt


def test_suffix_prompt_uses_suffix_wording():
    request = build_request("ch", "ends_with")

    assert request.mode is SearchMode.ENDS_WITH
    assert 'strictly end with the letters "ch"' in request.prompt
    assert 'All words MUST end with the exact characters "ch".' in request.prompt
    assert 'Do NOT return "chat" or "cheese".' in request.prompt


def test_exclusion_clause_only_present_when_words_given():
    without = build_request("fr", SearchMode.STARTS_WITH)
    with_exclusions = build_request("fr", SearchMode.STARTS_WITH, ["frog", "frost"])

    assert "Do not include any of these words" not in without.prompt
    assert "Do not include any of these words: frog, frost." in with_exclusions.prompt
    assert with_exclusions.exclude == ("frog", "frost")


def test_schema_requires_word_and_definition():
    request = build_request("fr", SearchMode.STARTS_WITH)

    assert request.schema == WORD_LIST_SCHEMA
    assert request.schema["required"] == ["words"]
    item_schema = request.schema["properties"]["words"]["items"]
    assert item_schema["required"] == ["word", "definition"]
    assert item_schema["properties"]["word"] == {"type": "string"}
    assert item_schema["additionalProperties"] is False


def test_request_schema_is_independent_copy():
    request = build_request("fr", SearchMode.STARTS_WITH)
    request.schema["properties"]["words"]["description"] = "changed"

    assert WORD_LIST_SCHEMA["properties"]["words"]["description"] != "changed"


@pytest.mark.parametrize("text", ["", "   ", None])
def test_blank_input_is_rejected(text):
    with pytest.raises(EmptyQueryError):
        build_request(text, SearchMode.STARTS_WITH)


def test_unknown_mode_is_rejected():
    with pytest.raises(ValueError):
        build_request("fr", "contains")
