import pytest

from conftest import word_payload
from word_finder.core.errors import ResponseFormatError
from word_finder.core.models import SearchMode, WordResult
from word_finder.core.validator import filter_matches, parse_payload, validate_response


def test_prefix_mode_drops_words_that_only_contain_letters():
    raw = word_payload("frog", "Frost", "afraid", "fr", "leaf")

    results = validate_response(raw, SearchMode.STARTS_WITH, "fr")

    assert [result.word for result in results] == ["frog", "Frost", "fr"]
    assert all(result.word.lower().startswith("fr") for result in results)


def test_suffix_mode_keeps_only_matching_endings():
    raw = word_payload("beach", "Peach", "chat", "cheese", "such")

    results = validate_response(raw, SearchMode.ENDS_WITH, "ch")

    assert [result.word for result in results] == ["beach", "Peach", "such"]


def test_definitions_are_preserved():
    results = validate_response(
        {"words": [{"word": "frog", "definition": "A hoppy friend."}]},
        "starts_with",
        "fr",
    )

    assert results == [WordResult(word="frog", definition="A hoppy friend.")]


def test_empty_word_list_is_valid():
    assert validate_response('{"words": []}', SearchMode.STARTS_WITH, "fr") == []


def test_all_words_rejected_yields_empty_list():
    assert validate_response(word_payload("leaf", "tree"), SearchMode.STARTS_WITH, "fr") == []


def test_bytes_payload_is_decoded():
    results = parse_payload(word_payload("frog").encode("utf-8"))

    assert [result.word for result in results] == ["frog"]


@pytest.mark.parametrize(
    "raw",
    [
        None,
        "",
        "   ",
        "not json",
        '{"items": []}',
        '{"words": "frog"}',
        '{"words": [{"word": "frog"}]}',
        '{"words": [{"word": 3, "definition": null}]}',
        42,
    ],
)
def test_malformed_replies_raise(raw):
    with pytest.raises(ResponseFormatError):
        validate_response(raw, SearchMode.STARTS_WITH, "fr")


def test_filter_matches_compares_case_insensitively():
    results = [WordResult("FRIEND", "A pal."), WordResult("elf", "A helper.")]

    assert filter_matches(results, SearchMode.STARTS_WITH, "fr") == [results[0]]
