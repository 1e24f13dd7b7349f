import pytest
from simple_ai_search.search.FallbackSummarizer import fallback_summary, no_results_message
from simple_ai_search.search.types import SearchResult


def test_no_results_message_names_query() -> None:
    text = fallback_summary("vacation policy", [])
    assert text == no_results_message("vacation policy")
    assert text == (
        'I couldn\'t find any information about "vacation policy". '
        "Try searching with different keywords or check the spelling."
    )


@pytest.mark.parametrize("query", ["vacation policy", "", "x" * 500, '"quoted" <b>'])
def test_fallback_contains_query_and_is_never_empty(query: str) -> None:
    text = fallback_summary(query, [SearchResult(title="t")])
    assert text
    assert query in text


def test_fallback_without_summaries() -> None:
    text = fallback_summary("q", [SearchResult(title="a"), SearchResult(title="b")])
    assert text == 'Based on your search for "q", I found 2 relevant document(s).'


def test_fallback_joins_first_three_summaries() -> None:
    results = [
        SearchResult(title="a", summary="One."),
        SearchResult(title="b", summary=None),
        SearchResult(title="c", summary="Two."),
        SearchResult(title="d", summary="Three."),
        SearchResult(title="e", summary="Four."),
    ]
    text = fallback_summary("q", results)
    assert text == (
        'Based on your search for "q", I found 5 relevant document(s). '
        "Here's what I found: One. Two. Three."
    )


def test_fallback_hard_truncates_at_300_chars() -> None:
    """The cut may land in the middle of a word."""
    results = [SearchResult(title=str(i), summary="abcdefghij" * 15) for i in range(3)]
    text = fallback_summary("q", results)
    combined = text.split("Here's what I found: ", 1)[1]

    assert combined.endswith("...")
    assert len(combined) == 303
    assert combined[:300] == ("abcdefghij" * 15 + " " + "abcdefghij" * 15)[:300]
