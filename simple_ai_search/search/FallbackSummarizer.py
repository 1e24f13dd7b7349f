"""
Deterministic, template based summary used when the model is unavailable.
"""

from typing import Sequence

from .types import SearchResult

FALLBACK_MAX_SUMMARIES = 3
FALLBACK_MAX_LENGTH = 300
ELLIPSIS = "..."


def no_results_message(query: str) -> str:
    return (
        f"I couldn't find any information about \"{query}\". "
        "Try searching with different keywords or check the spelling."
    )


def fallback_summary(query: str, results: Sequence[SearchResult]) -> str:
    """
    Summarize results without calling the model.

    Unlike the normalizer, the combined text is cut at a plain character
    position.
    """
    if not results:
        return no_results_message(query)

    summary = (
        f"Based on your search for \"{query}\", "
        f"I found {len(results)} relevant document(s)."
    )

    summaries = [result.summary for result in results if result.summary]
    if summaries:
        combined_content = " ".join(summaries[:FALLBACK_MAX_SUMMARIES])
        if len(combined_content) > FALLBACK_MAX_LENGTH:
            combined_content = combined_content[:FALLBACK_MAX_LENGTH] + ELLIPSIS
        summary += " Here's what I found: " + combined_content

    return summary
