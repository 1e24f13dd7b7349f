"""
Prompt construction for the summarization model.

Pure string templating: no I/O, same output for the same input.
"""

from typing import Sequence

from .types import SearchResult

DEFAULT_TOP_N = 5
SUMMARY_WORD_LIMIT = 200

SYSTEM_PROMPT = """You are a helpful AI assistant for a company portal. Your role is to:
- Provide accurate, professional, and helpful responses
- Summarize company documentation and resources clearly
- Help employees find the information they need
- Maintain a friendly but professional tone
- Always base your answers on the provided search results
- If information is incomplete, clearly state what is available and what might be missing
- Keep responses concise and actionable"""


class PromptBuilder:
    """Renders the user prompt from a query and its normalized results."""

    def __init__(self, top_n: int = DEFAULT_TOP_N, system_prompt: str = SYSTEM_PROMPT) -> None:
        if top_n <= 0:
            raise ValueError("top_n must be greater than 0")
        self.top_n = top_n
        self.system_prompt = system_prompt

    def build(self, query: str, results: Sequence[SearchResult]) -> str:
        prompt = f"User Question: {query}\n\nSearch Results:\n"

        for i, result in enumerate(results[: self.top_n], 1):
            prompt += f"\nResult {i}:\n"
            prompt += f"Title: {result.title or 'No title'}\n"

            if result.summary:
                prompt += f"Content: {result.summary}\n"

            if result.score:
                prompt += f"Relevance Score: {result.score}\n"

        prompt += (
            f"\n\nPlease provide a helpful summary that directly answers the user's "
            f'question "{query}" based on the search results above. Keep the response '
            f"conversational, informative, and under {SUMMARY_WORD_LIMIT} words."
        )
        return prompt
