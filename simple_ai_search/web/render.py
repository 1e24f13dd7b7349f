"""
HTML rendering for the search page.

Kept separate from the routes so it can be tested without a running app.
All user supplied or indexed text goes through html.escape.
"""

from html import escape
from typing import Dict, Optional

from ..search.types import IndexInfo, SearchOutcome, SearchResult

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head><meta charset="utf-8"><title>{title}</title></head>
<body>
{body}
</body>
</html>"""


def render_page(title: str, body: str) -> str:
    return PAGE_TEMPLATE.format(title=escape(title), body=body)


def render_form(query: str = "", error: Optional[str] = None) -> str:
    parts = ['<form class="search-form" method="post" action="/search">']
    if error:
        parts.append(f'<p class="form-error">{escape(error)}</p>')
    parts.append(
        '<label for="edit-search">Search</label> '
        f'<input type="text" id="edit-search" name="search" size="60" required '
        f'placeholder="Enter your search query..." value="{escape(query)}">'
    )
    parts.append('<button type="submit">Search</button>')
    parts.append("</form>")
    return "\n".join(parts)


def render_ai_summary(outcome: SearchOutcome) -> str:
    return (
        f'<div class="ai-summary" data-source="{outcome.summary.source.value}">'
        f"<p>{escape(outcome.summary.text)}</p></div>"
    )


def render_result_link(url: str) -> str:
    """External links, internal paths, anything else as plain text."""
    if url.startswith(("http", "/")):
        return f'<p><a href="{escape(url)}">View full content</a></p>'
    return f"<p>URL: {escape(url)}</p>"


def render_result(result: SearchResult) -> str:
    parts = ['<div class="search-result">']
    parts.append(f"<h4>{escape(result.title or 'Untitled')}</h4>")
    if result.summary:
        parts.append(f"<p>{escape(result.summary)}</p>")
    if result.url:
        parts.append(render_result_link(result.url))
    if result.score:
        parts.append(f"<p><small>Score: {result.score:.2f}</small></p>")
    parts.append("</div>")
    return "\n".join(parts)


def render_results(outcome: SearchOutcome) -> str:
    result_set = outcome.result_set
    query = escape(result_set.query)
    if result_set.is_empty:
        return (
            '<div class="search-results">'
            f'<h3>No results found for "{query}".</h3></div>'
        )

    parts = ['<div class="search-results">']
    parts.append(f'<h3>Found {len(result_set)} result(s) for "{query}"</h3>')
    parts.extend(render_result(result) for result in result_set.results)
    parts.append("</div>")
    return "\n".join(parts)


def render_search_page(
    query: str = "",
    outcome: Optional[SearchOutcome] = None,
    error: Optional[str] = None,
) -> str:
    body = [render_form(query, error)]
    if outcome is not None:
        body.append(render_ai_summary(outcome))
        body.append(render_results(outcome))
    return render_page("Search", "\n".join(body))


def render_index_table(indexes: Dict[str, IndexInfo]) -> str:
    if not indexes:
        return render_page("Search indexes", "<p>No search indexes are enabled.</p>")

    rows = [
        "<tr>"
        f"<td>{escape(index.id)}</td><td>{escape(index.label)}</td>"
        f"<td>{escape(index.description)}</td><td>{escape(index.server_id)}</td>"
        "</tr>"
        for index in indexes.values()
    ]
    table = (
        '<table class="search-indexes">'
        "<thead><tr><th>ID</th><th>Label</th><th>Description</th><th>Server</th></tr></thead>"
        f"<tbody>{''.join(rows)}</tbody></table>"
    )
    return render_page("Search indexes", table)
