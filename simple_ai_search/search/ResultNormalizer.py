"""
Result normalization.

Maps raw search engine hits onto flat SearchResult records. Items are handled
one at a time: a broken item is recorded as skipped and the rest of the batch
carries on.
"""

import re
import warnings
from typing import Iterable, Optional

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning

from ..core.logging import get_logger
from .types import (
    ContentEntity,
    NormalizedBatch,
    RawResultItem,
    SearchResult,
    SkippedItem,
)

logger = get_logger(__name__)

SUMMARY_MAX_LENGTH = 200
ELLIPSIS = "..."
DEFAULT_SCORE = 1.0

# Entity type whose results are labelled by their bundle (content subtype)
TYPED_CONTENT_FAMILY = "node"

_WHITESPACE_RE = re.compile(r"\s+")


class UnresolvableItemError(Exception):
    """The raw item does not point at a loadable entity."""


def strip_tags(html: str) -> str:
    """Remove markup and collapse whitespace."""
    with warnings.catch_warnings():
        # Plain strings that look like file names or URLs are fine here
        warnings.simplefilter("ignore", MarkupResemblesLocatorWarning)
        text = BeautifulSoup(html, "html.parser").get_text()
    return _WHITESPACE_RE.sub(" ", text).strip()


def truncate_text(text: str, length: int = SUMMARY_MAX_LENGTH) -> str:
    """
    Truncate `text` to at most `length` characters without splitting a word.

    The cut happens at the last whitespace that leaves room for the ellipsis,
    so the result (ellipsis included) never exceeds `length` and truncating
    it again returns it unchanged.
    """
    if len(text) <= length:
        return text

    window = text[: length - len(ELLIPSIS) + 1]
    boundary = 0
    for match in _WHITESPACE_RE.finditer(window):
        boundary = match.start()
    return text[:boundary].rstrip() + ELLIPSIS


class ResultNormalizer:
    """Turns raw result items into SearchResult records."""

    def __init__(self, summary_length: int = SUMMARY_MAX_LENGTH) -> None:
        self.summary_length = summary_length

    def normalize(self, raw_results: Iterable[RawResultItem]) -> NormalizedBatch:
        batch = NormalizedBatch()
        for position, item in enumerate(raw_results):
            try:
                batch.results.append(self.normalize_item(item))
            except Exception as e:
                logger.warning(
                    f"Error processing search result: {e}",
                    extra={"position": position, "error_type": type(e).__name__},
                )
                batch.skipped.append(SkippedItem(position=position, reason=str(e)))
        return batch

    def normalize_item(self, item: RawResultItem) -> SearchResult:
        entity = item.entity
        if entity is None:
            raise UnresolvableItemError("result item has no underlying entity")

        return SearchResult(
            title=entity.label,
            url=entity.url or "",
            content_type=self._content_type(entity),
            score=self._score(item.score),
            summary=self._summary(entity.body),
            author=entity.owner.display_name if entity.owner else None,
        )

    @staticmethod
    def _score(raw_score: Optional[float]) -> float:
        if raw_score is None:
            return DEFAULT_SCORE
        return max(0.0, float(raw_score))

    @staticmethod
    def _content_type(entity: ContentEntity) -> str:
        if entity.entity_type == TYPED_CONTENT_FAMILY and entity.bundle:
            return entity.bundle
        return entity.entity_type

    def _summary(self, body: Optional[str]) -> Optional[str]:
        if not body:
            return None
        text = strip_tags(body)
        if not text:
            return None
        return truncate_text(text, self.summary_length)
