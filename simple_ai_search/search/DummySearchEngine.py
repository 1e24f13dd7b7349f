"""
In-memory search engine for development and tests.

Documents are matched on their label and body; the score is the fraction of
query terms that occur in the document.
"""

import re
from typing import Dict, Iterable, List, Optional

from ..core.logging import get_logger
from .BaseSearchEngine import BaseSearchEngine
from .types import ContentEntity, EntityOwner, IndexInfo, RawResultItem

logger = get_logger(__name__)

_TOKEN_RE = re.compile(r"\w+", re.UNICODE)
_TAG_RE = re.compile(r"<[^>]+>")


def _tokens(text: str) -> List[str]:
    return [t.lower() for t in _TOKEN_RE.findall(text or "")]


class DummySearchEngine(BaseSearchEngine):
    """Search engine backed by plain Python lists."""

    engine_name = "dummy"

    def __init__(self) -> None:
        self._indexes: Dict[str, IndexInfo] = {}
        self._documents: Dict[str, List[ContentEntity]] = {}

    def add_index(
        self,
        index_id: str,
        label: Optional[str] = None,
        description: str = "",
        enabled: bool = True,
        documents: Iterable[ContentEntity] = (),
    ) -> IndexInfo:
        index = IndexInfo(
            id=index_id,
            label=label or index_id,
            description=description,
            server_id=self.engine_name,
            enabled=enabled,
        )
        self._indexes[index_id] = index
        self._documents[index_id] = list(documents)
        return index

    def list_indexes(self) -> List[IndexInfo]:
        return list(self._indexes.values())

    async def query(
        self, index_id: str, keywords: str, offset: int = 0, limit: int = 10
    ) -> List[RawResultItem]:
        self.get_index(index_id)

        terms = set(_tokens(keywords))
        if not terms:
            return []

        scored = []
        for position, entity in enumerate(self._documents[index_id]):
            haystack = set(_tokens(entity.label)) | set(
                _tokens(_TAG_RE.sub(" ", entity.body or ""))
            )
            matched = len(terms & haystack)
            if matched:
                scored.append((matched / len(terms), position, entity))

        # Stable: ties keep insertion order
        scored.sort(key=lambda item: (-item[0], item[1]))
        window = scored[offset : offset + limit]
        logger.debug(
            f"Dummy search matched {len(scored)} documents",
            extra={"index_id": index_id, "returned": len(window)},
        )
        return [RawResultItem(score=round(score, 4), entity=entity) for score, _, entity in window]


def build_demo_engine(index_id: str = "index") -> DummySearchEngine:
    """A small company-portal index, used when no real backend is configured."""
    engine = DummySearchEngine()
    hr = EntityOwner(display_name="HR Team")
    it = EntityOwner(display_name="IT Service Desk")
    engine.add_index(
        index_id,
        label="Company portal",
        description="Demo content for local development",
        documents=[
            ContentEntity(
                label="Vacation policy",
                bundle="page",
                url="/node/1",
                body="<p>Full-time employees accrue <strong>25 vacation days</strong> per year. "
                "Requests go through the HR portal at least two weeks in advance.</p>",
                owner=hr,
            ),
            ContentEntity(
                label="Public holidays calendar",
                bundle="article",
                url="/node/2",
                body="<p>The list of public holidays observed by every office, updated each January.</p>",
                owner=hr,
            ),
            ContentEntity(
                label="Requesting a new laptop",
                bundle="page",
                url="/node/3",
                body="<p>Open a ticket with the IT service desk. Standard hardware ships within five days.</p>",
                owner=it,
            ),
            ContentEntity(
                label="Remote work guidelines",
                bundle="article",
                url="/node/4",
                body="<p>Employees may work remotely up to three days per week with manager approval. "
                "Vacation and remote days cannot overlap.</p>",
                owner=hr,
            ),
        ],
    )
    return engine
