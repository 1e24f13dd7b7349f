"""
Base class for search engine backends.

A backend owns a set of indexes and executes keyword queries against them.
It hands back raw result items; turning those into SearchResult records is
the job of the ResultNormalizer.
"""

from abc import ABC, abstractmethod
from typing import List

from .types import IndexInfo, RawResultItem


class IndexNotFoundError(Exception):
    """The requested index does not exist."""


class IndexDisabledError(Exception):
    """The requested index exists but is disabled."""


class BaseSearchEngine(ABC):
    """Base class for search engine backends."""

    engine_name: str = "base"

    @abstractmethod
    def list_indexes(self) -> List[IndexInfo]:
        """Return every index the engine knows about, enabled or not."""
        pass

    @abstractmethod
    async def query(
        self, index_id: str, keywords: str, offset: int = 0, limit: int = 10
    ) -> List[RawResultItem]:
        """
        Execute a keyword query against one index.

        Args:
            index_id: Identifier of the index to query
            keywords: The user's search keywords
            offset: Number of leading hits to skip
            limit: Maximum number of hits to return

        Returns:
            Raw result items in relevance-descending order

        Raises:
            IndexNotFoundError / IndexDisabledError for unusable indexes,
            any other exception for engine failures
        """
        pass

    def list_enabled_indexes(self) -> List[IndexInfo]:
        return [index for index in self.list_indexes() if index.enabled]

    def get_index(self, index_id: str) -> IndexInfo:
        """Resolve an index id, raising if it is missing or disabled."""
        for index in self.list_indexes():
            if index.id == index_id:
                if not index.enabled:
                    raise IndexDisabledError(f"Search index is disabled: {index_id}")
                return index
        raise IndexNotFoundError(f"Search index not found: {index_id}")

    async def check_availability(self) -> bool:
        return True

    async def close(self) -> None:
        return None
