"""
Search gateway.

Front door to the configured search engine: resolves the index, runs a
bounded keyword query and normalizes the hits. Failures never reach the
caller; they come back as Err values from search_result() and as an empty
ResultSet from search().
"""

import asyncio
from typing import Dict, Optional

from ..core.logging import get_logger
from .BaseSearchEngine import BaseSearchEngine, IndexDisabledError, IndexNotFoundError
from .ResultNormalizer import ResultNormalizer
from .types import Err, ErrorKind, IndexInfo, Ok, Result, ResultSet

logger = get_logger(__name__)


class SearchGateway:
    """Wraps a search engine backend behind a total search() call."""

    def __init__(
        self,
        engine: BaseSearchEngine,
        normalizer: Optional[ResultNormalizer] = None,
        timeout: Optional[float] = 10.0,
    ) -> None:
        self.engine = engine
        self.normalizer = normalizer or ResultNormalizer()
        self.timeout = timeout

    def get_available_indexes(self) -> Dict[str, IndexInfo]:
        """Enabled indexes keyed by id."""
        try:
            return {index.id: index for index in self.engine.list_enabled_indexes()}
        except Exception as e:
            logger.error(
                f"Failed to list search indexes: {e}",
                extra={"engine": self.engine.engine_name, "error_type": type(e).__name__},
            )
            return {}

    async def search_result(self, index_id: str, query: str, limit: int = 10) -> Result:
        """
        Search one index and return Ok(ResultSet) or Err describing the failure.

        Raises:
            ValueError: if limit is not positive
        """
        if limit <= 0:
            raise ValueError(f"limit must be greater than 0, got {limit}")

        logger.info(
            f"Search: index={index_id}, query={query}",
            extra={"index_id": index_id, "limit": limit},
        )

        try:
            self.engine.get_index(index_id)
        except (IndexNotFoundError, IndexDisabledError) as e:
            logger.error(str(e), extra={"index_id": index_id})
            return Err(ErrorKind.INDEX_UNAVAILABLE, str(e))

        try:
            raw_results = await asyncio.wait_for(
                self.engine.query(index_id, query, offset=0, limit=limit),
                timeout=self.timeout,
            )
        except (IndexNotFoundError, IndexDisabledError) as e:
            logger.error(str(e), extra={"index_id": index_id})
            return Err(ErrorKind.INDEX_UNAVAILABLE, str(e))
        except asyncio.TimeoutError:
            message = f"Search timed out after {self.timeout}s"
            logger.error(f"Search by index error: {message}", extra={"index_id": index_id})
            return Err(ErrorKind.SEARCH_ENGINE_FAILURE, message)
        except Exception as e:
            logger.error(
                f"Search by index error: {e}",
                extra={"index_id": index_id, "error_type": type(e).__name__},
            )
            return Err(ErrorKind.SEARCH_ENGINE_FAILURE, str(e))

        batch = self.normalizer.normalize(raw_results[:limit])
        if batch.skipped:
            logger.warning(
                f"Skipped {len(batch.skipped)} unusable result item(s)",
                extra={"index_id": index_id, "positions": [s.position for s in batch.skipped]},
            )
        return Ok(ResultSet(query=query, results=batch.results))

    async def search(self, index_id: str, query: str, limit: int = 10) -> ResultSet:
        """Search one index; any failure yields an empty ResultSet."""
        outcome = await self.search_result(index_id, query, limit)
        if isinstance(outcome, Ok):
            return outcome.value
        return ResultSet(query=query, results=())
