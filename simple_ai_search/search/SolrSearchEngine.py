"""
Solr search engine backend.

Queries Solr cores over the standard `select` handler and maps the returned
documents onto ContentEntity records. Each configured index id maps to one
Solr core.
"""

from typing import Any, Dict, List, Optional

from ..core.logging import get_logger
from .BaseSearchEngine import BaseSearchEngine
from .HTTPClient import HTTPClient
from .types import ContentEntity, EntityOwner, IndexInfo, RawResultItem

logger = get_logger(__name__)

# Candidate field names, first match wins
TITLE_FIELDS = ("title", "label", "ss_title")
URL_FIELDS = ("url", "ss_url", "path")
TYPE_FIELDS = ("entity_type", "ss_entity_type", "type")
BUNDLE_FIELDS = ("bundle", "ss_type", "content_type")
BODY_FIELDS = ("body", "tm_body", "content")
AUTHOR_FIELDS = ("author", "ss_author", "author_name")


def _first(doc: Dict[str, Any], names: tuple) -> Optional[Any]:
    for name in names:
        value = doc.get(name)
        if isinstance(value, list):
            value = value[0] if value else None
        if value not in (None, ""):
            return value
    return None


class SolrSearchEngine(BaseSearchEngine):
    """
    A search engine backend that talks to Apache Solr.
    """

    engine_name = "solr"

    def __init__(
        self,
        base_url: str,
        cores: Dict[str, str],
        timeout: float = 10.0,
        client: Optional[HTTPClient] = None,
    ):
        """
        Args:
            base_url: Solr root, e.g. http://localhost:8983/solr
            cores: Mapping of index id to Solr core name
            timeout: Request timeout in seconds
            client: Optional pre-built HTTPClient
        """
        if not base_url:
            raise ValueError("Solr base URL cannot be empty.")
        self.base_url = base_url.rstrip("/")
        self.cores = dict(cores)
        self.client = client or HTTPClient(base_url=self.base_url, timeout=timeout)
        logger.info(
            f"SolrSearchEngine initialized with {len(self.cores)} index(es)",
            extra={"base_url": self.base_url},
        )

    def list_indexes(self) -> List[IndexInfo]:
        return [
            IndexInfo(
                id=index_id,
                label=index_id,
                description=f"Solr core '{core}'",
                server_id=self.base_url,
            )
            for index_id, core in self.cores.items()
        ]

    async def query(
        self, index_id: str, keywords: str, offset: int = 0, limit: int = 10
    ) -> List[RawResultItem]:
        self.get_index(index_id)
        core = self.cores[index_id]

        params = {
            "q": keywords,
            "defType": "edismax",
            "start": offset,
            "rows": limit,
            "fl": "*,score",
            "wt": "json",
        }
        logger.debug(f"Querying Solr core '{core}'", extra={"params": params})
        api_response = await self.client.get(f"/{core}/select", params=params)

        docs = (api_response.get("response") or {}).get("docs", [])
        return [self._to_raw_item(doc) for doc in docs[:limit]]

    def _to_raw_item(self, doc: Dict[str, Any]) -> RawResultItem:
        score = doc.get("score")
        title = _first(doc, TITLE_FIELDS)
        if title is None:
            # Nothing to display; the normalizer will skip it
            return RawResultItem(score=score, entity=None)

        author = _first(doc, AUTHOR_FIELDS)
        entity = ContentEntity(
            label=str(title),
            entity_type=str(_first(doc, TYPE_FIELDS) or "node"),
            bundle=_first(doc, BUNDLE_FIELDS),
            url=_first(doc, URL_FIELDS),
            body=_first(doc, BODY_FIELDS),
            owner=EntityOwner(display_name=str(author)) if author else None,
        )
        return RawResultItem(score=score, entity=entity)

    async def check_availability(self) -> bool:
        """Ping every configured core."""
        try:
            for core in self.cores.values():
                await self.client.get(f"/{core}/admin/ping", params={"wt": "json"})
            return True
        except Exception as e:
            logger.warning(f"Solr availability check failed: {e}")
            return False

    async def close(self) -> None:
        await self.client.close()
