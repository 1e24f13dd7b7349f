"""
Query-to-summary pipeline.

query -> SearchGateway -> ResultNormalizer -> PromptBuilder -> summarizer,
or the fallback summary when there is nothing to summarize or the model call
fails. run_search_and_summarize() always returns a SearchOutcome.
"""

from typing import Dict, Optional

from ..core.credentials import CredentialProvider, SettingsCredentialProvider
from ..core.logging import get_logger
from ..core.settings import SearchConfig, Settings, settings
from .BaseSearchEngine import BaseSearchEngine
from .BaseSummarizer import BaseSummarizer
from .FallbackSummarizer import fallback_summary, no_results_message
from .PromptBuilder import PromptBuilder
from .SearchGateway import SearchGateway
from .types import (
    Err,
    ErrorKind,
    IndexInfo,
    Ok,
    ResultSet,
    SearchOutcome,
    SummaryRequest,
    SummaryResult,
    SummarySource,
)

logger = get_logger(__name__)


class SearchManager:
    """Runs one search-and-summarize request at a time; holds no per-request state."""

    def __init__(
        self,
        config: SearchConfig,
        engine: BaseSearchEngine,
        summarizer: BaseSummarizer,
        prompt_builder: Optional[PromptBuilder] = None,
    ) -> None:
        self.config = config
        self.gateway = SearchGateway(engine, timeout=config.search_timeout)
        self.summarizer = summarizer
        self.prompt_builder = prompt_builder or PromptBuilder(top_n=config.top_n)
        logger.info(
            f"Search manager initialized with engine: {engine.engine_name}, "
            f"summarizer: {summarizer.provider_name}",
            extra={"index_id": config.index_id},
        )

    def get_available_indexes(self) -> Dict[str, IndexInfo]:
        return self.gateway.get_available_indexes()

    async def run_search_and_summarize(self, query: str) -> SearchOutcome:
        logger.info(f"Search request received: '{query}'")
        try:
            result_set = await self.gateway.search(
                self.config.index_id, query, self.config.result_limit
            )
        except Exception as e:
            logger.error(
                f"Search pipeline failed: {e}",
                extra={"query": query, "error_type": type(e).__name__},
            )
            result_set = ResultSet(query=query, results=())

        summary = await self.summarize(
            SummaryRequest(
                query=query,
                results=result_set,
                system_prompt=self.prompt_builder.system_prompt,
                top_n=self.config.top_n,
            )
        )

        logger.info(
            "Search request completed",
            extra={
                "query": query,
                "results_count": len(result_set.results),
                "summary_source": summary.source.value,
            },
        )
        return SearchOutcome(result_set=result_set, summary=summary)

    async def summarize(self, request: SummaryRequest) -> SummaryResult:
        results = request.results.results
        if not results:
            return SummaryResult(
                text=no_results_message(request.query), source=SummarySource.FALLBACK
            )

        try:
            prompt = self.prompt_builder.build(request.query, results[: request.top_n])
            generated = await self.summarizer.generate(prompt, request.system_prompt)
        except Exception as e:
            logger.error(
                f"Summarization failed: {e}",
                extra={"query": request.query, "error_type": type(e).__name__},
            )
            generated = Err(ErrorKind.SUMMARIZATION_UNAVAILABLE, str(e))

        if isinstance(generated, Ok):
            return SummaryResult(text=generated.value, source=SummarySource.GENERATED)

        logger.warning(
            "Falling back to basic summary",
            extra={"reason": generated.kind.value, "detail": generated.message},
        )
        return SummaryResult(
            text=fallback_summary(request.query, results), source=SummarySource.FALLBACK
        )

    async def close(self) -> None:
        await self.gateway.engine.close()
        await self.summarizer.close()


def get_search_engine(source: Settings = settings) -> BaseSearchEngine:
    """
    Get search engine backend based on SEARCH_ENGINE_PROVIDER configuration.
    Unknown or unusable configurations fall back to the in-memory demo engine.
    """
    provider_name = (source.search_engine_provider or "dummy").lower()

    match provider_name:
        case "solr":
            from .SolrSearchEngine import SolrSearchEngine

            cores = source.solr_index_map()
            if not cores:
                logger.warning("Solr selected as search engine but SOLR_INDEXES is empty")
            return SolrSearchEngine(
                base_url=source.solr_base_url,
                cores=cores,
                timeout=source.search_timeout_seconds,
            )
        case "dummy":
            from .DummySearchEngine import build_demo_engine

            logger.info("Using in-memory demo search engine")
            return build_demo_engine(source.search_index_id)
        case _:
            from .DummySearchEngine import build_demo_engine

            logger.error(
                f"Unknown search engine provider: {provider_name}. Using demo engine"
            )
            return build_demo_engine(source.search_index_id)


def get_summarizer(
    source: Settings = settings, credentials: Optional[CredentialProvider] = None
) -> BaseSummarizer:
    from .GeminiSummarizer import GeminiSummarizer

    return GeminiSummarizer(
        credentials=credentials or SettingsCredentialProvider(source),
        model=source.gemini_model,
        base_url=source.gemini_base_url,
        timeout=source.gemini_timeout_seconds,
    )


# Global search manager instance
_search_manager: Optional[SearchManager] = None


def get_search_manager() -> SearchManager:
    """Get or create the global search manager."""
    global _search_manager
    if _search_manager is None:
        _search_manager = SearchManager(
            config=SearchConfig.from_settings(settings),
            engine=get_search_engine(settings),
            summarizer=get_summarizer(settings),
        )
    return _search_manager
