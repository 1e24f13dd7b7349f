import logging

import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from simple_ai_search.core.credentials import StaticCredentialProvider
from simple_ai_search.core.settings import SearchConfig, Settings
from simple_ai_search.search.DummySearchEngine import DummySearchEngine
from simple_ai_search.search.FallbackSummarizer import no_results_message
from simple_ai_search.search.GeminiSummarizer import GeminiSummarizer
from simple_ai_search.search.SearchManager import (
    SearchManager,
    get_search_engine,
    get_summarizer,
)
from simple_ai_search.search.SolrSearchEngine import SolrSearchEngine
from simple_ai_search.search.types import (
    ContentEntity,
    Err,
    ErrorKind,
    Ok,
    RawResultItem,
    SummarySource,
)


def _engine() -> DummySearchEngine:
    engine = DummySearchEngine()
    engine.add_index(
        "index",
        documents=[
            ContentEntity(label="Vacation policy", body="<p>Employees get 25 days.</p>", url="/node/1"),
            ContentEntity(label="Vacation request form", body="Fill in the form.", url="/node/2"),
            ContentEntity(label="Sick leave policy", url="/node/3"),
        ],
    )
    return engine


def _summarizer(result) -> MagicMock:
    summarizer = MagicMock()
    summarizer.provider_name = "mock"
    summarizer.generate = AsyncMock(return_value=result)
    return summarizer


class OrderedEngine(DummySearchEngine):
    """Returns fixed scores regardless of the query."""

    async def query(self, index_id, keywords, offset=0, limit=10):
        self.get_index(index_id)
        return [
            RawResultItem(score=score, entity=ContentEntity(label=label))
            for label, score in [("Vacation policy", 0.9), ("Holiday calendar", 0.75), ("Leave FAQ", 0.5)]
        ][offset : offset + limit]


@pytest.mark.asyncio
async def test_generated_summary_embeds_all_titles() -> None:
    engine = OrderedEngine()
    engine.add_index("index")
    summarizer = _summarizer(Ok("You get 25 days."))
    manager = SearchManager(SearchConfig(), engine, summarizer)

    outcome = await manager.run_search_and_summarize("vacation policy")

    assert [r.score for r in outcome.result_set.results] == [0.9, 0.75, 0.5]
    assert outcome.summary.source is SummarySource.GENERATED
    assert outcome.summary.text == "You get 25 days."

    prompt, system_prompt = summarizer.generate.call_args.args
    for title in ("Vacation policy", "Holiday calendar", "Leave FAQ"):
        assert f"Title: {title}" in prompt
    assert system_prompt == manager.prompt_builder.system_prompt


@pytest.mark.asyncio
async def test_summarizer_failure_uses_fallback() -> None:
    summarizer = _summarizer(Err(ErrorKind.SUMMARIZATION_UNAVAILABLE, "Provider Error: 500"))
    manager = SearchManager(SearchConfig(), _engine(), summarizer)

    outcome = await manager.run_search_and_summarize("vacation policy")

    assert outcome.summary.source is SummarySource.FALLBACK
    assert outcome.summary.text.startswith('Based on your search for "vacation policy"')
    assert "Employees get 25 days." in outcome.summary.text


@pytest.mark.asyncio
async def test_unknown_index_gives_no_results_message(caplog: pytest.LogCaptureFixture) -> None:
    summarizer = _summarizer(Ok("should not be used"))
    manager = SearchManager(SearchConfig(index_id="nonexistent"), _engine(), summarizer)

    with caplog.at_level(logging.ERROR):
        outcome = await manager.run_search_and_summarize("vacation policy")

    assert outcome.result_set.results == ()
    assert outcome.summary.source is SummarySource.FALLBACK
    assert outcome.summary.text == no_results_message("vacation policy")
    assert len([r for r in caplog.records if r.levelno == logging.ERROR]) == 1
    summarizer.generate.assert_not_called()


@pytest.mark.asyncio
async def test_item_without_body_has_no_content_line() -> None:
    summarizer = _summarizer(Ok("ok"))
    manager = SearchManager(SearchConfig(), _engine(), summarizer)

    outcome = await manager.run_search_and_summarize("sick leave")

    result = outcome.result_set.results[0]
    assert result.title == "Sick leave policy"
    assert result.summary is None
    prompt = summarizer.generate.call_args.args[0]
    assert "Content:" not in prompt


@pytest.mark.asyncio
async def test_summarizer_exception_keeps_results() -> None:
    summarizer = _summarizer(None)
    summarizer.generate.side_effect = RuntimeError("unexpected")
    manager = SearchManager(SearchConfig(), _engine(), summarizer)

    outcome = await manager.run_search_and_summarize("vacation")

    assert [r.title for r in outcome.result_set.results] == [
        "Vacation policy",
        "Vacation request form",
    ]
    assert outcome.summary.source is SummarySource.FALLBACK
    assert outcome.summary.text.startswith('Based on your search for "vacation"')


@pytest.mark.asyncio
async def test_invalid_model_url_falls_back_with_results() -> None:
    """A request URL httpx refuses to build is a summarization failure, not a search failure."""
    summarizer = GeminiSummarizer(StaticCredentialProvider("key"), model="gemini\x7f-flash")
    manager = SearchManager(SearchConfig(), _engine(), summarizer)

    outcome = await manager.run_search_and_summarize("vacation")

    assert len(outcome.result_set.results) == 2
    assert outcome.summary.source is SummarySource.FALLBACK
    assert outcome.summary.text.startswith('Based on your search for "vacation"')
    await manager.close()


@pytest.mark.asyncio
async def test_gateway_exception_gives_no_results_message() -> None:
    summarizer = _summarizer(Ok("unused"))
    manager = SearchManager(SearchConfig(), _engine(), summarizer)

    with patch.object(manager.gateway, "search", new_callable=AsyncMock) as mock_search:
        mock_search.side_effect = RuntimeError("unexpected")
        outcome = await manager.run_search_and_summarize("vacation")

    assert outcome.result_set.results == ()
    assert outcome.summary.source is SummarySource.FALLBACK
    assert outcome.summary.text == no_results_message("vacation")
    summarizer.generate.assert_not_called()


@pytest.mark.asyncio
async def test_prompt_uses_configured_top_n() -> None:
    engine = DummySearchEngine()
    engine.add_index("index", documents=[ContentEntity(label=f"policy {i}") for i in range(6)])
    summarizer = _summarizer(Ok("ok"))
    manager = SearchManager(SearchConfig(top_n=2), engine, summarizer)

    outcome = await manager.run_search_and_summarize("policy")

    assert len(outcome.result_set.results) == 6
    prompt = summarizer.generate.call_args.args[0]
    assert "Result 2:" in prompt
    assert "Result 3:" not in prompt


@pytest.mark.asyncio
async def test_result_limit_is_applied() -> None:
    engine = DummySearchEngine()
    engine.add_index("index", documents=[ContentEntity(label=f"policy {i}") for i in range(15)])
    manager = SearchManager(SearchConfig(result_limit=4), engine, _summarizer(Ok("ok")))

    outcome = await manager.run_search_and_summarize("policy")

    assert len(outcome.result_set.results) == 4


def test_manager_lists_available_indexes() -> None:
    manager = SearchManager(SearchConfig(), _engine(), _summarizer(Ok("ok")))
    assert list(manager.get_available_indexes()) == ["index"]


def test_search_engine_factory() -> None:
    solr = get_search_engine(
        Settings(search_engine_provider="solr", solr_indexes="index:drupal_content")
    )
    assert isinstance(solr, SolrSearchEngine)
    assert solr.cores == {"index": "drupal_content"}

    dummy = get_search_engine(Settings(search_engine_provider="dummy", search_index_id="portal"))
    assert isinstance(dummy, DummySearchEngine)
    assert "portal" in {i.id for i in dummy.list_enabled_indexes()}

    fallback = get_search_engine(Settings(search_engine_provider="mystery"))
    assert isinstance(fallback, DummySearchEngine)


def test_summarizer_factory_reads_credential_from_settings() -> None:
    summarizer = get_summarizer(Settings(gemini_api_key="abc", gemini_model="gemini-x"))
    assert isinstance(summarizer, GeminiSummarizer)
    assert summarizer.api_key == "abc"
    assert summarizer.model == "gemini-x"


def test_summarizer_factory_logs_missing_credential(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR):
        summarizer = get_summarizer(Settings(gemini_api_key=""))
    assert summarizer.api_key is None
    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert len(errors) == 1
    assert "GEMINI_API_KEY" in errors[0].getMessage()
