import pytest
from pydantic import ValidationError
from simple_ai_search.core.credentials import SettingsCredentialProvider, StaticCredentialProvider
from simple_ai_search.core.settings import SearchConfig, Settings


def test_settings_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")
    monkeypatch.setenv("SEARCH_INDEX_ID", "content")
    monkeypatch.setenv("SEARCH_RESULT_LIMIT", "7")

    settings = Settings()

    assert settings.gemini_api_key == "env-key"
    assert settings.search_index_id == "content"
    assert settings.search_result_limit == 7


def test_search_config_from_settings() -> None:
    config = SearchConfig.from_settings(
        Settings(
            search_index_id="content",
            search_result_limit=3,
            summary_top_n=2,
            search_timeout_seconds=4.0,
            gemini_timeout_seconds=6.0,
        )
    )
    assert config == SearchConfig(
        index_id="content", result_limit=3, top_n=2, search_timeout=4.0, summary_timeout=6.0
    )


def test_limits_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        Settings(search_result_limit=0)


def test_solr_index_map_parsing() -> None:
    settings = Settings(solr_indexes=" index:drupal , archive ,")
    assert settings.solr_index_map() == {"index": "drupal", "archive": "archive"}


def test_credentials_are_read_once() -> None:
    settings = Settings(gemini_api_key="first")
    provider = SettingsCredentialProvider(settings)
    settings.gemini_api_key = "second"

    assert provider.get_api_key() == "first"
    assert StaticCredentialProvider("").get_api_key() is None
