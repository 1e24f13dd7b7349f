from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import Field
from pydantic.functional_validators import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Generative language API
    gemini_api_key: str = Field(default="")
    gemini_model: str = Field(default="gemini-2.0-flash")
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta"
    )
    gemini_timeout_seconds: float = Field(default=15.0)

    # Search
    search_index_id: str = Field(default="index")
    search_result_limit: int = Field(default=10)
    summary_top_n: int = Field(default=5)
    search_timeout_seconds: float = Field(default=10.0)
    search_engine_provider: str = Field(default="dummy")

    # Solr backend
    solr_base_url: str = Field(default="http://localhost:8983/solr")
    solr_indexes: str = Field(default="")

    # Logging
    log_level: str = Field(default="INFO")
    enable_console_logging: bool = Field(default=True)

    @field_validator("solr_indexes", mode="before")
    @classmethod
    def parse_comma_separated_string(cls, v: Any) -> str:
        """
        Ensures the field is always a string.
        The mapping is parsed where it's used, see solr_index_map().
        """
        if isinstance(v, list):
            return ",".join(v)
        if isinstance(v, str):
            return v.strip()
        return ""

    @field_validator("search_result_limit", "summary_top_n")
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be greater than 0")
        return v

    def solr_index_map(self) -> dict[str, str]:
        """Parse `solr_indexes` ("id:core,id2:core2") into {index_id: core}."""
        mapping: dict[str, str] = {}
        for entry in self.solr_indexes.split(","):
            entry = entry.strip()
            if not entry:
                continue
            index_id, _, core = entry.partition(":")
            mapping[index_id.strip()] = (core or index_id).strip()
        return mapping


@dataclass(frozen=True)
class SearchConfig:
    """Per-pipeline configuration, passed in at construction."""

    index_id: str = "index"
    result_limit: int = 10
    top_n: int = 5
    search_timeout: float = 10.0
    summary_timeout: float = 15.0

    @classmethod
    def from_settings(cls, source: Settings) -> SearchConfig:
        return cls(
            index_id=source.search_index_id,
            result_limit=source.search_result_limit,
            top_n=source.summary_top_n,
            search_timeout=source.search_timeout_seconds,
            summary_timeout=source.gemini_timeout_seconds,
        )


# Single, concrete settings instance that callers import directly
settings: Settings = Settings()
