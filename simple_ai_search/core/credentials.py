"""Credential providers for the generative language API."""

from abc import ABC, abstractmethod
from typing import Optional

from .settings import Settings


class CredentialProvider(ABC):
    """Supplies the API key used by the summarization client."""

    @abstractmethod
    def get_api_key(self) -> Optional[str]:
        pass


class SettingsCredentialProvider(CredentialProvider):
    """Reads the API key from settings once, at construction time."""

    def __init__(self, source: Settings) -> None:
        self._api_key = source.gemini_api_key.strip() or None

    def get_api_key(self) -> Optional[str]:
        return self._api_key


class StaticCredentialProvider(CredentialProvider):
    def __init__(self, api_key: Optional[str]) -> None:
        self._api_key = api_key or None

    def get_api_key(self) -> Optional[str]:
        return self._api_key
