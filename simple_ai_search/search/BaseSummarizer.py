from abc import ABC, abstractmethod
from typing import Optional

from .types import Result


class BaseSummarizer(ABC):
    """Base class for generative summarization clients."""

    provider_name: str = "base"

    @abstractmethod
    async def generate(self, prompt: str, system_prompt: Optional[str] = None) -> Result:
        """
        Send a prompt to the model.

        Returns:
            Ok(text) on success, Err(SUMMARIZATION_UNAVAILABLE) on any failure
        """
        pass

    async def close(self) -> None:
        return None
