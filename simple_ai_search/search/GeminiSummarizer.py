"""
Gemini generateContent client.

Sends one prompt (optionally preceded by a system instruction turn pair) and
returns the first candidate's text. Every failure, whether missing
credential, transport error, non-success status or an unexpected payload,
is reported as the same Err kind so the caller can fall back uniformly.
"""

from typing import Any, Dict, List, Optional

from ..core.credentials import CredentialProvider
from ..core.logging import get_logger
from .BaseSummarizer import BaseSummarizer
from .HTTPClient import HTTPClient, HTTPClientError
from .types import Err, ErrorKind, Ok, Result

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.0-flash"

SYSTEM_ACKNOWLEDGEMENT = (
    "I understand. I will act as a helpful assistant for the company portal, "
    "providing accurate and professional responses based on the available information."
)


def build_contents(prompt: str, system_prompt: Optional[str] = None) -> List[Dict[str, Any]]:
    """Ordered conversation turns for the request body."""
    contents: List[Dict[str, Any]] = []
    if system_prompt:
        contents.append({"role": "user", "parts": [{"text": system_prompt}]})
        contents.append({"role": "model", "parts": [{"text": SYSTEM_ACKNOWLEDGEMENT}]})
    contents.append({"role": "user", "parts": [{"text": prompt}]})
    return contents


def extract_text(api_response: Any) -> Optional[str]:
    """First candidate's first text part, or None if the shape is off."""
    try:
        text = api_response["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(text, str) or not text.strip():
        return None
    return text


class GeminiSummarizer(BaseSummarizer):
    """
    A summarization client that uses the Gemini generative language API.
    """

    provider_name = "Gemini"

    def __init__(
        self,
        credentials: CredentialProvider,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 15.0,
        client: Optional[HTTPClient] = None,
    ):
        """
        Args:
            credentials: Supplies the API key; read once here
            model: Gemini model name
            base_url: API root including the version segment
            timeout: Request timeout in seconds
            client: Optional pre-built HTTPClient
        """
        self.api_key = credentials.get_api_key()
        self.model = model
        self.client = client or HTTPClient(base_url=base_url, timeout=timeout)

        if not self.api_key:
            logger.error("GEMINI_API_KEY is not set; summaries will use the fallback.")
        else:
            logger.info(f"GeminiSummarizer initialized with model {self.model}.")

    @property
    def endpoint(self) -> str:
        return f"/models/{self.model}:generateContent"

    async def generate(self, prompt: str, system_prompt: Optional[str] = None) -> Result:
        if not self.api_key:
            return Err(ErrorKind.SUMMARIZATION_UNAVAILABLE, "API key not configured")

        payload = {"contents": build_contents(prompt, system_prompt)}
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key,
        }
        logger.debug(
            "Sending Gemini request",
            extra={"model": self.model, "turns": len(payload["contents"])},
        )

        try:
            api_response = await self.client.post(
                self.endpoint, json_data=payload, headers=headers
            )
        except HTTPClientError as e:
            logger.error(f"Gemini API request failed: {e}")
            return Err(ErrorKind.SUMMARIZATION_UNAVAILABLE, str(e))
        except ValueError as e:
            # Body was not JSON
            logger.error(f"Gemini API returned an unreadable response: {e}")
            return Err(ErrorKind.SUMMARIZATION_UNAVAILABLE, "malformed response")
        except Exception as e:
            logger.error(
                f"Gemini API request failed unexpectedly: {e}",
                extra={"error_type": type(e).__name__},
            )
            return Err(ErrorKind.SUMMARIZATION_UNAVAILABLE, str(e))

        text = extract_text(api_response)
        if text is None:
            logger.error("Gemini API response contained no content")
            return Err(ErrorKind.SUMMARIZATION_UNAVAILABLE, "no content")

        return Ok(text)

    async def close(self) -> None:
        await self.client.close()
