import httpx
from typing import Any, Dict, Optional

from ..core.logging import get_logger

logger = get_logger(__name__)


class HTTPClientError(Exception):
    """Base class for errors raised by HTTPClient."""


class ProviderError(HTTPClientError):
    """The remote service answered with a non-success status."""

    def __init__(self, status_code: int, body: str = "") -> None:
        super().__init__(f"Provider Error: {status_code}")
        self.status_code = status_code
        self.body = body


class NetworkError(HTTPClientError):
    """The request never got a response (connect failure, timeout, ...)."""


class HTTPClient:
    """
    Thin JSON HTTP utility around a pooled httpx.AsyncClient.
    Every request is bounded by `timeout`; errors are logged here once and
    re-raised as HTTPClientError subclasses.
    """

    def __init__(
        self,
        base_url: str = "",
        default_headers: Optional[Dict[str, str]] = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = httpx.Timeout(timeout, connect=min(timeout, 3.0))

        self.headers = {
            "User-Agent": "simple-ai-search/0.1",
            "Accept": "application/json",
        }
        if default_headers:
            self.headers.update(default_headers)

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=self.headers,
            follow_redirects=True,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def get(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        return_json: bool = True,
    ) -> Any:
        return await self._request(
            "GET", url, params=params, headers=headers, return_json=return_json
        )

    async def post(
        self,
        url: str,
        json_data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        return_json: bool = True,
    ) -> Any:
        return await self._request(
            "POST", url, json_data=json_data, headers=headers, return_json=return_json
        )

    async def _request(
        self,
        method: str,
        url: str,
        json_data: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        return_json: bool = True,
    ) -> Any:
        try:
            response = await self._client.request(
                method=method,
                url=url,
                json=json_data,
                params=params,
                headers=headers,
            )

            response.raise_for_status()
            return response.json() if return_json else response.text

        except httpx.HTTPStatusError as e:
            body = e.response.text[:200]
            logger.error(
                f"HTTP {method} {e.response.status_code}",
                extra={"url": str(e.request.url), "response": body},
            )
            raise ProviderError(e.response.status_code, body) from e

        except httpx.RequestError as e:
            logger.error(f"Network Error: {method} {url}", extra={"error": str(e)})
            raise NetworkError(f"Network Failure: {str(e)}") from e

        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"HTTP Error: {method} {url}", extra={"error": str(e)})
            raise HTTPClientError(f"HTTP Failure: {str(e)}") from e
