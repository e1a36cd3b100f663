"""HTTP transport shared by the provider scrapers.

Wraps an ``httpx.AsyncClient`` and turns network and HTTP status failures
into ``TransportError`` so callers can tell them apart from absence and
from layout drift.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

import httpx

from twmarket.core.config import get_config
from twmarket.core.errors import TransportError
from twmarket.core.logging import get_logger
from twmarket.parsers.decoding import parse_json

logger = get_logger(__name__)


class HttpTransport:
    """Async HTTP client for one provider.

    Usage:
        async with HttpTransport("twse") as transport:
            payload = await transport.get_json(url, params={"date": "20240102"})
    """

    def __init__(
        self,
        service: str,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
    ) -> None:
        self.service = service
        if client is None:
            scraper_config = get_config().scraper
            client = httpx.AsyncClient(
                headers={
                    "User-Agent": user_agent or scraper_config.user_agent,
                    "Accept": "application/json, text/csv, text/html, */*",
                    "Accept-Language": "zh-TW,zh;q=0.9,en;q=0.8",
                },
                timeout=timeout or scraper_config.timeout,
                follow_redirects=True,
            )
        self._client = client

    async def __aenter__(self) -> "HttpTransport":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying client."""
        await self._client.aclose()

    async def get_json(self, url: str, params: Optional[Mapping[str, str]] = None) -> Any:
        """GET a JSON document."""
        response = await self._request("GET", url, params=params)
        return parse_json(response.content)

    async def get_bytes(self, url: str, params: Optional[Mapping[str, str]] = None) -> bytes:
        """GET a raw body without decoding it."""
        response = await self._request("GET", url, params=params)
        return response.content

    async def post_form(self, url: str, form: Mapping[str, str]) -> bytes:
        """POST a form and return the raw, undecoded body."""
        response = await self._request("POST", url, data=dict(form))
        return response.content

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        logger.debug("HTTP request", service=self.service, method=method, url=url)
        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                self.service,
                f"HTTP {e.response.status_code} from {url}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise TransportError(self.service, f"{type(e).__name__} requesting {url}: {e}") from e
        return response
