"""Google Custom Search JSON API client.

Every backend must inherit from :class:`SearchBackend` and implement
``async def search(query, start, num) -> SearchPage``. Failures are reported
as :class:`SearchError`; anything else escaping a backend is a bug.
"""

from __future__ import annotations

import asyncio
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List

import aiohttp

from googledorker.core.config import Credentials
from googledorker.utils.http_client import AsyncHTTPClient
from googledorker.utils.logger import get_logger

logger = get_logger(__name__)

CSE_ENDPOINT = "https://www.googleapis.com/customsearch/v1"


class SearchError(Exception):
    """A page request failed (transport, quota, non-2xx or bad payload)."""


@dataclass
class SearchItem:
    """A single search result.

    Attributes:
        title: Result title.
        url: Result link.
        snippet: Text excerpt returned by the engine.
    """

    title: str
    url: str
    snippet: str = ""


@dataclass
class SearchPage:
    """One page of results for a ``(query, start)`` pair."""

    items: List[SearchItem] = field(default_factory=list)
    has_more: bool = False


class SearchBackend(ABC):
    """Abstract source of search result pages."""

    name: str = "unknown"

    @abstractmethod
    async def search(self, query: str, start: int, num: int) -> SearchPage:
        """Fetch one page of results.

        Args:
            query: Full query string (already scoped with ``site:``).
            start: 1-based index of the first result.
            num: Page size.

        Returns:
            :class:`SearchPage`, possibly empty.

        Raises:
            SearchError: When the page could not be fetched.
        """

    def __repr__(self) -> str:
        return f"<SearchBackend {self.name}>"


class GoogleSearchClient(SearchBackend):
    """Query the Google Custom Search JSON API with one key/engine pair.

    Example::

        async with AsyncHTTPClient(timeout=30) as http:
            client = GoogleSearchClient(credentials, http)
            page = await client.search("site:example.com", start=1, num=10)
    """

    name = "google_cse"

    def __init__(self, credentials: Credentials, http: AsyncHTTPClient) -> None:
        self._credentials = credentials
        self._http = http

    async def search(self, query: str, start: int, num: int) -> SearchPage:
        params = {
            "key": self._credentials.api_key,
            "cx": self._credentials.cse_id,
            "q": query,
            "num": str(num),
            "start": str(start),
        }
        try:
            resp = await self._http.get(CSE_ENDPOINT, params=params)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise SearchError(f"network error: {str(exc) or type(exc).__name__}") from exc

        status = resp["status"]
        body = resp["body"]
        if status != 200:
            logger.debug("CSE returned HTTP %d for %r (start=%d)", status, query, start)
            raise SearchError(f"google cse api error ({status}): {_error_message(body)}")

        try:
            payload = json.loads(body)
        except ValueError as exc:
            raise SearchError(f"unparsable response: {exc}") from exc
        if not isinstance(payload, dict):
            raise SearchError("unparsable response: expected a JSON object")

        return parse_page(payload)


def parse_page(payload: Dict[str, Any]) -> SearchPage:
    """Convert a Custom Search JSON response into a :class:`SearchPage`.

    Missing ``items`` means the result set is exhausted.
    """
    items = [
        SearchItem(
            title=str(raw.get("title", "")),
            url=str(raw.get("link", "")),
            snippet=str(raw.get("snippet", "")),
        )
        for raw in payload.get("items") or []
        if isinstance(raw, dict)
    ]
    has_more = bool((payload.get("queries") or {}).get("nextPage"))
    return SearchPage(items=items, has_more=has_more)


def _error_message(body: str) -> str:
    """Extract ``error.message`` from an API error body, else a short excerpt."""
    try:
        message = json.loads(body).get("error", {}).get("message")
    except (ValueError, AttributeError):
        message = None
    return message or body[:200] or "empty response"
