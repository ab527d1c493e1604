"""Async HTTP client for google-dorker.

Provides :class:`AsyncHTTPClient`, a thin aiohttp wrapper holding one pooled
session with a request timeout and an optional proxy. Every call is a single
attempt; callers decide what a failure means.
"""

from __future__ import annotations

from types import TracebackType
from typing import Any, Dict, Optional, Type

from aiohttp import ClientSession, ClientTimeout, TCPConnector

from googledorker import __version__
from googledorker.utils.logger import TRACE, get_logger

logger = get_logger(__name__)

_DEFAULT_USER_AGENT = f"google-dorker/{__version__}"


class AsyncHTTPClient:
    """Async HTTP client with connection pooling.

    Usage::

        async with AsyncHTTPClient(timeout=10) as client:
            resp = await client.get("https://example.com", params={"q": "x"})
            print(resp["status"], resp["body"][:200])
    """

    def __init__(self, timeout: float = 30.0, proxy: Optional[str] = None) -> None:
        """Initialise the client (does *not* open a session yet).

        Args:
            timeout: Total request timeout in seconds.
            proxy: Optional HTTP proxy URL.
        """
        self._timeout = timeout
        self._proxy = proxy
        self._default_headers: Dict[str, str] = {"User-Agent": _DEFAULT_USER_AGENT}
        self._session: Optional[ClientSession] = None

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    async def __aenter__(self) -> "AsyncHTTPClient":
        await self._create_session()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        await self.close()

    async def _create_session(self) -> None:
        """Create the underlying :class:`aiohttp.ClientSession`."""
        connector = TCPConnector(ttl_dns_cache=300)
        self._session = ClientSession(
            connector=connector,
            timeout=ClientTimeout(total=self._timeout),
            headers=self._default_headers,
        )

    async def close(self) -> None:
        """Close the underlying HTTP session and release connections."""
        if self._session and not self._session.closed:
            await self._session.close()

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    async def get(self, url: str, **kwargs: Any) -> Dict[str, Any]:
        """Perform an HTTP GET request.

        Args:
            url: Target URL.
            **kwargs: Extra arguments forwarded to
                :meth:`aiohttp.ClientSession.request` (``params``, ``headers``…).

        Returns:
            Response dict with ``status`` and ``body``.

        Raises:
            aiohttp.ClientError: On connection or protocol failure.
            asyncio.TimeoutError: When the request exceeds the timeout.
        """
        return await self._request("GET", url, **kwargs)

    async def _request(self, method: str, url: str, **kwargs: Any) -> Dict[str, Any]:
        if self._session is None:
            await self._create_session()
        assert self._session is not None

        if self._proxy:
            kwargs["proxy"] = self._proxy

        logger.log(TRACE, "%s %s", method, url)
        async with self._session.request(method, url, **kwargs) as resp:
            body = await resp.text(errors="replace")
            return {"status": resp.status, "body": body}
