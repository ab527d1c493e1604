"""Per-domain paginated search.

:class:`DomainSearcher` walks the result pages for one domain until the set
is exhausted, the result ceiling is reached, the shared :class:`Deadline`
expires or the backend fails, and always finishes with a
:class:`SearchOutcome`.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional
from urllib.parse import urlsplit

from googledorker.core.registry import SubdomainRegistry
from googledorker.search.client import SearchBackend, SearchError
from googledorker.utils.logger import TRACE, get_logger

logger = get_logger(__name__)

PAGE_SIZE = 10
RESULT_CEILING = 100
TIMEOUT_ERROR = "Search timeout"


@dataclass
class SearchOutcome:
    """Terminal result of one domain's search.

    Attributes:
        domain: The searched domain.
        subdomains: Sorted hostnames found; meaningful only when ``error`` is ``None``.
        error: Failure message, or ``None`` on success.
    """

    domain: str
    subdomains: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Deadline:
    """A wall-clock cut-off shared by every search of a run."""

    def __init__(self, timeout: float, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._expires_at = clock() + timeout

    @property
    def expired(self) -> bool:
        return self._clock() >= self._expires_at

    @property
    def remaining(self) -> float:
        """Seconds left before expiry (never negative)."""
        return max(0.0, self._expires_at - self._clock())


def extract_hostname(url: str) -> Optional[str]:
    """Return the hostname of *url*, or ``None`` when it cannot be parsed."""
    try:
        return urlsplit(url).hostname or None
    except ValueError:
        return None


def is_subdomain(hostname: str, domain: str) -> bool:
    """Return ``True`` if *hostname* counts as a subdomain of *domain*.

    Plain suffix match: ``notexample.com`` is accepted for ``example.com``.
    The domain itself is never its own subdomain.
    """
    return hostname.endswith(domain) and hostname != domain


class DomainSearcher:
    """Drive one domain's paginated search against a :class:`SearchBackend`.

    Example::

        searcher = DomainSearcher(client, extract_subdomains=True)
        outcome = await searcher.search(Deadline(300), "example.com", "site:example.com")
    """

    def __init__(
        self,
        backend: SearchBackend,
        extract_subdomains: bool = False,
        page_delay: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialise the searcher.

        Args:
            backend: Page source.
            extract_subdomains: Collect subdomains from result URLs.
            page_delay: Seconds to wait between page requests.
            sleep: Awaitable used for the inter-page delay.
        """
        self.backend = backend
        self.extract_subdomains = extract_subdomains
        self.page_delay = page_delay
        self._sleep = sleep

    async def search(self, deadline: Deadline, domain: str, query: str) -> SearchOutcome:
        """Search *domain* with *query*; never raises.

        Any unexpected exception becomes an error outcome for this domain.
        """
        try:
            return await self._search(deadline, domain, query)
        except Exception as exc:  # noqa: BLE001
            logger.error("Recovered from fault in search routine for %s: %s", domain, exc)
            return SearchOutcome(domain=domain, error=f"Search routine fault: {exc}")

    async def _search(self, deadline: Deadline, domain: str, query: str) -> SearchOutcome:
        registry = SubdomainRegistry()
        start = 1

        while start < RESULT_CEILING:
            # Partial results are dropped on timeout.
            if deadline.expired:
                return SearchOutcome(domain=domain, error=TIMEOUT_ERROR)

            logger.log(TRACE, "Searching page starting at index: %d for domain: %s", start, domain)
            try:
                page = await self.backend.search(query, start, PAGE_SIZE)
            except SearchError as exc:
                logger.error("Search failed for domain %s: %s", domain, exc)
                return SearchOutcome(domain=domain, error=f"Search failed: {exc}")

            if not page.items:
                break

            for item in page.items:
                if self.extract_subdomains:
                    self._record_subdomain(registry, domain, item.url)
                logger.info("Found: %s", item.url)

            start += PAGE_SIZE
            if len(page.items) < PAGE_SIZE or start >= RESULT_CEILING:
                break

            await self._sleep(self.page_delay)

        return SearchOutcome(domain=domain, subdomains=registry.snapshot())

    @staticmethod
    def _record_subdomain(registry: SubdomainRegistry, domain: str, url: str) -> None:
        hostname = extract_hostname(url)
        if hostname is None:
            logger.debug("Failed to parse URL %s", url)
            return
        if is_subdomain(hostname, domain):
            if hostname not in registry:
                logger.debug("Found subdomain: %s", hostname)
            registry.add(hostname)
