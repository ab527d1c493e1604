"""Multi-domain search orchestrator for google-dorker.

The :class:`SearchOrchestrator` runs one :class:`DomainSearcher` task per
requested domain under a shared deadline and a concurrency cap, then folds
the outcomes into a ``domain -> subdomains`` mapping.

Domains whose search failed or timed out are logged and left out of the
mapping, so callers must not expect every requested domain to be present.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any, Awaitable, Callable, Dict, List, Sequence

from googledorker.core.config import SearchSettings
from googledorker.core.query import build_query
from googledorker.core.searcher import Deadline, DomainSearcher, SearchOutcome
from googledorker.search.client import SearchBackend
from googledorker.utils.logger import get_logger

logger = get_logger(__name__)


class SearchOrchestrator:
    """Fan out domain searches with bounded concurrency and one deadline.

    Example::

        orchestrator = SearchOrchestrator(client, SearchSettings(subdomains=True))
        results = await orchestrator.run(["example.com", "example.org"])
        print(results)  # {"example.com": ["www.example.com"], ...}
    """

    def __init__(
        self,
        backend: SearchBackend,
        settings: SearchSettings,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialise the orchestrator.

        Args:
            backend: Page source shared by every domain search.
            settings: Run configuration (query, concurrency, timeout…).
            sleep: Awaitable used for the inter-page delay.
            clock: Monotonic clock backing the run deadline.

        Raises:
            ValueError: If ``settings.concurrency`` is below 1.
        """
        if settings.concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self.settings = settings
        self.searcher = DomainSearcher(
            backend,
            extract_subdomains=settings.subdomains,
            page_delay=settings.page_delay,
            sleep=sleep,
        )
        self._clock = clock
        self._event_handlers: List[Any] = []
        self.outcomes: List[SearchOutcome] = []

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def on_event(self, handler: Any) -> None:
        """Register a callable to receive per-domain events.

        Args:
            handler: An async or sync callable that accepts a ``dict`` event.
        """
        self._event_handlers.append(handler)

    async def run(self, domains: Sequence[str]) -> Dict[str, List[str]]:
        """Search every entry of *domains* and aggregate the subdomains.

        Repeated domains are searched once per occurrence.

        Returns:
            Mapping of domain to sorted subdomains, in input order, for
            successful searches only.
        """
        deadline = Deadline(self.settings.timeout, clock=self._clock)
        semaphore = asyncio.Semaphore(self.settings.concurrency)
        outcomes: asyncio.Queue[SearchOutcome] = asyncio.Queue(maxsize=max(1, len(domains)))

        async def _search_one(domain: str) -> None:
            async with semaphore:
                await self._emit({"event": "domain_started", "domain": domain})
                query = build_query(domain, self.settings.query)
                outcome = await self.searcher.search(deadline, domain, query)
            outcomes.put_nowait(outcome)
            if outcome.ok:
                await self._emit(
                    {
                        "event": "domain_finished",
                        "domain": domain,
                        "subdomains": len(outcome.subdomains),
                    }
                )
            else:
                await self._emit({"event": "domain_error", "domain": domain, "error": outcome.error})

        for domain in domains:
            logger.info("Starting search for domain: %s", domain)
        tasks = [asyncio.create_task(_search_one(d)) for d in domains]
        await asyncio.gather(*tasks)

        self.outcomes = []
        while not outcomes.empty():
            self.outcomes.append(outcomes.get_nowait())

        return self._aggregate(domains)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _aggregate(self, domains: Sequence[str]) -> Dict[str, List[str]]:
        found: Dict[str, List[str]] = {}
        for outcome in self.outcomes:
            if outcome.ok:
                found[outcome.domain] = outcome.subdomains
            else:
                logger.error("Error for domain %s: %s", outcome.domain, outcome.error)

        # Input order keeps the output stable across runs.
        results: Dict[str, List[str]] = {}
        for domain in domains:
            if domain in found and domain not in results:
                results[domain] = found[domain]
        return results

    async def _emit(self, event: Dict[str, Any]) -> None:
        """Fire *event* to all registered event handlers.

        Args:
            event: Dictionary describing the event.
        """
        for handler in self._event_handlers:
            try:
                if asyncio.iscoroutinefunction(handler):
                    await handler(event)
                else:
                    handler(event)
            except Exception:  # noqa: BLE001
                logger.debug("Event handler failed for %s", event.get("event"))
