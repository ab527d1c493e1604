"""Shared pytest fixtures for the google-dorker test suite."""

from __future__ import annotations

import asyncio
from typing import Callable, Dict, List, Optional, Tuple

import pytest

from googledorker.core.config import SearchSettings
from googledorker.search.client import SearchBackend, SearchItem, SearchPage


def make_items(hosts: List[str], path: str = "/") -> List[SearchItem]:
    """Build one result item per host."""
    return [SearchItem(title=host, url=f"https://{host}{path}", snippet="") for host in hosts]


class StubBackend(SearchBackend):
    """Scripted search backend recording every page request.

    Pages are looked up by query; each call pops the next page for that
    query and returns an empty page once the script is exhausted. A callable
    *hook* runs before each response and may raise to simulate failures.
    """

    name = "stub"

    def __init__(
        self,
        pages: Optional[Dict[str, List[SearchPage]]] = None,
        hook: Optional[Callable[[str, int], None]] = None,
        latency: float = 0.0,
    ) -> None:
        self.pages = {query: list(script) for query, script in (pages or {}).items()}
        self.hook = hook
        self.latency = latency
        self.calls: List[Tuple[str, int, int]] = []

    async def search(self, query: str, start: int, num: int) -> SearchPage:
        self.calls.append((query, start, num))
        if self.hook is not None:
            self.hook(query, start)
        if self.latency:
            await asyncio.sleep(self.latency)
        script = self.pages.get(query)
        if not script:
            return SearchPage()
        return script.pop(0)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


async def no_sleep(_seconds: float) -> None:
    """Inter-page delay replacement that returns immediately."""


@pytest.fixture
def settings() -> SearchSettings:
    """Subdomain mode with no inter-page delay."""
    return SearchSettings(subdomains=True, page_delay=0.0)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()
