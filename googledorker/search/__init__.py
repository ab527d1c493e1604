"""Search backends."""

from googledorker.search.client import (
    GoogleSearchClient,
    SearchBackend,
    SearchError,
    SearchItem,
    SearchPage,
)

__all__ = [
    "GoogleSearchClient",
    "SearchBackend",
    "SearchError",
    "SearchItem",
    "SearchPage",
]
