"""Dork query composition."""

from __future__ import annotations


def build_query(domain: str, free_text: str) -> str:
    """Compose the search query for *domain*.

    ``site:<domain> <free_text>`` when both are given, *free_text* verbatim
    when there is no domain, and a bare ``site:<domain>`` otherwise.
    """
    if free_text and domain:
        return f"site:{domain} {free_text}"
    if free_text:
        return free_text
    return f"site:{domain}"
