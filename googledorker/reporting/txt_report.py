"""Plain-text export of discovered subdomains."""

from __future__ import annotations

from typing import Dict, List

from googledorker.reporting.base import BaseReporter


class TXTReporter(BaseReporter):
    """One subdomain per line.

    With more than one domain each block gets a ``<domain>:`` header and is
    followed by a blank line.
    """

    name = "txt"

    def render(self, results: Dict[str, List[str]]) -> str:
        grouped = len(results) > 1
        lines: List[str] = []
        for domain, subdomains in results.items():
            if grouped:
                lines.append(f"{domain}:")
            lines.extend(subdomains)
            if grouped:
                lines.append("")
        return "".join(f"{line}\n" for line in lines)
