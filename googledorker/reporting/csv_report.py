"""CSV export of discovered subdomains."""

from __future__ import annotations

import csv
import io
from typing import Dict, List

from googledorker.reporting.base import BaseReporter

_FIELDNAMES = ["Domain", "Subdomain"]


class CSVReporter(BaseReporter):
    """One ``Domain,Subdomain`` row per discovered subdomain."""

    name = "csv"

    def render(self, results: Dict[str, List[str]]) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(_FIELDNAMES)
        for domain, subdomains in results.items():
            writer.writerows([domain, subdomain] for subdomain in subdomains)
        return buffer.getvalue()
