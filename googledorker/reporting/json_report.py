"""JSON export of discovered subdomains."""

from __future__ import annotations

import json
from typing import Dict, List

from googledorker.reporting.base import BaseReporter


class JSONReporter(BaseReporter):
    """Serialise the mapping as a pretty-printed JSON object."""

    name = "json"

    def render(self, results: Dict[str, List[str]]) -> str:
        return json.dumps(results, indent=2) + "\n"
