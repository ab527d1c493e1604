"""Output formats for aggregated search results."""

from __future__ import annotations

from typing import Dict, Type

from googledorker.reporting.base import BaseReporter
from googledorker.reporting.csv_report import CSVReporter
from googledorker.reporting.json_report import JSONReporter
from googledorker.reporting.txt_report import TXTReporter
from googledorker.utils.logger import get_logger

logger = get_logger(__name__)

REPORTERS: Dict[str, Type[BaseReporter]] = {
    "txt": TXTReporter,
    "json": JSONReporter,
    "csv": CSVReporter,
}


def get_reporter(fmt: str) -> BaseReporter:
    """Return a reporter for *fmt*; unknown formats fall back to plain text."""
    reporter_cls = REPORTERS.get(fmt.lower())
    if reporter_cls is None:
        logger.warning("Unknown output format %r, falling back to txt", fmt)
        reporter_cls = TXTReporter
    return reporter_cls()


__all__ = ["BaseReporter", "CSVReporter", "JSONReporter", "TXTReporter", "REPORTERS", "get_reporter"]
