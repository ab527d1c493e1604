"""Base class for result reporters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List


class BaseReporter(ABC):
    """Render a ``domain -> subdomains`` mapping in one output format."""

    name: str = "base"

    @abstractmethod
    def render(self, results: Dict[str, List[str]]) -> str:
        """Return *results* serialised as text."""

    def generate(self, results: Dict[str, List[str]], output_path: str) -> Path:
        """Write the rendered *results* to *output_path*.

        Args:
            results: Mapping of domain to discovered subdomains.
            output_path: Destination file path.

        Returns:
            Path to the generated file.

        Raises:
            OSError: If the file cannot be written.
        """
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render(results), encoding="utf-8")
        return path

    def __repr__(self) -> str:
        return f"<Reporter {self.name}>"
