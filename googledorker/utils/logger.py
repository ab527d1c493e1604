"""Rich-based logging system for google-dorker.

Provides colourised, level-tagged log messages on stderr with an extra
``TRACE`` level and optional file output.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.highlighter import ReprHighlighter
from rich.logging import RichHandler
from rich.text import Text

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

# Verbosity flag value -> logging level
_VERBOSITY_LEVELS = {
    0: logging.ERROR,
    1: logging.INFO,
    2: logging.DEBUG,
    3: TRACE,
}

_ROOT_NAME = "googledorker"
_HIT_RE = r"^Found:"
_file_handler: Optional[logging.FileHandler] = None
_root_configured = False


class HitHighlighter(ReprHighlighter):
    """Repr highlighting plus a green ``Found:`` prefix on search hits.

    Colour lives only in the console renderer, so file logs stay plain text.
    """

    def highlight(self, text: Text) -> None:
        super().highlight(text)
        text.highlight_regex(_HIT_RE, "bold green")


def level_for_verbosity(verbosity: int) -> int:
    """Map a ``-v`` verbosity value (0-3) to a logging level.

    Values above 3 clamp to ``TRACE``, negative values to ``ERROR``.
    """
    return _VERBOSITY_LEVELS[max(0, min(verbosity, 3))]


def configure_logging(
    verbosity: int = 1,
    silent: bool = False,
    no_color: bool = False,
    log_file: Optional[str] = None,
) -> None:
    """Configure the root logger used by all google-dorker components.

    Args:
        verbosity: 0=ERROR, 1=INFO, 2=DEBUG, 3=TRACE.
        silent: Suppress every log message on the console.
        no_color: Disable ANSI colours in console output.
        log_file: Optional filesystem path for a persistent log file.
    """
    global _file_handler, _root_configured

    level = level_for_verbosity(verbosity)

    root = logging.getLogger(_ROOT_NAME)
    root.setLevel(level)
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()

    if silent:
        root.addHandler(logging.NullHandler())
    else:
        console = Console(stderr=True, no_color=no_color)
        rich_handler = RichHandler(
            console=console,
            rich_tracebacks=True,
            show_time=True,
            show_level=True,
            show_path=False,
            markup=False,
            highlighter=HitHighlighter(),
        )
        rich_handler.setLevel(level)
        root.addHandler(rich_handler)

    if log_file:
        file_path = Path(log_file)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        _file_handler = logging.FileHandler(file_path, encoding="utf-8")
        _file_handler.setLevel(level)
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        _file_handler.setFormatter(formatter)
        root.addHandler(_file_handler)

    _root_configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a named child logger under the ``googledorker`` hierarchy.

    Automatically configures the root logger on first use if it hasn't been
    configured yet.

    Args:
        name: Logger name, typically ``__name__`` of the calling module.

    Returns:
        :class:`logging.Logger` instance.
    """
    if not _root_configured:
        configure_logging()

    if name.startswith(f"{_ROOT_NAME}.") or name == _ROOT_NAME:
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT_NAME}.{name}")
