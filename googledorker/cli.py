"""google-dorker CLI: terminal interface built with Typer + Rich."""

from __future__ import annotations

import asyncio
import sys
import time
from typing import Dict, List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from googledorker import __version__
from googledorker.core.config import (
    Config,
    ConfigError,
    Credentials,
    SearchSettings,
    find_config,
    load_config,
    select_credentials,
)
from googledorker.core.orchestrator import SearchOrchestrator
from googledorker.reporting import get_reporter
from googledorker.search.client import GoogleSearchClient
from googledorker.utils.http_client import AsyncHTTPClient
from googledorker.utils.logger import configure_logging, get_logger

app = typer.Typer(
    name="google-dorker",
    help="[bold red]google-dorker[/]: Advanced Google dorking across multiple domains",
    rich_markup_mode="rich",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)
logger = get_logger(__name__)

_BANNER = r"""
   ___              ___           _           ___                  _
  / _ \___         /   \___  _ __| | __      / _ \___   ___   __ _| | ___
 / /_\/ _ \ _____ / /\ / _ \| '__| |/ /____ / /_\/ _ \ / _ \ / _` | |/ _ \
/ /_\\ (_) |_____/ /_// (_) | |  |   <_____/ /_\\ (_) | (_) | (_| | |  __/
\____/\___/     /___,' \___/|_|  |_|\_\    \____/\___/ \___/ \__, |_|\___|
                                                             |___/
"""


def _print_banner(target: Console = err_console) -> None:
    """Print the google-dorker ASCII art banner."""
    target.print(
        Panel(
            Text(_BANNER, style="bold red"),
            subtitle=f"[dim]Advanced Google Dorking Tool v{__version__}[/]",
            border_style="red",
            expand=False,
        )
    )


# ---------------------------------------------------------------------------
# search command
# ---------------------------------------------------------------------------


@app.command()
def search(
    domain: str = typer.Option(..., "--domain", "-d", help="Target domain for Google dorking"),
    extra_domains: Optional[List[str]] = typer.Argument(None, help="Additional domains to search"),
    query: Optional[str] = typer.Option(None, "--query", "-q", help="Google dorking query for your target"),
    subs: bool = typer.Option(False, "--subs", help="Only output found subdomains"),
    concurrent: Optional[int] = typer.Option(None, "--concurrent", min=1, help="Number of concurrent searches [default: 10]"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Timeout in seconds for the entire search [default: 300]"),
    delay: Optional[float] = typer.Option(None, "--delay", min=0, help="Seconds between page requests [default: 1]"),
    fmt: str = typer.Option("txt", "--format", "-f", help="Output format: txt/json/csv"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="File name to save the results"),
    proxy: Optional[str] = typer.Option(None, "--proxy", help="HTTP proxy URL"),
    verbosity: int = typer.Option(1, "--verbosity", "-v", help="0=ERROR, 1=INFO, 2=DEBUG, 3=TRACE"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output"),
    silent: bool = typer.Option(False, "--silent", help="Only output results"),
    config_file: Optional[str] = typer.Option(None, "--config", help="Custom config file"),
) -> None:
    """[bold]Dork one or more domains and optionally harvest subdomains.[/]

    Domains whose search fails or times out are logged and left out of the
    output.

    Examples:

        google-dorker search -d example.com --subs --format json

        google-dorker search -d example.com --subs --silent

        google-dorker search -d example.com --concurrent 20 --subs --format csv -o results.csv

        google-dorker search -d example.com sub1.example.com sub2.example.com --subs
    """
    started = time.monotonic()
    configure_logging(verbosity=verbosity, silent=silent, no_color=no_color)
    if not silent:
        _print_banner()
        logger.info("Starting Google Dorker v%s", __version__)

    try:
        cfg = load_config(config_file)
        credentials = select_credentials(cfg)
    except ConfigError as exc:
        err_console.print(str(exc), style="red", markup=False, highlight=False)
        raise typer.Exit(1)
    logger.debug("Configuration loaded successfully")

    try:
        settings = _build_settings(cfg, query, subs, concurrent, timeout, delay, proxy)
    except ValidationError as exc:
        err_console.print(
            f"Invalid search settings: {exc}", style="red", markup=False, highlight=False
        )
        raise typer.Exit(1)
    domains = [domain, *(extra_domains or [])]

    results = asyncio.run(_run_search(domains, settings, credentials, silent))

    if subs and not _write_output(results, fmt, output):
        raise typer.Exit(1)

    if not subs:
        logger.info("Execution time: %.2fs", time.monotonic() - started)


def _build_settings(
    cfg: Config,
    query: Optional[str],
    subs: bool,
    concurrent: Optional[int],
    timeout: Optional[float],
    delay: Optional[float],
    proxy: Optional[str],
) -> SearchSettings:
    """Patch the configured search defaults with CLI overrides."""
    overrides = {
        "query": query,
        "concurrency": concurrent,
        "timeout": timeout,
        "page_delay": delay,
        "proxy": proxy,
    }
    update = {k: v for k, v in overrides.items() if v is not None}
    update["subdomains"] = subs
    return SearchSettings.model_validate({**cfg.search.model_dump(), **update})


async def _run_search(
    domains: List[str],
    settings: SearchSettings,
    credentials: Credentials,
    silent: bool,
) -> Dict[str, List[str]]:
    """Internal async wrapper around the orchestrator."""
    async with AsyncHTTPClient(timeout=settings.request_timeout, proxy=settings.proxy) as http:
        client = GoogleSearchClient(credentials, http)
        orchestrator = SearchOrchestrator(client, settings)
        results = await orchestrator.run(domains)

    if not silent:
        _display_summary(orchestrator)
    return results


def _display_summary(orchestrator: SearchOrchestrator) -> None:
    """Render a Rich table with one row per searched domain."""
    table = Table(
        title="Search Summary",
        show_header=True,
        header_style="bold magenta",
        border_style="dim",
    )
    table.add_column("Domain", style="cyan", no_wrap=True)
    table.add_column("Subdomains", justify="right", style="bold")
    table.add_column("Status")

    for outcome in orchestrator.outcomes:
        if outcome.ok:
            table.add_row(escape(outcome.domain), str(len(outcome.subdomains)), "[green]OK[/]")
        else:
            table.add_row(escape(outcome.domain), "-", f"[red]{escape(outcome.error or '')}[/]")

    err_console.print(table)


def _write_output(results: Dict[str, List[str]], fmt: str, output: Optional[str]) -> bool:
    """Serialise *results* to *output* (or stdout) using the requested *fmt*.

    Returns:
        ``False`` if the output file could not be written.
    """
    reporter = get_reporter(fmt)
    if not output:
        sys.stdout.write(reporter.render(results))
        sys.stdout.flush()
        return True
    try:
        reporter.generate(results, output)
    except OSError as exc:
        logger.error("Failed to write %s output to %s: %s", reporter.name, output, exc)
        return False
    logger.info("Results saved to %s", output)
    return True


# ---------------------------------------------------------------------------
# config command
# ---------------------------------------------------------------------------


@app.command()
def config(
    config_file: Optional[str] = typer.Option(None, "--config", help="Config file path"),
) -> None:
    """[bold]Show which configuration file is used and validate it.[/]"""
    _print_banner(console)
    try:
        path = find_config(config_file)
        cfg = load_config(str(path))
    except ConfigError as exc:
        err_console.print(str(exc), style="red", markup=False, highlight=False)
        raise typer.Exit(1)

    console.print(f"[bold]Config file:[/] {path}")
    console.print(f"[bold]API keys:[/] {len(cfg.google_api)}")
    console.print(f"[bold]CSE IDs:[/] {len(cfg.google_cse_id)}")
    console.print_json(cfg.search.model_dump_json(indent=2))


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@app.command()
def version() -> None:
    """[bold]Show google-dorker version information.[/]"""
    _print_banner(console)
    console.print(f"[bold red]google-dorker[/] version [bold]{__version__}[/]")


def main() -> None:
    """Entry point registered in pyproject.toml."""
    app()


if __name__ == "__main__":
    main()
