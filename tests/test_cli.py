"""Tests for googledorker.cli."""

from __future__ import annotations

import io
from types import SimpleNamespace
from unittest.mock import patch

import typer
from pydantic import ValidationError
from rich.console import Console
from typer.testing import CliRunner

from conftest import StubBackend, make_items
from googledorker.cli import _display_summary, app, main
from googledorker.core.searcher import SearchOutcome
from googledorker.search.client import SearchError, SearchPage

runner = CliRunner()

CONFIG_YAML = "Google-API: [key]\nGoogle-CSE-ID: [cx]\n"


def _config(tmp_path) -> str:
    path = tmp_path / "google_dorker.yaml"
    path.write_text(CONFIG_YAML)
    return str(path)


def _backend() -> StubBackend:
    return StubBackend(
        {
            "site:a.com": [SearchPage(items=make_items(["sub.a.com", "a.com"]))],
            "site:b.com": [SearchPage(items=make_items(["sub.b.com"]))],
        }
    )


def test_app_is_typer_instance() -> None:
    assert isinstance(app, typer.Typer)


def test_main_is_callable() -> None:
    assert callable(main)


def test_version_command() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "1.0.0" in result.stdout


def test_search_help() -> None:
    result = runner.invoke(app, ["search", "--help"])
    assert result.exit_code == 0
    assert "--domain" in result.stdout


def test_search_requires_domain() -> None:
    result = runner.invoke(app, ["search"])
    assert result.exit_code != 0


def test_search_missing_config_is_fatal(tmp_path) -> None:
    with patch("googledorker.cli.SearchOrchestrator") as orchestrator:
        result = runner.invoke(
            app, ["search", "-d", "a.com", "--config", str(tmp_path / "nope.yaml"), "--silent"]
        )
    assert result.exit_code == 1
    orchestrator.assert_not_called()


def test_search_subs_csv_to_stdout(tmp_path) -> None:
    with patch("googledorker.cli.GoogleSearchClient", return_value=_backend()):
        result = runner.invoke(
            app,
            [
                "search", "-d", "a.com", "b.com",
                "--subs", "--format", "csv", "--delay", "0", "--silent",
                "--config", _config(tmp_path),
            ],
        )
    assert result.exit_code == 0, result.output
    assert result.stdout == "Domain,Subdomain\na.com,sub.a.com\nb.com,sub.b.com\n"


def test_search_subs_json_to_file(tmp_path) -> None:
    out = tmp_path / "subs.json"
    with patch("googledorker.cli.GoogleSearchClient", return_value=_backend()):
        result = runner.invoke(
            app,
            [
                "search", "-d", "a.com", "--subs", "--format", "json", "-o", str(out),
                "--delay", "0", "--silent", "--config", _config(tmp_path),
            ],
        )
    assert result.exit_code == 0, result.output
    assert '"a.com": [' in out.read_text()
    assert result.stdout == ""


def test_search_failed_domain_is_omitted(tmp_path) -> None:
    def fail_b(query: str, start: int) -> None:
        if query == "site:b.com":
            raise SearchError("HTTP 403")

    backend = _backend()
    backend.hook = fail_b
    with patch("googledorker.cli.GoogleSearchClient", return_value=backend):
        result = runner.invoke(
            app,
            [
                "search", "-d", "a.com", "b.com", "--subs", "--delay", "0", "--silent",
                "--config", _config(tmp_path),
            ],
        )
    assert result.exit_code == 0, result.output
    assert result.stdout == "sub.a.com\n"


def test_search_without_subs_writes_nothing(tmp_path) -> None:
    with patch("googledorker.cli.GoogleSearchClient", return_value=_backend()):
        result = runner.invoke(
            app,
            ["search", "-d", "a.com", "--delay", "0", "--silent", "--config", _config(tmp_path)],
        )
    assert result.exit_code == 0, result.output
    assert result.stdout == ""


def test_search_output_write_failure(tmp_path) -> None:
    with patch("googledorker.cli.GoogleSearchClient", return_value=_backend()):
        result = runner.invoke(
            app,
            [
                "search", "-d", "a.com", "--subs", "-o", str(tmp_path), "--delay", "0",
                "--silent", "--config", _config(tmp_path),
            ],
        )
    assert result.exit_code == 1


def test_config_command(tmp_path) -> None:
    result = runner.invoke(app, ["config", "--config", _config(tmp_path)])
    assert result.exit_code == 0
    assert "API keys" in result.stdout


def test_config_command_missing(tmp_path) -> None:
    result = runner.invoke(app, ["config", "--config", str(tmp_path / "nope.yaml")])
    assert result.exit_code == 1


def test_search_rejects_non_positive_timeout(tmp_path) -> None:
    for value in ("0", "-5"):
        with patch("googledorker.cli.SearchOrchestrator") as orchestrator:
            result = runner.invoke(
                app,
                ["search", "-d", "a.com", f"--timeout={value}", "--silent", "--config", _config(tmp_path)],
            )
        assert result.exit_code == 1
        assert not isinstance(result.exception, ValidationError)
        orchestrator.assert_not_called()


def _info_messages(logger) -> list:
    return [call.args[0] for call in logger.info.call_args_list]


def test_execution_time_not_logged_in_subs_mode(tmp_path) -> None:
    with patch("googledorker.cli.GoogleSearchClient", return_value=_backend()), patch(
        "googledorker.cli.logger"
    ) as logger:
        result = runner.invoke(
            app,
            ["search", "-d", "a.com", "--subs", "--delay", "0", "--silent", "--config", _config(tmp_path)],
        )
    assert result.exit_code == 0, result.output
    assert not any("Execution time" in msg for msg in _info_messages(logger))


def test_execution_time_logged_without_subs(tmp_path) -> None:
    with patch("googledorker.cli.GoogleSearchClient", return_value=_backend()), patch(
        "googledorker.cli.logger"
    ) as logger:
        result = runner.invoke(
            app,
            ["search", "-d", "a.com", "--delay", "0", "--silent", "--config", _config(tmp_path)],
        )
    assert result.exit_code == 0, result.output
    assert any("Execution time" in msg for msg in _info_messages(logger))


def test_summary_renders_domain_literally() -> None:
    buffer = io.StringIO()
    orchestrator = SimpleNamespace(
        outcomes=[
            SearchOutcome(domain="[/bold]a.com", subdomains=["x.a.com"]),
            SearchOutcome(domain="[red]b.com", error="Search failed: HTTP 403"),
        ]
    )
    with patch("googledorker.cli.err_console", Console(file=buffer, width=200, no_color=True)):
        _display_summary(orchestrator)
    rendered = buffer.getvalue()
    assert "[/bold]a.com" in rendered
    assert "[red]b.com" in rendered


def test_search_summary_with_markup_like_domain(tmp_path) -> None:
    with patch("googledorker.cli.GoogleSearchClient", return_value=_backend()):
        result = runner.invoke(
            app,
            ["search", "-d", "[/bold]a.com", "--delay", "0", "--no-color", "--config", _config(tmp_path)],
        )
    assert result.exit_code == 0, result.output
    assert result.exception is None
