"""Tests for the typer CLI."""

import os
from unittest.mock import patch

from typer.testing import CliRunner

from pattern_library.cli import app, render_search_results

from conftest import make_pattern


runner = CliRunner()


class TestReadCommands:

    def test_list(self, retry_dir):
        result = runner.invoke(app, ["-d", str(retry_dir), "list"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "- retry-backoff (resilience)"

    def test_list_uses_env(self, retry_dir, monkeypatch):
        monkeypatch.setenv("PATTERNS_DIR", str(retry_dir))
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert "retry-backoff" in result.stdout

    def test_missing_patterns_dir(self):
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 1
        assert "PATTERNS_DIR" in result.output

    def test_search(self, retry_dir):
        result = runner.invoke(app, ["-d", str(retry_dir), "search", "BACKOFF", "--tag", "go"])
        assert result.exit_code == 0
        assert result.stdout.startswith("**retry-backoff**")

    def test_search_no_match(self, retry_dir):
        result = runner.invoke(app, ["-d", str(retry_dir), "search", "--category", "Resilience"])
        assert result.stdout.strip() == "No patterns found."

    def test_get(self, retry_dir):
        result = runner.invoke(app, ["-d", str(retry_dir), "get", "retry-backoff"])
        assert result.exit_code == 0
        assert result.stdout.startswith("Retry failed calls")

    def test_get_missing(self, retry_dir):
        result = runner.invoke(app, ["-d", str(retry_dir), "get", "missing"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "Pattern 'missing' not found."


class TestCreate:

    def test_create_with_content(self, patterns_dir):
        result = runner.invoke(app, [
            "-d", str(patterns_dir), "create", "new-pattern",
            "-c", "testing", "-f", "pytest", "-t", "cli", "-t", "typer",
            "-p", "demo", "--content", "Body.",
        ])
        assert result.exit_code == 0
        path = patterns_dir / "new-pattern.md"
        assert "created at" in result.stdout
        text = path.read_text(encoding="utf-8")
        assert "tags: [cli, typer]\n" in text
        assert "projects: [demo]\n" in text
        assert text.endswith("\nBody.\n")

    def test_create_from_stdin(self, patterns_dir):
        result = runner.invoke(
            app,
            ["-d", str(patterns_dir), "create", "piped", "-c", "c", "-f", "f"],
            input="From stdin.\n",
        )
        assert result.exit_code == 0
        assert "From stdin." in (patterns_dir / "piped.md").read_text(encoding="utf-8")

    def test_create_invalid_name(self, patterns_dir):
        result = runner.invoke(app, [
            "-d", str(patterns_dir), "create", "bad name",
            "-c", "c", "-f", "f", "--content", "x",
        ])
        assert result.exit_code == 1
        assert "Error: Pattern name can only contain" in result.output
        assert list(patterns_dir.iterdir()) == []

    def test_create_requires_category(self, patterns_dir):
        result = runner.invoke(app, [
            "-d", str(patterns_dir), "create", "p", "-f", "f", "--content", "x",
        ])
        assert result.exit_code != 0


class TestMcpCommand:

    def test_sets_env_and_runs_server(self, retry_dir, monkeypatch):
        monkeypatch.setenv("PATTERNS_DIR", "unused")  # restored after the test
        with patch("pattern_library.mcp.main") as main_mock:
            result = runner.invoke(app, ["-d", str(retry_dir), "mcp"])
        assert result.exit_code == 0
        main_mock.assert_called_once_with()
        assert os.environ["PATTERNS_DIR"] == str(retry_dir)


class TestRenderSearchResults:

    def test_empty(self):
        assert render_search_results([]) == "No patterns found."

    def test_exactly_200(self):
        p = make_pattern("a", content="x" * 200)
        assert render_search_results([p]) == "**a**\n" + "x" * 200

    def test_longer_than_200(self):
        p = make_pattern("a", content="y" * 199 + "zz")
        assert render_search_results([p]) == "**a**\n" + "y" * 199 + "z"
