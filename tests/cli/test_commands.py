"""
Tests for the CLI app structure and commands.

Commands run against the in-memory backend (``BOOKS_STORE_BACKEND=memory``).
"""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from book_catalog import __version__
from book_catalog.cli.app import app
from book_catalog.core.settings import get_settings

runner = CliRunner()


@pytest.fixture(autouse=True)
def memory_backend(monkeypatch):
    monkeypatch.setenv("BOOKS_STORE_BACKEND", "memory")
    monkeypatch.setenv("BOOKS_LOG_JSON", "true")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestRootApp:
    def test_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "book-catalog" in result.output

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"book-catalog {__version__}" in result.output

    @pytest.mark.parametrize("group, command", [("books", "list"), ("config", "show")])
    def test_subcommand_help(self, group, command):
        result = runner.invoke(app, [group, "--help"])
        assert result.exit_code == 0
        assert command in result.output

    def test_serve_help(self):
        result = runner.invoke(app, ["serve", "--help"])
        assert result.exit_code == 0
        assert "--port" in result.output


class TestServe:
    @pytest.fixture()
    def uvicorn_calls(self, monkeypatch):
        calls = []
        monkeypatch.setattr("book_catalog.cli.serve.uvicorn.run", lambda *a, **kw: calls.append(kw))
        return calls

    def test_defaults_from_settings(self, monkeypatch, uvicorn_calls):
        monkeypatch.setenv("BOOKS_HOST", "127.0.0.1")
        monkeypatch.setenv("BOOKS_PORT", "9001")
        result = runner.invoke(app, ["serve"])
        assert result.exit_code == 0, result.output
        assert uvicorn_calls[0]["host"] == "127.0.0.1"
        assert uvicorn_calls[0]["port"] == 9001

    def test_options_override_settings(self, monkeypatch, uvicorn_calls):
        monkeypatch.setenv("BOOKS_PORT", "9001")
        result = runner.invoke(app, ["serve", "--port", "9100"])
        assert result.exit_code == 0, result.output
        assert uvicorn_calls[0]["port"] == 9100
        assert uvicorn_calls[0]["host"] == "0.0.0.0"


class TestSeed:
    def test_packaged_samples(self):
        result = runner.invoke(app, ["seed", "--json"])
        assert result.exit_code == 0, result.output
        assert '"books": 3' in result.output
        assert '"cast": 8' in result.output

    def test_custom_files(self, tmp_path):
        books = tmp_path / "books.json"
        cast = tmp_path / "cast.json"
        books.write_text(json.dumps([{"id": 1, "title": "Dune"}]))
        cast.write_text(json.dumps([]))
        result = runner.invoke(app, ["seed", "--books", str(books), "--cast", str(cast), "--json"])
        assert result.exit_code == 0, result.output
        assert '"books": 1' in result.output

    def test_records_without_keys(self, tmp_path):
        books = tmp_path / "books.json"
        books.write_text(json.dumps([{"title": "No id"}]))
        result = runner.invoke(app, ["seed", "--books", str(books)])
        assert result.exit_code == 1

    def test_not_an_array(self, tmp_path):
        books = tmp_path / "books.json"
        books.write_text(json.dumps({"id": 1}))
        result = runner.invoke(app, ["seed", "--books", str(books)])
        assert result.exit_code == 1


class TestBooks:
    def test_list_empty(self):
        result = runner.invoke(app, ["books", "list", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"] == []

    def test_get_unknown(self):
        result = runner.invoke(app, ["books", "get", "7"])
        assert result.exit_code == 1

    def test_cast_bad_id(self):
        result = runner.invoke(app, ["books", "cast", "dune"])
        assert result.exit_code == 1

    def test_cast_json_carries_plan(self):
        result = runner.invoke(app, ["books", "cast", "1", "--role", "Pro", "--json"])
        assert result.exit_code == 0, result.output
        body = json.loads(result.stdout)
        assert body["success"] is True
        assert body["metadata"]["plan"]["index"] == "roleIx"


class TestConfig:
    def test_show_json(self):
        result = runner.invoke(app, ["config", "show", "--format", "json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["store_backend"] == "memory"

    def test_show_env(self):
        result = runner.invoke(app, ["config", "show", "--format", "env"])
        assert result.exit_code == 0
        assert "BOOKS_STORE_BACKEND=memory" in result.output
