"""Tests for the typer CLI."""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from proofline.cli import app
from proofline.config import AppConfig, StoreConfig
from proofline.models.suggestion import SuggestionStatus
from proofline.store.sqlite_store import SQLiteSuggestionStore

runner = CliRunner()


@pytest.fixture
def cli_store(tmp_path, monkeypatch) -> SQLiteSuggestionStore:
    config = AppConfig(store=StoreConfig(db_path=str(tmp_path / "cli.db")))
    monkeypatch.setattr("proofline.cli.load_config", lambda: config)
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    monkeypatch.setenv("PROOFLINE_USER", "cli_user")
    monkeypatch.setenv("COLUMNS", "200")
    return SQLiteSuggestionStore(config.store.resolved_db_path)


@pytest.fixture
def elliot_doc(cli_store, tmp_path):
    source = tmp_path / "draft.html"
    source.write_text("<p>My name is Elliot Rosen and I'm dum.</p>", encoding="utf-8")
    result = runner.invoke(app, ["new", "Draft", "--from", str(source)])
    assert result.exit_code == 0, result.output
    (doc,) = cli_store.list_documents("cli_user")
    return doc


class TestCli:
    def test_new_from_file(self, elliot_doc):
        assert elliot_doc.title == "Draft"
        assert "Elliot" in elliot_doc.content
        assert elliot_doc.readability_score is not None

    def test_check_then_apply(self, cli_store, elliot_doc):
        result = runner.invoke(app, ["check", elliot_doc.id])
        assert result.exit_code == 0, result.output
        assert "pattern fallback" in result.output
        assert "dumb" in result.output

        (pending,) = cli_store.list_suggestions(elliot_doc.id, SuggestionStatus.PENDING)
        result = runner.invoke(app, ["apply", elliot_doc.id, pending.id])
        assert result.exit_code == 0, result.output
        assert "Applied" in result.output
        assert "I'm dumb." in cli_store.load_document(elliot_doc.id).content

    def test_dismiss(self, cli_store, elliot_doc):
        runner.invoke(app, ["check", elliot_doc.id])
        (pending,) = cli_store.list_suggestions(elliot_doc.id, SuggestionStatus.PENDING)
        result = runner.invoke(app, ["dismiss", elliot_doc.id, pending.id])
        assert result.exit_code == 0, result.output
        assert cli_store.get_suggestion(elliot_doc.id, pending.id).status == SuggestionStatus.DISMISSED

    def test_readability(self, elliot_doc):
        result = runner.invoke(app, ["readability", elliot_doc.id])
        assert result.exit_code == 0, result.output
        assert "Easy Digest" in result.output

    def test_other_user_is_rejected(self, elliot_doc):
        result = runner.invoke(app, ["summary", elliot_doc.id, "--user", "intruder"])
        assert result.exit_code == 1
        assert "another user" in result.output

    def test_missing_document(self, cli_store):
        result = runner.invoke(app, ["suggestions", "no-such-doc"])
        assert result.exit_code == 1
        assert "Document not found" in result.output
