"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from proofline.clients.assistant import WritingAssistant
from proofline.clients.llm_client import LLMClient, LLMResponse
from proofline.config import AppConfig, EditorConfig
from proofline.engine.service import EditorService
from proofline.models.suggestion import Severity, Suggestion, SuggestionType
from proofline.store.sqlite_store import SQLiteSuggestionStore

USER_ID = "user_demo"


@pytest.fixture
def store(tmp_path) -> SQLiteSuggestionStore:
    return SQLiteSuggestionStore(db_path=tmp_path / "proofline.db")


@pytest.fixture
def config() -> AppConfig:
    # Timers far beyond any test's runtime unless a test overrides them
    return AppConfig(editor=EditorConfig(poll_interval=60.0, idle_delay=60.0, readability_delay=60.0))


@pytest.fixture
def service(store, config) -> EditorService:
    """Service with no assistant: every AI feature takes its fallback."""
    return EditorService(store, USER_ID, config=config)


@pytest.fixture
def mock_assistant() -> WritingAssistant:
    assistant = AsyncMock(spec=WritingAssistant)
    assistant.suggest_spelling = AsyncMock(return_value=[])
    assistant.suggest_style = AsyncMock(return_value=[])
    return assistant


@pytest.fixture
def ai_service(store, config, mock_assistant) -> EditorService:
    return EditorService(store, USER_ID, assistant=mock_assistant, config=config)


@pytest.fixture
def mock_llm_client() -> LLMClient:
    client = AsyncMock(spec=LLMClient)
    client.generate = AsyncMock(
        return_value=LLMResponse(text="[]", input_tokens=100, output_tokens=50)
    )
    client.generate_json = AsyncMock(return_value=[])
    return client


@pytest.fixture
def make_document(store):
    def _make(content: str = "", owner_id: str = USER_ID):
        doc = store.create_document(owner_id)
        if content:
            store.save_content(doc.id, content)
            doc = store.load_document(doc.id)
        return doc

    return _make


@pytest.fixture
def make_suggestion():
    def _make(
        original: str,
        suggested: str,
        type: SuggestionType = SuggestionType.SPELLING,
        severity: Severity = Severity.HIGH,
        **kwargs,
    ) -> Suggestion:
        return Suggestion(
            original_text=original,
            suggested_text=suggested,
            type=type,
            severity=severity,
            **kwargs,
        )

    return _make
