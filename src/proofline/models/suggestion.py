"""Pydantic models for suggestions and generation results."""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class SuggestionType(str, Enum):
    SPELLING = "spelling"
    STYLE = "style"
    GRAMMAR = "grammar"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SuggestionStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DISMISSED = "dismissed"

    @property
    def is_terminal(self) -> bool:
        return self is not SuggestionStatus.PENDING


class Origin(str, Enum):
    AI = "ai"
    FALLBACK = "fallback"


class Suggestion(BaseModel):
    """A proposed replacement computed against a snapshot of the document.

    ``start_index``/``end_index`` point into the snapshot the suggestion was
    generated from and are only hints once the document has changed;
    ``original_text`` is what gets re-located at apply time.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    document_id: str = ""
    start_index: int = 0
    end_index: int = 0
    original_text: str
    suggested_text: str
    type: SuggestionType
    severity: Severity
    status: SuggestionStatus = SuggestionStatus.PENDING
    explanation: str | None = None
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_pending(self) -> bool:
        return self.status is SuggestionStatus.PENDING


class GenerationResult(BaseModel):
    """Outcome of one analysis pass over a text snapshot."""

    origin: Origin
    suggestions: list[Suggestion] = []
    stale: bool = False  # document changed while the pass was running
    failure: str | None = None  # why the AI stage was not used

    @property
    def count(self) -> int:
        return len(self.suggestions)


class ApplyOutcome(BaseModel):
    """Result of trying to apply a suggestion; failures are soft."""

    applied: bool
    content: str | None = None
    tier: int | None = None
    reason: str | None = None  # "suggestion_missing" | "not_pending" | "not_found"


class ProposedCorrection(BaseModel):
    """One correction as returned by the assistant, before normalization."""

    original_text: str
    suggested_text: str
    type: str = "style"
    explanation: str = ""
    start_index: int | None = None
    end_index: int | None = None
