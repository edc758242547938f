"""Pydantic models for readability, summary and tone-rewrite output."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from proofline.models.suggestion import Origin


class ToneType(str, Enum):
    CASUAL = "casual"
    FORMAL = "formal"
    FRIENDLY = "friendly"
    ASSERTIVE = "assertive"


class ReadabilityAnalysis(BaseModel):
    score: float  # grade level, clamped
    grade: str  # band label, always derived from score
    insights: list[str] = []
    recommendations: list[str] = []
    origin: Origin = Origin.FALLBACK


class Summary(BaseModel):
    summary: str
    key_points: list[str] = []
    word_count: int
    original_word_count: int
    compression_ratio: float
    origin: Origin = Origin.FALLBACK


class ToneRewrite(BaseModel):
    original_text: str  # plain text, for display
    rewritten_text: str  # markup preserved
    tone: ToneType
    changes: list[str] = []
    timestamp: datetime = Field(default_factory=datetime.now)
