"""Pydantic models for documents and their version history."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from proofline.models.rewriting import ToneType


class Document(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    owner_id: str
    title: str = "Untitled document"
    content: str = ""
    readability_score: float | None = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class VersionSnapshot(BaseModel):
    """Content captured around a tone rewrite or revert."""

    id: str = Field(default_factory=lambda: f"v-{uuid.uuid4().hex[:12]}")
    content: str
    timestamp: datetime = Field(default_factory=datetime.now)
    action: str
    tone: ToneType | None = None
