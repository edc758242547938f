"""Data models for the editor core."""

from proofline.models.document import Document, VersionSnapshot
from proofline.models.rewriting import (
    ReadabilityAnalysis,
    Summary,
    ToneRewrite,
    ToneType,
)
from proofline.models.suggestion import (
    ApplyOutcome,
    GenerationResult,
    Origin,
    ProposedCorrection,
    Severity,
    Suggestion,
    SuggestionStatus,
    SuggestionType,
)

__all__ = [
    "ApplyOutcome",
    "Document",
    "GenerationResult",
    "Origin",
    "ProposedCorrection",
    "ReadabilityAnalysis",
    "Severity",
    "Suggestion",
    "SuggestionStatus",
    "SuggestionType",
    "Summary",
    "ToneRewrite",
    "ToneType",
    "VersionSnapshot",
]
