"""Exceptions raised by the editor core."""

from __future__ import annotations


class ProoflineError(Exception):
    """Base class for all proofline errors."""


class Unauthorized(ProoflineError):
    """The caller does not own the requested document."""


class DocumentNotFound(ProoflineError):
    def __init__(self, document_id: str):
        super().__init__(f"Document not found: {document_id}")
        self.document_id = document_id


class AnalysisFailure(ProoflineError):
    """An AI stage could not produce a usable result.

    Only raised inside the AI stage of a two-stage pipeline; the fallback
    stage absorbs it, so callers of the public API never see it.
    """

    NOT_CONFIGURED = "not_configured"
    TIMEOUT = "timeout"
    PARSE = "parse"
    API = "api"

    def __init__(self, kind: str, message: str = ""):
        super().__init__(message or kind)
        self.kind = kind
