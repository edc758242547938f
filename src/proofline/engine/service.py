"""Editor operations exposed to the UI layer, scoped to one user."""

from __future__ import annotations

import logging

from proofline.clients.assistant import WritingAssistant
from proofline.config import AppConfig
from proofline.engine.analyzer import AnalyzerDispatcher
from proofline.engine.history import VersionHistory
from proofline.engine.match_resolver import MatchResolver
from proofline.engine.readability import ReadabilityScorer
from proofline.engine.rewriting import Rewriter
from proofline.engine.staleness import StalenessValidator
from proofline.errors import DocumentNotFound, Unauthorized
from proofline.models.document import Document, VersionSnapshot
from proofline.models.rewriting import ReadabilityAnalysis, Summary, ToneRewrite, ToneType
from proofline.models.suggestion import (
    ApplyOutcome,
    GenerationResult,
    Suggestion,
    SuggestionStatus,
)
from proofline.store.base import SuggestionStore

logger = logging.getLogger(__name__)


class EditorService:
    """Suggestion lifecycle over a store, for the documents of ``user_id``.

    Document-level failures (``Unauthorized``, ``DocumentNotFound``) raise.
    Suggestion-level races (already superseded, text edited away) are soft
    and reported through return values.
    """

    def __init__(
        self,
        store: SuggestionStore,
        user_id: str | None,
        *,
        assistant: WritingAssistant | None = None,
        config: AppConfig | None = None,
    ):
        self.store = store
        self.user_id = user_id
        self.config = config or AppConfig()
        self.resolver = MatchResolver()
        self.validator = StalenessValidator()
        self.analyzer = AnalyzerDispatcher(store, assistant, self.config.llm)
        self.scorer = ReadabilityScorer(assistant, self.config.readability, self.config.llm)
        self.rewriter = Rewriter(assistant, self.config.readability, self.config.llm)
        self._histories: dict[str, VersionHistory] = {}

    def _require_user(self) -> str:
        if not self.user_id:
            raise Unauthorized("No user for this session")
        return self.user_id

    def _require_document(self, document_id: str) -> Document:
        user_id = self._require_user()
        doc = self.store.load_document(document_id)
        if doc is None:
            raise DocumentNotFound(document_id)
        if doc.owner_id != user_id:
            raise Unauthorized(f"Document {document_id} belongs to another user")
        return doc

    # -- documents -------------------------------------------------------

    async def create_document(self, title: str = "Untitled document") -> Document:
        doc = self.store.create_document(self._require_user(), title=title)
        logger.info("Created document %s", doc.id)
        return doc

    async def get_document(self, document_id: str) -> Document:
        return self._require_document(document_id)

    async def list_documents(self) -> list[Document]:
        return self.store.list_documents(self._require_user())

    async def rename_document(self, document_id: str, title: str) -> None:
        self._require_document(document_id)
        self.store.set_title(document_id, title)

    async def save_content(self, document_id: str, content: str) -> None:
        """Persist editor content with a deterministic readability score."""
        self._require_document(document_id)
        self.store.save_content(document_id, content, self.scorer.score(content))

    # -- suggestions -----------------------------------------------------

    async def get_suggestions(
        self, document_id: str, status: SuggestionStatus | None = None
    ) -> list[Suggestion]:
        self._require_document(document_id)
        return self.store.list_suggestions(document_id, status)

    async def generate_suggestions(self, document_id: str, text_snapshot: str) -> GenerationResult:
        self._require_document(document_id)
        return await self.analyzer.generate(document_id, text_snapshot)

    async def apply_suggestion(self, document_id: str, suggestion_id: str) -> bool:
        """Apply against the stored content. ``False`` is a benign race, not an error."""
        doc = self._require_document(document_id)
        suggestion = self.store.get_suggestion(document_id, suggestion_id)
        outcome = self.apply_to_content(doc.content, suggestion)
        if not outcome.applied:
            logger.warning(
                "Suggestion %s not applied to %s (%s)", suggestion_id, document_id, outcome.reason
            )
            return False

        self.store.save_content(document_id, outcome.content, self.scorer.score(outcome.content))
        self.store.set_suggestion_status(document_id, suggestion_id, SuggestionStatus.ACCEPTED)
        logger.info("Applied suggestion %s with tier %d", suggestion_id, outcome.tier)
        return True

    def apply_to_content(self, content: str, suggestion: Suggestion | None) -> ApplyOutcome:
        """Re-locate ``suggestion`` in ``content`` and build the mutated text."""
        if suggestion is None:
            return ApplyOutcome(applied=False, reason="suggestion_missing")
        if not suggestion.is_pending:
            return ApplyOutcome(applied=False, reason="not_pending")
        match, updated = self.resolver.resolve(
            content, suggestion.original_text, suggestion.suggested_text
        )
        if not match.found:
            return ApplyOutcome(applied=False, reason="not_found")
        return ApplyOutcome(applied=True, content=updated, tier=match.tier)

    async def mark_suggestion(
        self, document_id: str, suggestion_id: str, status: SuggestionStatus
    ) -> bool:
        """Move a pending suggestion to ``status``; repeats are no-ops.

        Returns True when the status actually changed.
        """
        status = SuggestionStatus(status)
        if not status.is_terminal:
            raise ValueError("Suggestions can only be marked accepted or dismissed")
        self._require_document(document_id)
        if self.store.set_suggestion_status(document_id, suggestion_id, status):
            return True

        existing = self.store.get_suggestion(document_id, suggestion_id)
        if existing is None:
            logger.debug("Suggestion %s already superseded", suggestion_id)
        elif existing.status is not status:
            logger.warning(
                "Suggestion %s is already %s; ignoring %s",
                suggestion_id, existing.status.value, status.value,
            )
        return False

    async def clear_pending_suggestions(
        self, document_id: str, current_content: str | None = None
    ) -> int:
        """Drop pending suggestions: only the stale ones when content is given, else all."""
        self._require_document(document_id)
        if current_content is None:
            removed = self.store.replace_pending_suggestions(document_id, [])
        else:
            pending = self.store.list_suggestions(document_id, SuggestionStatus.PENDING)
            _, stale = self.validator.partition(pending, current_content)
            removed = self.store.delete_suggestions([s.id for s in stale])
        if removed:
            logger.info("Cleared %d pending suggestion(s) for %s", removed, document_id)
        return removed

    # -- analysis and rewriting ------------------------------------------

    async def get_readability(self, document_id: str) -> ReadabilityAnalysis:
        doc = self._require_document(document_id)
        analysis = await self.scorer.analyze(doc.content)
        self.store.set_readability_score(document_id, analysis.score)
        return analysis

    async def summarize_document(self, document_id: str) -> Summary:
        doc = self._require_document(document_id)
        return await self.rewriter.summarize(doc.content)

    def version_history(self, document_id: str) -> list[VersionSnapshot]:
        return self._history(document_id).entries()

    def _history(self, document_id: str) -> VersionHistory:
        if document_id not in self._histories:
            self._histories[document_id] = VersionHistory(self.config.editor.history_limit)
        return self._histories[document_id]

    async def rewrite_tone(self, document_id: str, tone: ToneType) -> ToneRewrite | None:
        """Rewrite the whole document in ``tone``; ``None`` leaves it untouched."""
        doc = self._require_document(document_id)
        tone = ToneType(tone)
        history = self._history(document_id)
        history.record(doc.content, "Before tone change", tone)

        result = await self.rewriter.rewrite_tone(doc.content, tone)
        if result is None:
            return None

        await self.save_content(document_id, result.rewritten_text)
        history.record(result.rewritten_text, f"Rewritten to {tone.value}", tone)
        await self.clear_pending_suggestions(document_id, result.rewritten_text)
        return result

    async def revert_to_version(self, document_id: str, version_id: str) -> str | None:
        self._require_document(document_id)
        history = self._history(document_id)
        version = history.get(version_id)
        if version is None:
            return None
        await self.save_content(document_id, version.content)
        history.record(version.content, "Reverted to previous version")
        await self.clear_pending_suggestions(document_id, version.content)
        return version.content
