"""Produce and commit a suggestion batch for one text snapshot."""

from __future__ import annotations

import asyncio
import logging

from proofline.clients.assistant import WritingAssistant
from proofline.config import LLMConfig
from proofline.engine.fallback import with_fallback
from proofline.engine.patterns import SEVERITY_BY_TYPE, generate_pattern_suggestions
from proofline.errors import DocumentNotFound
from proofline.models.suggestion import (
    GenerationResult,
    ProposedCorrection,
    Suggestion,
    SuggestionType,
)
from proofline.store.base import SuggestionStore
from proofline.utils.text import matches_snapshot

logger = logging.getLogger(__name__)


def to_suggestion(proposal: ProposedCorrection, snapshot: str, document_id: str) -> Suggestion | None:
    """Normalize one AI proposal against the snapshot it was computed from.

    Empty and no-op corrections are dropped. Offsets are re-derived by a
    case-insensitive search in the snapshot when possible; they stay hints.
    """
    original = proposal.original_text
    if not original.strip() or original == proposal.suggested_text:
        return None

    try:
        kind = SuggestionType(proposal.type.lower())
    except ValueError:
        kind = SuggestionType.STYLE

    start = snapshot.lower().find(original.lower())
    if start == -1:
        start = max(0, proposal.start_index or 0)
    return Suggestion(
        document_id=document_id,
        start_index=start,
        end_index=start + len(original),
        original_text=original,
        suggested_text=proposal.suggested_text,
        type=kind,
        severity=SEVERITY_BY_TYPE[kind],
        explanation=proposal.explanation or None,
    )


async def _gather_or_cancel(*coros):
    """Like ``asyncio.gather``, but the first failure cancels the siblings."""
    tasks = [asyncio.ensure_future(c) for c in coros]
    try:
        return await asyncio.gather(*tasks)
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()
        # Collect the cancelled siblings so no exception goes unretrieved
        await asyncio.gather(*tasks, return_exceptions=True)


class AnalyzerDispatcher:
    """AI-assisted generation with a pattern-table fallback and a race check."""

    def __init__(
        self,
        store: SuggestionStore,
        assistant: WritingAssistant | None = None,
        llm_config: LLMConfig | None = None,
    ):
        self.store = store
        self.assistant = assistant
        self.llm_config = llm_config or LLMConfig()

    async def generate(self, document_id: str, text_snapshot: str) -> GenerationResult:
        """Analyze ``text_snapshot`` and replace the document's pending set.

        Never raises for AI or parse failures. Raises ``DocumentNotFound``
        when the document disappears.
        """
        call = None
        if self.assistant is not None:
            assistant = self.assistant

            async def call() -> list[Suggestion]:
                spelling, style = await _gather_or_cancel(
                    assistant.suggest_spelling(text_snapshot),
                    assistant.suggest_style(text_snapshot),
                )
                batch = [to_suggestion(p, text_snapshot, document_id) for p in spelling + style]
                return [s for s in batch if s is not None]

        outcome = await with_fallback(
            call,
            lambda: generate_pattern_suggestions(text_snapshot, document_id),
            timeout=self.llm_config.deadline_for(text_snapshot),
            label="suggestions",
        )
        logger.info(
            "Generated %d %s suggestion(s) for %s", len(outcome.value), outcome.origin.value, document_id
        )

        # Race check: the snapshot must still describe the stored document
        current = self.store.load_document(document_id)
        if current is None:
            raise DocumentNotFound(document_id)
        if not matches_snapshot(current.content, text_snapshot):
            logger.warning("Document %s changed during analysis; discarding batch", document_id)
            return GenerationResult(origin=outcome.origin, stale=True, failure=outcome.failure)

        retired = self.store.replace_pending_suggestions(document_id, outcome.value)
        logger.debug("Retired %d pending suggestion(s) for %s", retired, document_id)
        return GenerationResult(
            origin=outcome.origin,
            suggestions=outcome.value,
            failure=outcome.failure,
        )
