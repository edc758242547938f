"""Keeps one open editor buffer, the stored document and its suggestions in step."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from proofline.config import EditorConfig
from proofline.engine.scheduler import IdleScheduler
from proofline.engine.service import EditorService
from proofline.engine.staleness import StalenessValidator
from proofline.models.rewriting import ReadabilityAnalysis
from proofline.models.suggestion import (
    ApplyOutcome,
    GenerationResult,
    Suggestion,
    SuggestionStatus,
)
from proofline.utils.text import normalize_text

logger = logging.getLogger(__name__)

GENERATE_KEY = "generate"
READABILITY_KEY = "readability"


class ContentSyncController:
    """Single authority over the current text of one document.

    Edits are local and synchronous; persistence runs in the background.
    Regeneration is debounced through the idle scheduler and never runs
    twice at once. Polling refreshes the visible suggestions but stays quiet
    while a generation is running or the user is typing.
    """

    def __init__(
        self,
        service: EditorService,
        document_id: str,
        *,
        config: EditorConfig | None = None,
        scheduler: IdleScheduler | None = None,
        on_suggestions: Callable[[list[Suggestion]], None] | None = None,
    ):
        self.service = service
        self.document_id = document_id
        self.config = config or service.config.editor
        self.scheduler = scheduler or IdleScheduler()
        self.validator = StalenessValidator()
        self.on_suggestions = on_suggestions
        self.readability: ReadabilityAnalysis | None = None

        self._content = ""
        self._pending: list[Suggestion] = []
        self._visible: list[Suggestion] = []
        self._generating = False
        self._typing = False
        self._poll_task: asyncio.Task | None = None
        self._saves: set[asyncio.Task] = set()

    @property
    def content(self) -> str:
        return self._content

    @property
    def visible_suggestions(self) -> list[Suggestion]:
        return list(self._visible)

    @property
    def is_generating(self) -> bool:
        return self._generating

    @property
    def is_typing(self) -> bool:
        return self._typing

    async def open(self) -> None:
        doc = await self.service.get_document(self.document_id)
        self._content = doc.content
        await self.refresh()

    # -- edits -----------------------------------------------------------

    def on_content_changed(self, new_content: str) -> None:
        """Record an edit. Regeneration is only armed, never run here."""
        if new_content == self._content:
            return
        self._track(new_content)
        self._set_visible(self.validator.filter_valid(self._pending, new_content))

    def note_user_activity(self) -> None:
        self._typing = True

    def note_user_idle(self) -> None:
        self._typing = False

    def _track(self, new_content: str) -> None:
        self._content = new_content
        self._persist(new_content)
        self.scheduler.schedule(GENERATE_KEY, self.config.idle_delay, self.generate_now)
        self.scheduler.schedule(READABILITY_KEY, self.config.readability_delay, self.refresh_readability)

    def _persist(self, content: str) -> None:
        task = asyncio.get_running_loop().create_task(
            self.service.save_content(self.document_id, content)
        )
        self._saves.add(task)
        task.add_done_callback(self._save_done)

    def _save_done(self, task: asyncio.Task) -> None:
        self._saves.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Saving %s failed", self.document_id, exc_info=exc)

    async def flush(self) -> None:
        """Wait for every background save started so far."""
        if self._saves:
            await asyncio.gather(*list(self._saves), return_exceptions=True)

    # -- generation and polling -------------------------------------------

    async def generate_now(self) -> GenerationResult | None:
        """Analyze the current buffer; returns None if a pass is already running."""
        if self._generating:
            logger.debug("Generation already running for %s; trigger ignored", self.document_id)
            return None
        self._generating = True
        try:
            await self.flush()
            snapshot = normalize_text(self._content)
            result = await self.service.generate_suggestions(self.document_id, snapshot)
        finally:
            self._generating = False
        await self.refresh()
        return result

    async def refresh(self) -> list[Suggestion]:
        self._pending = await self.service.get_suggestions(self.document_id, SuggestionStatus.PENDING)
        self._set_visible(self.validator.filter_valid(self._pending, self._content))
        return self.visible_suggestions

    async def refresh_readability(self) -> ReadabilityAnalysis:
        await self.flush()
        self.readability = await self.service.get_readability(self.document_id)
        return self.readability

    async def poll_once(self) -> bool:
        """Refresh unless generating or typing; returns whether it ran."""
        if self._generating or self._typing:
            logger.debug("Skipping poll for %s", self.document_id)
            return False
        await self.refresh()
        return True

    def start(self) -> None:
        if self._poll_task is None or self._poll_task.done():
            self._poll_task = asyncio.get_running_loop().create_task(self._poll_loop())

    async def _poll_loop(self) -> None:
        while True:
            await asyncio.sleep(self.config.poll_interval)
            try:
                await self.poll_once()
            except Exception:
                logger.exception("Polling suggestions for %s failed", self.document_id)

    async def close(self) -> None:
        """Stop polling and idle timers; pending saves still land."""
        if self._poll_task is not None:
            self._poll_task.cancel()
            try:
                await self._poll_task
            except asyncio.CancelledError:
                pass
            self._poll_task = None
        self.scheduler.cancel_all()
        await self.flush()

    # -- accept / dismiss -------------------------------------------------

    async def request_apply(self, suggestion: Suggestion) -> ApplyOutcome:
        """Apply against the live buffer; a miss is a soft failure followed by a refresh."""
        outcome = self.service.apply_to_content(self._content, suggestion)
        if not outcome.applied:
            logger.info(
                "Suggestion %s could not be applied (%s); refreshing", suggestion.id, outcome.reason
            )
            await self.refresh()
            return outcome

        self._track(outcome.content)
        await self.flush()
        await self.service.mark_suggestion(self.document_id, suggestion.id, SuggestionStatus.ACCEPTED)
        await self.refresh()
        return outcome

    async def dismiss(self, suggestion: Suggestion) -> None:
        await self.service.mark_suggestion(self.document_id, suggestion.id, SuggestionStatus.DISMISSED)
        await self.refresh()

    def _set_visible(self, suggestions: list[Suggestion]) -> None:
        self._visible = suggestions
        if self.on_suggestions is not None:
            self.on_suggestions(self.visible_suggestions)
