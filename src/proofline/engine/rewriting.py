"""TLDR summaries and tone rewrites, each degrading instead of failing."""

from __future__ import annotations

import logging

from proofline.clients.assistant import WritingAssistant
from proofline.config import LLMConfig, ReadabilityConfig
from proofline.engine.fallback import with_fallback
from proofline.models.rewriting import Summary, ToneRewrite, ToneType
from proofline.models.suggestion import Origin
from proofline.utils.text import normalize_text, sentences, words

logger = logging.getLogger(__name__)

TOO_SHORT_POINT = "Document is too short to summarize effectively"
EXTRACTIVE_SENTENCES = 2
MAX_KEY_POINTS = 3


def _summary(text: str, key_points: list[str], original_words: int, origin: Origin) -> Summary:
    count = len(words(text))
    ratio = round(count / original_words, 2) if original_words else 1.0
    return Summary(
        summary=text,
        key_points=key_points,
        word_count=count,
        original_word_count=original_words,
        compression_ratio=ratio,
        origin=origin,
    )


def extractive_summary(plain: str) -> Summary:
    """Leading sentences as the summary, the longest ones as key points."""
    parts = sentences(plain)
    summary = ". ".join(parts[:EXTRACTIVE_SENTENCES]) + "." if parts else plain
    key_points = sorted(parts, key=lambda s: len(s.split()), reverse=True)[:MAX_KEY_POINTS]
    return _summary(summary, key_points, len(words(plain)), Origin.FALLBACK)


class Rewriter:
    def __init__(
        self,
        assistant: WritingAssistant | None = None,
        config: ReadabilityConfig | None = None,
        llm_config: LLMConfig | None = None,
    ):
        self.assistant = assistant
        self.config = config or ReadabilityConfig()
        self.llm_config = llm_config or LLMConfig()

    async def summarize(self, content: str) -> Summary:
        plain = normalize_text(content)
        original_words = len(words(plain))
        if original_words < self.config.min_summary_words:
            return Summary(
                summary=plain,
                key_points=[TOO_SHORT_POINT],
                word_count=original_words,
                original_word_count=original_words,
                compression_ratio=1.0,
            )

        call = None
        if self.assistant is not None:
            assistant = self.assistant

            async def call() -> Summary:
                text, key_points = await assistant.summarize(plain)
                return _summary(text, key_points, original_words, Origin.AI)

        outcome = await with_fallback(
            call,
            lambda: extractive_summary(plain),
            timeout=self.llm_config.deadline_for(plain),
            label="summary",
        )
        return outcome.value

    async def rewrite_tone(self, html: str, tone: ToneType) -> ToneRewrite | None:
        """Rewrite keeping markup; ``None`` means leave the document as is."""
        plain = normalize_text(html)
        if len(plain) < self.config.min_rewrite_chars:
            return None

        call = None
        if self.assistant is not None:
            assistant = self.assistant

            async def call() -> ToneRewrite:
                rewritten, changes = await assistant.rewrite_tone(html.strip(), tone)
                return ToneRewrite(
                    original_text=plain,
                    rewritten_text=rewritten,
                    tone=tone,
                    changes=changes,
                )

        outcome = await with_fallback(
            call,
            lambda: None,
            timeout=self.llm_config.deadline_for(html),
            label=f"tone:{tone.value}",
        )
        return outcome.value
