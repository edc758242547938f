"""Readability grade: AI-assisted analysis with a Flesch-Kincaid fallback."""

from __future__ import annotations

import logging
import re

from proofline.clients.assistant import WritingAssistant
from proofline.config import LLMConfig, ReadabilityConfig
from proofline.engine.fallback import with_fallback
from proofline.models.rewriting import ReadabilityAnalysis
from proofline.models.suggestion import Origin
from proofline.utils.text import normalize_text, sentences

logger = logging.getLogger(__name__)

MIN_SCORE = 0.0
MAX_SCORE = 18.0

# Upper bounds, checked in order
GRADE_BANDS: list[tuple[float, str]] = [
    (6.0, "Easy Digest"),
    (9.0, "Focused Reading"),
    (12.0, "Deep Dive"),
]
TOP_GRADE = "Expert Level"

_WORD_RE = re.compile(r"[A-Za-z0-9']+")
_VOWEL_GROUP_RE = re.compile(r"[aeiouy]+")


def grade_for(score: float) -> str:
    for upper, label in GRADE_BANDS:
        if score < upper:
            return label
    return TOP_GRADE


def count_syllables(word: str) -> int:
    word = word.lower().strip("'")
    groups = len(_VOWEL_GROUP_RE.findall(word))
    if word.endswith("e"):
        groups -= 1
    return max(1, groups)


def _stats(text: str) -> tuple[int, int, int]:
    """Return ``(words, sentences, syllables)`` for plain text."""
    tokens = _WORD_RE.findall(text)
    n_sentences = max(1, len(sentences(text))) if tokens else 0
    return len(tokens), n_sentences, sum(count_syllables(t) for t in tokens)


def flesch_kincaid_grade(text: str) -> float:
    n_words, n_sentences, n_syllables = _stats(text)
    if n_words == 0:
        return MIN_SCORE
    grade = 0.39 * (n_words / n_sentences) + 11.8 * (n_syllables / n_words) - 15.59
    return round(min(MAX_SCORE, max(MIN_SCORE, grade)), 1)


class ReadabilityScorer:
    def __init__(
        self,
        assistant: WritingAssistant | None = None,
        config: ReadabilityConfig | None = None,
        llm_config: LLMConfig | None = None,
    ):
        self.assistant = assistant
        self.config = config or ReadabilityConfig()
        self.llm_config = llm_config or LLMConfig()

    def score(self, text: str) -> float:
        """Deterministic grade for markup or plain text."""
        return flesch_kincaid_grade(normalize_text(text))

    async def analyze(self, text: str) -> ReadabilityAnalysis:
        plain = normalize_text(text)
        if len(plain) < self.config.min_ai_chars:
            return self._deterministic(plain)

        call = None
        if self.assistant is not None:
            assistant = self.assistant

            async def call() -> ReadabilityAnalysis:
                grade_level, insights, recommendations = await assistant.score(plain)
                score = round(min(MAX_SCORE, max(MIN_SCORE, grade_level)), 1)
                return ReadabilityAnalysis(
                    score=score,
                    grade=grade_for(score),
                    insights=insights,
                    recommendations=recommendations,
                    origin=Origin.AI,
                )

        outcome = await with_fallback(
            call,
            lambda: self._deterministic(plain),
            timeout=self.llm_config.deadline_for(plain),
            label="readability",
        )
        return outcome.value

    def _deterministic(self, plain: str) -> ReadabilityAnalysis:
        n_words, n_sentences, n_syllables = _stats(plain)
        score = flesch_kincaid_grade(plain)
        insights: list[str] = []
        recommendations: list[str] = []
        if n_words:
            wps = n_words / n_sentences
            spw = n_syllables / n_words
            insights.append(
                f"{n_words} words in {n_sentences} sentence(s), "
                f"averaging {wps:.1f} words per sentence"
            )
            if wps > 20:
                recommendations.append("Break up long sentences to keep the reader's attention")
            if spw > 1.7:
                recommendations.append("Prefer shorter, everyday words where possible")
        if not recommendations and n_words:
            recommendations.append("Sentence length and word choice are easy to follow")
        return ReadabilityAnalysis(
            score=score,
            grade=grade_for(score),
            insights=insights,
            recommendations=recommendations,
        )
