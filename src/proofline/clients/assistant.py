"""Writing assistant backed by Claude: corrections, readability, summary, tone."""

from __future__ import annotations

import logging
import os

from pydantic import ValidationError

from proofline.clients.llm_client import LLMClient
from proofline.config import LLMConfig
from proofline.errors import AnalysisFailure
from proofline.models.rewriting import ToneType
from proofline.models.suggestion import ProposedCorrection
from proofline.utils.json_parser import extract_json

logger = logging.getLogger(__name__)

SPELLING_SYSTEM = """\
You are a professional editor and spellchecker. You return only valid JSON.
Be precise: "original_text" must be copied exactly from the input text."""

SPELLING_PROMPT = """\
Analyze the following text and identify:

1. SPELLING ERRORS - misspelled words that need correction
2. GRAMMAR ERRORS - agreement, tense, article or punctuation mistakes

Text to analyze:
\"\"\"{text}\"\"\"

Respond with a JSON array only:
[
  {{
    "original_text": "exact text to replace",
    "suggested_text": "replacement text",
    "type": "spelling" | "grammar",
    "explanation": "brief explanation of the issue",
    "start_index": 0,
    "end_index": 10
  }}
]

Only include legitimate issues. If no issues are found, return []."""

STYLE_SYSTEM = """\
You are a writing coach that provides style improvements as valid JSON.
Focus on substantial improvements, not minor changes."""

STYLE_PROMPT = """\
Analyze this text for style improvements: clarity, conciseness, tone,
word choice and sentence structure.

Text:
\"\"\"{text}\"\"\"

Respond with a JSON array only:
[
  {{
    "original_text": "exact phrase to replace",
    "suggested_text": "improved version",
    "type": "style",
    "explanation": "why this improves the text",
    "start_index": 0,
    "end_index": 15
  }}
]"""

READABILITY_SYSTEM = """\
You are a business writing expert that analyzes readability for working
professionals. Always respond with valid JSON."""

READABILITY_PROMPT = """\
Analyze the following text for readability.

Text to analyze:
\"\"\"{text}\"\"\"

Reading effort levels:
- Easy Digest (0-6): quick read, broad appeal
- Focused Reading (6-9): requires attention but accessible
- Deep Dive (9-12): detailed content requiring concentration
- Expert Level (12+): specialized knowledge needed

Respond with JSON in this exact format:
{{
  "average_grade_level": 8.6,
  "insights": ["...", "..."],
  "recommendations": ["...", "..."]
}}"""

SUMMARY_SYSTEM = """\
You are a summarization expert that creates concise, accurate summaries.
Always respond with valid JSON."""

SUMMARY_PROMPT = """\
Create a concise TLDR of the following text for a busy professional.

Text to summarize:
\"\"\"{text}\"\"\"

Respond with JSON:
{{
  "summary": "2-3 sentences, under 100 words",
  "key_points": ["2 to 5 key points"]
}}"""

TONE_SYSTEM = """\
You are a tone adjustment expert. Rewrite HTML content to match the requested
tone while preserving ALL HTML formatting exactly. Never add, remove, or
modify HTML tags; only change text between tags. Always respond with valid JSON."""

TONE_PROMPT = """\
Rewrite the following HTML content to be {description}.

Original HTML content:
{html}

Preserve all factual information, all tags and attributes, and the
structure of the document.

Respond with JSON:
{{
  "rewritten_text": "the complete HTML with rewritten text",
  "changes": ["short description of each change"]
}}"""

TONE_DESCRIPTIONS: dict[ToneType, str] = {
    ToneType.CASUAL: "relaxed, conversational, and approachable while maintaining professionalism",
    ToneType.FORMAL: "professional, structured, and authoritative with proper business language",
    ToneType.FRIENDLY: "warm, personable, and welcoming while staying professional",
    ToneType.ASSERTIVE: "confident, direct, and decisive with clear action-oriented language",
}


class WritingAssistant:
    """AI capability consumed by the analyzer, scorer and rewriting helpers.

    Every method either returns parsed output or raises; it never falls back
    on its own. Malformed replies raise ``AnalysisFailure(PARSE)``.
    """

    def __init__(self, llm: LLMClient, model: str | None = None):
        self.llm = llm
        self.model = model

    async def suggest_spelling(self, text: str) -> list[ProposedCorrection]:
        logger.debug("Spellcheck analysis for %d characters", len(text))
        data = await self.llm.generate_json(
            prompt=SPELLING_PROMPT.format(text=text),
            system=SPELLING_SYSTEM,
            model=self.model,
            temperature=0.1,
        )
        return self._parse_corrections(data)

    async def suggest_style(self, text: str) -> list[ProposedCorrection]:
        logger.debug("Style analysis for %d characters", len(text))
        data = await self.llm.generate_json(
            prompt=STYLE_PROMPT.format(text=text),
            system=STYLE_SYSTEM,
            model=self.model,
            temperature=0.2,
        )
        return self._parse_corrections(data, default_type="style")

    async def score(self, text: str) -> tuple[float, list[str], list[str]]:
        """Return ``(grade_level, insights, recommendations)``."""
        data = await self.llm.generate_json(
            prompt=READABILITY_PROMPT.format(text=text),
            system=READABILITY_SYSTEM,
            model=self.model,
            temperature=0.1,
        )
        if not isinstance(data, dict):
            raise AnalysisFailure(AnalysisFailure.PARSE, "readability reply is not an object")
        try:
            grade_level = float(data["average_grade_level"])
        except (KeyError, TypeError, ValueError) as exc:
            raise AnalysisFailure(AnalysisFailure.PARSE, f"bad grade level: {exc}") from exc
        return grade_level, _str_list(data.get("insights")), _str_list(data.get("recommendations"))

    async def summarize(self, text: str) -> tuple[str, list[str]]:
        data = await self.llm.generate_json(
            prompt=SUMMARY_PROMPT.format(text=text),
            system=SUMMARY_SYSTEM,
            model=self.model,
            temperature=0.2,
            max_tokens=500,
        )
        if not isinstance(data, dict) or not isinstance(data.get("summary"), str):
            raise AnalysisFailure(AnalysisFailure.PARSE, "summary reply has no 'summary'")
        return data["summary"].strip(), _str_list(data.get("key_points"))

    async def rewrite_tone(self, html: str, tone: ToneType) -> tuple[str, list[str]]:
        data = await self.llm.generate_json(
            prompt=TONE_PROMPT.format(description=TONE_DESCRIPTIONS[tone], html=html),
            system=TONE_SYSTEM,
            model=self.model,
            temperature=0.3,
        )
        if not isinstance(data, dict) or not isinstance(data.get("rewritten_text"), str):
            raise AnalysisFailure(AnalysisFailure.PARSE, "tone reply has no 'rewritten_text'")
        return data["rewritten_text"], _str_list(data.get("changes"))

    @staticmethod
    def _parse_corrections(data, default_type: str | None = None) -> list[ProposedCorrection]:
        """Parse an LLM reply into corrections; the reply must be a list."""
        if isinstance(data, dict):
            for key in ("suggestions", "corrections", "items"):
                if isinstance(data.get(key), list):
                    data = data[key]
                    break
        if not isinstance(data, list):
            raise AnalysisFailure(AnalysisFailure.PARSE, "corrections reply is not a list")

        result = []
        for item in data:
            if not isinstance(item, dict):
                continue
            if default_type is not None:
                item = {**item, "type": default_type}
            try:
                result.append(ProposedCorrection(**item))
            except ValidationError:
                logger.debug("Skipping malformed correction: %r", item)
        return result


def _str_list(value) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if v]


def build_assistant(config: LLMConfig, api_key: str | None = None) -> WritingAssistant | None:
    """Create an assistant, or None when no API key is configured."""
    api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
    if not api_key:
        logger.info("ANTHROPIC_API_KEY not set; AI features will use fallbacks")
        return None
    llm = LLMClient(api_key=api_key, timeout=config.timeout, model=config.model)
    return WritingAssistant(llm, model=config.model)
