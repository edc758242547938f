"""Re-locate a suggestion's original text in the current content.

Suggestion offsets are a snapshot artifact and are never used here. The text
is searched with three tiers, first hit wins:

1. exact, case-sensitive substring; only the first occurrence is replaced
2. case-insensitive literal; only the first occurrence is replaced
3. word-anchored, case-insensitive, whitespace-tolerant; every occurrence is
   replaced

Tier 3 replacing all occurrences is policy: by the time it runs the text has
drifted (re-rendered whitespace, line breaks) and the correction is usually a
short token that is wrong everywhere it appears.

Text interrupted by inline tags (``<b>very</b> big``) is not found by any
tier; such a suggestion stays valid for the staleness check but cannot be
applied.
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass, field

from proofline.utils.text import literal_pattern

logger = logging.getLogger(__name__)

EXACT = 1
CASE_INSENSITIVE = 2
WORD_BOUNDARY = 3


@dataclass(frozen=True)
class Match:
    found: bool
    tier: int | None = None
    spans: list[tuple[int, int]] = field(default_factory=list)

    @property
    def range(self) -> tuple[int, int] | None:
        return self.spans[0] if self.spans else None


NOT_FOUND = Match(found=False)


class MatchResolver:
    def locate(self, content: str, original_text: str) -> Match:
        if not original_text:
            return NOT_FOUND

        start = content.find(original_text)
        if start != -1:
            return Match(True, EXACT, [(start, start + len(original_text))])

        m = literal_pattern(original_text, ignore_case=True).search(content)
        if m:
            return Match(True, CASE_INSENSITIVE, [m.span()])

        if original_text.split():
            pattern = literal_pattern(
                original_text,
                ignore_case=True,
                word_bounded=True,
                flexible_whitespace=True,
            )
            spans = [m.span() for m in pattern.finditer(content)]
            if spans:
                return Match(True, WORD_BOUNDARY, spans)

        return NOT_FOUND

    def apply(self, content: str, match: Match, suggested_text: str) -> str:
        if not match.found:
            return content
        # Right to left so earlier spans stay valid
        for start, end in sorted(match.spans, reverse=True):
            content = content[:start] + suggested_text + content[end:]
        return content

    def resolve(self, content: str, original_text: str, suggested_text: str) -> tuple[Match, str]:
        """Locate and apply in one step; content is returned unchanged when not found.

        Suggestions carry plain text while content is markup, so a miss is
        retried with both sides entity-escaped (``&`` as ``&amp;``).
        """
        match = self.locate(content, original_text)
        escaped = html.escape(original_text, quote=False)
        if not match.found and escaped != original_text:
            match = self.locate(content, escaped)
            suggested_text = html.escape(suggested_text, quote=False)
        if not match.found:
            logger.debug("No tier matched %r", original_text)
            return match, content
        logger.debug(
            "Matched %r with tier %d (%d span(s))", original_text, match.tier, len(match.spans)
        )
        return match, self.apply(content, match, suggested_text)
