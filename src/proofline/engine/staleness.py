"""Decide whether a suggestion still applies to the current content."""

from __future__ import annotations

from collections.abc import Iterable

from proofline.models.suggestion import Suggestion
from proofline.utils.text import normalize_text


class StalenessValidator:
    """Exact-containment check against normalized content.

    Coarser than MatchResolver: a suggestion can fail here and still be
    resolvable by the looser tiers. It only answers "is the original text
    still somewhere in the document", so a suggestion whose old position now
    holds unrelated text is still considered valid if the text survives
    elsewhere. Likewise text split by inline tags reads as valid here although
    MatchResolver cannot locate it in the markup.
    """

    def is_valid(self, suggestion: Suggestion, content: str) -> bool:
        return self._contains(normalize_text(content), suggestion)

    def partition(
        self, suggestions: Iterable[Suggestion], content: str
    ) -> tuple[list[Suggestion], list[Suggestion]]:
        """Split into ``(valid, stale)``, normalizing content once."""
        normalized = normalize_text(content)
        valid: list[Suggestion] = []
        stale: list[Suggestion] = []
        for s in suggestions:
            (valid if self._contains(normalized, s) else stale).append(s)
        return valid, stale

    def filter_valid(self, suggestions: Iterable[Suggestion], content: str) -> list[Suggestion]:
        return self.partition(suggestions, content)[0]

    @staticmethod
    def _contains(normalized: str, suggestion: Suggestion) -> bool:
        return bool(suggestion.original_text) and suggestion.original_text in normalized
