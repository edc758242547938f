"""Deterministic suggestion generator driven by a fixed pattern table."""

from __future__ import annotations

import re
from dataclasses import dataclass

from proofline.models.suggestion import Severity, Suggestion, SuggestionType


@dataclass(frozen=True)
class Rule:
    find: re.Pattern[str]
    replace: str
    type: SuggestionType


def _word(word: str) -> re.Pattern[str]:
    return re.compile(rf"\b{re.escape(word)}\b", re.IGNORECASE)


def _spelling(word: str, replace: str) -> Rule:
    return Rule(_word(word), replace, SuggestionType.SPELLING)


SPELLING_RULES: list[Rule] = [
    _spelling("Im", "I'm"),
    _spelling("dum", "dumb"),
    _spelling("Whats", "What's"),
    _spelling("youre", "you're"),
    _spelling("teh", "the"),
    _spelling("recieve", "receive"),
    _spelling("definately", "definitely"),
    _spelling("seperate", "separate"),
    _spelling("occured", "occurred"),
    _spelling("untill", "until"),
    _spelling("wich", "which"),
    _spelling("acheive", "achieve"),
]

GRAMMAR_RULES: list[Rule] = [
    Rule(re.compile(r"\bcould of\b", re.IGNORECASE), "could have", SuggestionType.GRAMMAR),
    Rule(re.compile(r"\bshould of\b", re.IGNORECASE), "should have", SuggestionType.GRAMMAR),
    Rule(re.compile(r"\bwould of\b", re.IGNORECASE), "would have", SuggestionType.GRAMMAR),
]

STYLE_RULES: list[Rule] = [
    Rule(
        re.compile(r"My name is Elliot Rosen and I'm dumb\.", re.IGNORECASE),
        "My name is Elliot Rosen, and I'm not very smart.",
        SuggestionType.STYLE,
    ),
    Rule(_word("very"), "extremely", SuggestionType.STYLE),
    Rule(_word("in order to"), "to", SuggestionType.STYLE),
    Rule(_word("utilize"), "use", SuggestionType.STYLE),
]

SEVERITY_BY_TYPE: dict[SuggestionType, Severity] = {
    SuggestionType.SPELLING: Severity.HIGH,
    SuggestionType.GRAMMAR: Severity.HIGH,
    SuggestionType.STYLE: Severity.MEDIUM,
}

DEFAULT_RULES: list[Rule] = SPELLING_RULES + GRAMMAR_RULES + STYLE_RULES


def generate_pattern_suggestions(
    text: str,
    document_id: str = "",
    rules: list[Rule] | None = None,
) -> list[Suggestion]:
    """Scan ``text`` with every rule and emit one pending suggestion per hit."""
    suggestions: list[Suggestion] = []
    for rule in rules or DEFAULT_RULES:
        for m in rule.find.finditer(text):
            suggestions.append(
                Suggestion(
                    document_id=document_id,
                    start_index=m.start(),
                    end_index=m.end(),
                    original_text=m.group(0),
                    suggested_text=rule.replace,
                    type=rule.type,
                    severity=SEVERITY_BY_TYPE[rule.type],
                )
            )
    return suggestions
