"""Plain-text helpers shared by matching, staleness and scoring."""

from __future__ import annotations

import html
import re

_TAG_RE = re.compile(r"<[^>]*>")
_BLOCK_TAG_RE = re.compile(r"</?(?:p|div|br|li|ul|ol|h[1-6]|blockquote|pre)\b[^>]*>", re.IGNORECASE)
_WS_RE = re.compile(r"\s+")
_SENTENCE_END_RE = re.compile(r"[.!?]+")


def strip_markup(content: str) -> str:
    """Drop tags and decode entities. Block-level tags become spaces."""
    text = _BLOCK_TAG_RE.sub(" ", content)
    text = _TAG_RE.sub("", text)
    return html.unescape(text)


def normalize_text(content: str) -> str:
    """Markup stripped, whitespace collapsed, ends trimmed."""
    return collapse_whitespace(strip_markup(content))


def collapse_whitespace(text: str) -> str:
    return _WS_RE.sub(" ", text).strip()


def matches_snapshot(content: str, snapshot: str) -> bool:
    """Whether stored markup still reads as ``snapshot``.

    The snapshot is already plain text: only its whitespace is collapsed,
    it is never stripped or unescaped a second time.
    """
    return normalize_text(content) == collapse_whitespace(snapshot)


def literal_pattern(
    text: str,
    *,
    ignore_case: bool = False,
    word_bounded: bool = False,
    flexible_whitespace: bool = False,
) -> re.Pattern[str]:
    """Build a regex that matches ``text`` literally.

    Every pattern derived from user or model text goes through here so all
    match tiers escape identically. ``word_bounded`` forbids the match from
    starting or ending inside a word; ``flexible_whitespace`` lets any run of
    whitespace in ``text`` match any run in the target.
    """
    if flexible_whitespace:
        body = r"\s+".join(re.escape(part) for part in text.split())
    else:
        body = re.escape(text)
    if word_bounded:
        body = rf"(?<!\w){body}(?!\w)"
    flags = re.IGNORECASE if ignore_case else 0
    return re.compile(body, flags)


def words(text: str) -> list[str]:
    return text.split()


def word_count(content: str) -> int:
    return len(words(normalize_text(content)))


def sentences(text: str) -> list[str]:
    """Split on sentence-ending punctuation, discarding empty pieces."""
    return [s.strip() for s in _SENTENCE_END_RE.split(text) if s.strip()]
