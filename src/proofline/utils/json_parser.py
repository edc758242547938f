"""Utility to extract JSON from LLM responses."""

from __future__ import annotations

import json


def extract_json(text: str) -> dict | list:
    """Extract JSON from an LLM response, handling ```json fences.

    Tries in order:
    1. Direct json.loads on the full text
    2. Strip fenced code block markers and parse
    3. First '{' to last '}' (object)
    4. First '[' to last ']' (array)
    """
    text = (text or "").strip()

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    stripped = _strip_code_fences(text)
    if stripped != text:
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            pass
        text = stripped

    # An array reply wrapped in prose starts with '[' before any '{'
    first_brace = text.find("{")
    first_bracket = text.find("[")
    if first_bracket != -1 and (first_brace == -1 or first_bracket < first_brace):
        order = ("[]", "{}")
    else:
        order = ("{}", "[]")
    for open_char, close_char in order:
        result = _extract_between(text, open_char, close_char)
        if result is not None:
            return result

    raise ValueError(f"Could not extract JSON from text: {text[:200]}...")


def extract_json_list(text: str, keys: tuple[str, ...] = ("suggestions", "items")) -> list:
    """Extract a JSON array, unwrapping ``{"suggestions": [...]}`` style replies."""
    data = extract_json(text)
    if isinstance(data, dict):
        for key in keys:
            if isinstance(data.get(key), list):
                return data[key]
        raise ValueError(f"Expected a JSON array, got object with keys {sorted(data)}")
    return data


def _strip_code_fences(text: str) -> str:
    """Remove markdown code fence markers from text."""
    lines = text.split("\n")
    if lines and lines[0].strip().startswith("```"):
        lines = lines[1:]
    while lines and lines[-1].strip() in ("```", ""):
        lines = lines[:-1]
    return "\n".join(lines).strip()


def _extract_between(text: str, open_char: str, close_char: str) -> dict | list | None:
    start = text.find(open_char)
    end = text.rfind(close_char)
    if start != -1 and end > start:
        try:
            return json.loads(text[start : end + 1])
        except json.JSONDecodeError:
            pass
    return None
