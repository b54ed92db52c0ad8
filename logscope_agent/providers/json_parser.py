"""Lenient JSON parsing for LLM-generated response bodies."""

import json
import re
from dataclasses import dataclass
from typing import Any

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*\n?([\s\S]*?)\n?```", re.IGNORECASE)
# String literals are matched first so their contents are never rewritten.
_REPAIR_TOKENS = re.compile(r'"(?:\\.|[^"\\])*"|,\s*(?=[}\]])|\b(?:True|False|None)\b')
_PY_LITERALS = {"True": "true", "False": "false", "None": "null"}


@dataclass
class ParseFailure:
    """Marker returned when no JSON value could be recovered from the text."""

    error: str

    @property
    def success(self) -> bool:
        return False


def _candidates(text: str) -> list[str]:
    """Collect substrings that might hold the JSON payload, most specific last."""
    found = [text]

    match = _FENCED_BLOCK.search(text)
    if match:
        found.append(match.group(1).strip())

    for open_char, close_char in (("{", "}"), ("[", "]")):
        start = text.find(open_char)
        end = text.rfind(close_char)
        if start != -1 and end > start:
            found.append(text[start : end + 1])

    return found


def _repair_token(match: re.Match) -> str:
    token = match.group(0)
    if token.startswith('"'):
        return token
    if token.startswith(","):
        return ""
    return _PY_LITERALS[token]


def _repair(text: str) -> str:
    return _REPAIR_TOKENS.sub(_repair_token, text)


def parse_llm_json(text: str | None) -> Any | ParseFailure:
    """
    Parse JSON that may be wrapped in prose or code fences.

    Attempts plain JSON first, then a fenced ```json block, then the
    outermost object/array slice. Each candidate is retried once after
    dropping trailing commas and mapping Python literals to JSON ones.

    Args:
        text: Raw response body.

    Returns:
        The parsed value, or a ParseFailure describing the last error.
    """
    if text is None or not text.strip():
        return ParseFailure(error="Empty response body")

    stripped = text.strip()
    last_error = "no JSON value found"

    for candidate in _candidates(stripped):
        for attempt in (candidate, _repair(candidate)):
            try:
                return json.loads(attempt)
            except (ValueError, RecursionError) as e:
                # Over-long integers raise a plain ValueError, deep nesting a RecursionError.
                last_error = str(e)

    return ParseFailure(error=f"Failed to parse agent response as JSON: {last_error}")
