"""Helpers to turn raw LLM replies into JSON."""

from __future__ import annotations

import json
import re

from portfolio_ai.errors import GenerationParseError

_OPENING_FENCE = re.compile(r"^```[A-Za-z0-9_-]*[ \t]*\n?")
_CLOSING_FENCE = re.compile(r"\n?[ \t]*```$")


def strip_code_fences(text: str) -> str:
    """Trim the reply and remove a wrapping ``` or ```json fence.

    Text that does not start with a fence is only trimmed. Applying this twice
    gives the same result as applying it once.
    """
    text = text.strip()
    if not text.startswith("```"):
        return text
    text = _OPENING_FENCE.sub("", text, count=1)
    text = _CLOSING_FENCE.sub("", text, count=1)
    return text.strip()


def parse_json_reply(text: str) -> dict | list:
    """Parse a model reply as JSON after fence stripping.

    Raises:
        GenerationParseError: the stripped text is not valid JSON.
    """
    if text is None:
        raise GenerationParseError(raw_reply=None)
    stripped = strip_code_fences(text)
    try:
        return json.loads(stripped)
    except json.JSONDecodeError as exc:
        raise GenerationParseError(raw_reply=text) from exc
