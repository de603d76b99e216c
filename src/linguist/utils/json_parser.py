"""Pull a JSON payload out of an LLM reply."""

from __future__ import annotations

import json
import re

_FENCE = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL)


def extract_json(text: str) -> dict | list:
    """Extract JSON from an LLM response.

    Tries in order:
    1. The whole text
    2. The body of the first fenced code block (```json ... ```)
    3. The outermost ``{...}`` object
    4. The outermost ``[...]`` array

    Raises ValueError when nothing parses.
    """
    text = (text or "").strip()

    candidates = [text]
    fence = _FENCE.search(text)
    if fence:
        candidates.append(fence.group(1))
    candidates.append(_slice(text, "{", "}"))
    candidates.append(_slice(text, "[", "]"))

    for candidate in candidates:
        if not candidate:
            continue
        try:
            return json.loads(candidate)
        except json.JSONDecodeError:
            continue

    raise ValueError(f"Could not extract JSON from text: {text[:200]}...")


def _slice(text: str, open_ch: str, close_ch: str) -> str:
    start = text.find(open_ch)
    end = text.rfind(close_ch)
    if start == -1 or end <= start:
        return ""
    return text[start : end + 1]
