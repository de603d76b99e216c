"""Locate a suggestion's target text inside the live document.

The analyzer describes an edit by the text it *saw*, not by offsets, and the
document may have been re-wrapped or edited since.  Matching therefore tries,
in order:

1. ``context`` + whitespace + ``original_text`` with flexible whitespace
2. ``original_text`` alone with flexible whitespace
3. ``original_text`` as a literal substring

The first strategy that finds something wins.  A miss is a normal outcome and
is reported as ``None``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum

from linguist.models.suggestion import Suggestion

logger = logging.getLogger(__name__)

_WS_JOIN = r"\s+"


class MatchStrategy(str, Enum):
    CONTEXT = "context"
    FLEXIBLE = "flexible"
    LITERAL = "literal"


@dataclass(frozen=True)
class Span:
    """Half-open ``[start, end)`` range in the document."""

    start: int
    end: int
    strategy: MatchStrategy = MatchStrategy.LITERAL

    def __len__(self) -> int:
        return self.end - self.start


def flexible_pattern(text: str) -> str:
    """Build a regex source that matches ``text`` with any whitespace between words.

    Every internal whitespace run becomes ``\\s+``; leading and trailing
    whitespace must match exactly, so a verbatim occurrence is matched in full.
    Returns an empty string for blank input.
    """
    core = text.strip()
    if not core:
        return ""
    lead = text[: len(text) - len(text.lstrip())]
    trail = text[len(text.rstrip()) :]
    body = _WS_JOIN.join(re.escape(part) for part in core.split())
    return re.escape(lead) + body + re.escape(trail)


def _match_with_context(document: str, original: str, context: str) -> Span | None:
    target = flexible_pattern(original)
    anchor = flexible_pattern(context.strip())
    if not target or not anchor:
        return None
    # a target with leading whitespace supplies its own separator
    separator = "" if original[0].isspace() else _WS_JOIN
    pattern = re.compile(f"(?:{anchor}){separator}(?P<target>{target})")
    m = pattern.search(document)
    if m is None:
        return None
    return Span(m.start("target"), m.end("target"), MatchStrategy.CONTEXT)


def _match_flexible(document: str, original: str) -> Span | None:
    target = flexible_pattern(original)
    if not target:
        return None
    m = re.search(target, document)
    if m is None:
        return None
    return Span(m.start(), m.end(), MatchStrategy.FLEXIBLE)


def _match_literal(document: str, original: str) -> Span | None:
    index = document.find(original)
    if index == -1:
        return None
    return Span(index, index + len(original), MatchStrategy.LITERAL)


def find_text(document: str, original_text: str, context: str | None = None) -> Span | None:
    """Find ``original_text`` in ``document``, optionally disambiguated by ``context``."""
    if not original_text:
        return None

    if context and context.strip():
        span = _match_with_context(document, original_text, context)
        if span is not None:
            logger.debug("Anchored %r via context at %d", original_text, span.start)
            return span

    span = _match_flexible(document, original_text)
    if span is None:
        span = _match_literal(document, original_text)

    if span is None:
        logger.debug("No anchor for %r", original_text)
    else:
        logger.debug("Anchored %r via %s at %d", original_text, span.strategy.value, span.start)
    return span


def find_span(document: str, suggestion: Suggestion) -> Span | None:
    """Locate ``suggestion`` in ``document``; ``None`` means stale or unmatchable."""
    return find_text(document, suggestion.original_text, suggestion.context)
