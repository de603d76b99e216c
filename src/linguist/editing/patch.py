"""Apply suggestions to a document snapshot."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from functools import reduce

from linguist.editing.anchor import Span, find_span
from linguist.models.suggestion import Suggestion

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApplyResult:
    document: str
    applied: bool
    span: Span | None = None


@dataclass(frozen=True)
class BatchResult:
    """Outcome of applying several suggestions against one running document."""

    document: str
    applied_ids: frozenset[str] = field(default_factory=frozenset)
    skipped_ids: frozenset[str] = field(default_factory=frozenset)


def splice(document: str, span: Span, replacement: str) -> str:
    """Replace ``document[span.start:span.end]`` with ``replacement``."""
    return document[: span.start] + replacement + document[span.end :]


def apply_one(document: str, suggestion: Suggestion) -> ApplyResult:
    """Apply a single suggestion.

    Returns the input document untouched with ``applied=False`` when the
    suggestion can no longer be located.
    """
    span = find_span(document, suggestion)
    if span is None:
        return ApplyResult(document=document, applied=False)
    return ApplyResult(
        document=splice(document, span, suggestion.suggested_text),
        applied=True,
        span=span,
    )


def _step(acc: BatchResult, suggestion: Suggestion) -> BatchResult:
    result = apply_one(acc.document, suggestion)
    if result.applied:
        return BatchResult(
            document=result.document,
            applied_ids=acc.applied_ids | {suggestion.id},
            skipped_ids=acc.skipped_ids,
        )
    return BatchResult(
        document=acc.document,
        applied_ids=acc.applied_ids,
        skipped_ids=acc.skipped_ids | {suggestion.id},
    )


def apply_all(document: str, suggestions: Iterable[Suggestion]) -> BatchResult:
    """Apply suggestions in the given order, each against the previous result.

    Earlier replacements shift offsets and text for later ones, so every match
    is computed on the running document.  When two spans overlap the first one
    wins and the second is reported in ``skipped_ids``.
    """
    result = reduce(_step, suggestions, BatchResult(document=document))
    logger.info(
        "Batch apply: %d applied, %d skipped",
        len(result.applied_ids),
        len(result.skipped_ids),
    )
    return result
