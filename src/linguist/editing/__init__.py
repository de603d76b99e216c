"""Suggestion anchoring, patching and overlay rendering."""

from linguist.editing.anchor import MatchStrategy, Span, find_span, find_text
from linguist.editing.overlay import Segment, render_overlay, render_paragraph
from linguist.editing.patch import ApplyResult, BatchResult, apply_all, apply_one
from linguist.editing.session import ReviewSession

__all__ = [
    "ApplyResult",
    "BatchResult",
    "MatchStrategy",
    "ReviewSession",
    "Segment",
    "Span",
    "apply_all",
    "apply_one",
    "find_span",
    "find_text",
    "render_overlay",
    "render_paragraph",
]
