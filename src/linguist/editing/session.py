"""In-memory review state: one document plus its active suggestions."""

from __future__ import annotations

import logging

from linguist.editing.overlay import Segment, render_overlay
from linguist.editing.patch import ApplyResult, BatchResult, apply_all, apply_one
from linguist.models.suggestion import AnalysisResult, Suggestion

logger = logging.getLogger(__name__)


class ReviewSession:
    """Owns the live document and the suggestions still awaiting a decision.

    The session is the single source of truth for the document: every accept
    adopts the patched text before anything else can change it.
    """

    def __init__(self, document: str = "", analysis: AnalysisResult | None = None):
        self.document = document
        self.analysis = analysis

    @property
    def pending(self) -> list[Suggestion]:
        if self.analysis is None:
            return []
        return list(self.analysis.suggestions)

    @property
    def word_count(self) -> int:
        return len(self.document.split())

    @property
    def char_count(self) -> int:
        return len(self.document)

    def load_analysis(self, analysis: AnalysisResult) -> None:
        self.analysis = analysis

    def _require(self, suggestion_id: str) -> Suggestion:
        suggestion = self.analysis.get(suggestion_id) if self.analysis else None
        if suggestion is None:
            raise KeyError(suggestion_id)
        return suggestion

    def accept(self, suggestion_id: str) -> ApplyResult:
        """Apply one suggestion; a stale one stays pending and the text is untouched."""
        suggestion = self._require(suggestion_id)
        result = apply_one(self.document, suggestion)
        if not result.applied:
            logger.info("Suggestion %s could not be located", suggestion_id)
            return result
        self.document = result.document
        self.analysis = self.analysis.without([suggestion_id])
        return result

    def dismiss(self, suggestion_id: str) -> None:
        self._require(suggestion_id)
        self.analysis = self.analysis.without([suggestion_id])

    def accept_all(self) -> BatchResult:
        """Apply every pending suggestion; skipped ones remain pending."""
        result = apply_all(self.document, self.pending)
        self.document = result.document
        if self.analysis is not None:
            self.analysis = self.analysis.without(result.applied_ids)
        return result

    def edit(self, document: str) -> None:
        """Record a user edit. Suggestions are kept and may go stale."""
        self.document = document

    def replace(self, document: str) -> None:
        """Swap in a rewritten document; the old analysis no longer applies."""
        self.document = document
        self.analysis = None

    def overlay(self) -> list[Segment]:
        return render_overlay(self.document, self.pending)
