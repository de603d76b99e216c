"""Data models for the writing assistant."""

from linguist.models.plagiarism import PlagiarismMatch, PlagiarismResult
from linguist.models.suggestion import (
    AnalysisResult,
    LearningReview,
    Suggestion,
    SuggestionType,
    ToneTarget,
)

__all__ = [
    "AnalysisResult",
    "LearningReview",
    "PlagiarismMatch",
    "PlagiarismResult",
    "Suggestion",
    "SuggestionType",
    "ToneTarget",
]
