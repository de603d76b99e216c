"""Pydantic models for text analysis results and suggestions."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SuggestionType(str, Enum):
    GRAMMAR = "GRAMMAR"
    CLARITY = "CLARITY"
    TONE = "TONE"
    ENGAGEMENT = "ENGAGEMENT"
    STRATEGIC = "STRATEGIC"
    FORMATTING = "FORMATTING"


class ToneTarget(str, Enum):
    PROFESSIONAL = "Professional"
    CASUAL = "Casual"
    CONFIDENT = "Confident"
    EMPATHETIC = "Empathetic"
    ACADEMIC = "Academic"
    PERSUASIVE = "Persuasive"
    JOURNALISTIC = "Journalistic"


class Suggestion(BaseModel):
    """A single edit proposed by the analyzer for one span of the document."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    category: SuggestionType = Field(alias="type")
    original_text: str = Field(alias="originalText")
    suggested_text: str = Field(alias="suggestedText")
    explanation: str = ""
    context: str | None = None  # Preceding text used to pick the right occurrence

    @field_validator("category", mode="before")
    @classmethod
    def _normalize_category(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value


class LearningReview(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    grammar_focus_areas: list[str] = Field(default_factory=list, alias="grammarFocusAreas")
    vocabulary_tips: str = Field(default="", alias="vocabularyTips")
    general_feedback: str = Field(default="", alias="generalFeedback")
    recommended_resources: list[str] = Field(default_factory=list, alias="recommendedResources")


class AnalysisResult(BaseModel):
    """Suggestions plus report scores for one document snapshot.

    ``suggestions`` is in generation order, not document order.
    """

    model_config = ConfigDict(populate_by_name=True)

    suggestions: list[Suggestion] = Field(default_factory=list)
    overall_score: int = Field(default=0, alias="overallScore")
    tone_detected: str = Field(default="", alias="toneDetected")
    readability_score: int = Field(default=0, alias="readabilityScore")
    readability_level: str = Field(default="", alias="readabilityLevel")
    summary: str = ""
    learning_review: LearningReview = Field(default_factory=LearningReview, alias="learningReview")

    def get(self, suggestion_id: str) -> Suggestion | None:
        for s in self.suggestions:
            if s.id == suggestion_id:
                return s
        return None

    def without(self, ids) -> AnalysisResult:
        """Return a copy with the given suggestion ids removed."""
        drop = set(ids)
        return self.model_copy(
            update={"suggestions": [s for s in self.suggestions if s.id not in drop]}
        )
