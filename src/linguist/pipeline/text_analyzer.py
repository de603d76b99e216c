"""Text analyzer - asks the LLM for edit suggestions and a writing report."""

from __future__ import annotations

import logging
import time

from pydantic import ValidationError

from linguist.clients.llm_client import LLMClient
from linguist.models.suggestion import (
    AnalysisResult,
    LearningReview,
    Suggestion,
    ToneTarget,
)

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
You are a meticulous writing coach. You review a draft for grammar, clarity,
tone, engagement, strategy and formatting, and propose concrete edits.

Respond with a single JSON object only:
{
  "suggestions": [
    {
      "type": "GRAMMAR|CLARITY|TONE|ENGAGEMENT|STRATEGIC|FORMATTING",
      "originalText": "exact text copied from the draft",
      "suggestedText": "replacement text",
      "explanation": "one sentence",
      "context": "a few words that come right before originalText"
    }
  ],
  "overallScore": 0-100,
  "toneDetected": "string",
  "readabilityScore": 0-100,
  "readabilityLevel": "string",
  "summary": "one sentence",
  "learningReview": {
    "grammarFocusAreas": ["..."],
    "vocabularyTips": "string",
    "generalFeedback": "string",
    "recommendedResources": ["..."]
  }
}

Rules:
- originalText must be copied verbatim from the draft, as short as possible
  while still unique.
- context is only needed when originalText occurs more than once or is very
  short; copy it verbatim too.
- Never propose two edits for overlapping text."""

JOURNALISTIC_INSTRUCTION = (
    "JOURNALISTIC: Adhere strictly to AP Style. Focus on the 'Inverted Pyramid', "
    "use active voice, and eliminate editorializing."
)

_REPORT_TEXT_FIELDS = ("toneDetected", "readabilityLevel", "summary")
_REPORT_SCORE_FIELDS = ("overallScore", "readabilityScore")


def tone_instruction(tone: ToneTarget) -> str:
    if tone is ToneTarget.JOURNALISTIC:
        return JOURNALISTIC_INSTRUCTION
    return tone.value


class TextAnalyzer:
    """Produce an AnalysisResult for a draft and a target tone."""

    def __init__(self, llm: LLMClient, model: str | None = None):
        self.llm = llm
        self.model = model

    async def analyze(
        self,
        text: str,
        tone: ToneTarget = ToneTarget.PROFESSIONAL,
    ) -> AnalysisResult:
        if not text or not text.strip():
            raise ValueError("Cannot analyze empty text")

        prompt = f"""Analyze this text for grammar, clarity, and tone (Target: {tone_instruction(tone)}).

TEXT:
\"\"\"
{text}
\"\"\"

Respond with the JSON object only."""

        data = await self.llm.generate_json(
            prompt=prompt,
            system=SYSTEM_PROMPT,
            model=self.model,
        )
        if not isinstance(data, dict):
            raise ValueError(f"Expected dict from LLM, got {type(data).__name__}")
        return self._parse_result(data, id_prefix=f"sug-{int(time.time() * 1000)}")

    @staticmethod
    def _parse_result(data: dict, id_prefix: str) -> AnalysisResult:
        """Build an AnalysisResult, dropping suggestions that fail validation."""
        raw_suggestions = data.get("suggestions") or []
        if not isinstance(raw_suggestions, list):
            raw_suggestions = []

        suggestions: list[Suggestion] = []
        for i, item in enumerate(raw_suggestions):
            if not isinstance(item, dict):
                continue
            try:
                suggestions.append(Suggestion(**{**item, "id": f"{id_prefix}-{i}"}))
            except ValidationError:
                logger.warning("Dropping malformed suggestion %d: %.120r", i, item)
                continue

        review = data.get("learningReview") or data.get("learning_review") or {}
        try:
            learning_review = LearningReview(**review) if isinstance(review, dict) else LearningReview()
        except ValidationError:
            logger.warning("Dropping malformed learning review")
            learning_review = LearningReview()

        report = {k: data[k] for k in _REPORT_TEXT_FIELDS if isinstance(data.get(k), str)}
        for k in _REPORT_SCORE_FIELDS:
            if isinstance(data.get(k), (int, float)):
                report[k] = max(0, min(100, round(data[k])))
        result = AnalysisResult(
            suggestions=suggestions,
            learning_review=learning_review,
            **report,
        )
        logger.info(
            "Analysis: %d suggestions (%s)",
            len(suggestions),
            ", ".join(sorted({s.category.value for s in suggestions})) or "none",
        )
        return result

