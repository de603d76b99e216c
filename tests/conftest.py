"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from linguist.clients.llm_client import LLMClient, LLMResponse
from linguist.clients.search_client import SearchClient
from linguist.models.suggestion import AnalysisResult, Suggestion, SuggestionType


def _suggestion(
    original: str,
    suggested: str,
    id: str = "s1",
    category: SuggestionType = SuggestionType.GRAMMAR,
    context: str | None = None,
    explanation: str = "",
) -> Suggestion:
    return Suggestion(
        id=id,
        category=category,
        original_text=original,
        suggested_text=suggested,
        explanation=explanation,
        context=context,
    )


@pytest.fixture
def sample_document() -> str:
    return (
        "Welcome to Linguist! This are a demo text to show you how the app work. "
        "It include some grammar mistaks and tone issues.\n"
        "\n"
        "Usually, when you writes an email to a client, you want to be professional."
    )


@pytest.fixture
def sample_suggestions() -> list[Suggestion]:
    return [
        _suggestion("This are", "This is", id="sug-1", explanation="Subject-verb agreement"),
        _suggestion("the app work", "the app works", id="sug-2", explanation="Third person singular"),
        _suggestion("mistaks", "mistakes", id="sug-3", explanation="Spelling"),
        _suggestion("you writes", "you write", id="sug-4", explanation="Subject-verb agreement"),
        _suggestion(
            "you want to be professional",
            "professionalism matters",
            id="sug-5",
            category=SuggestionType.TONE,
            explanation="More direct",
        ),
    ]


@pytest.fixture
def sample_analysis(sample_suggestions) -> AnalysisResult:
    return AnalysisResult(
        suggestions=sample_suggestions,
        overall_score=72,
        tone_detected="Casual",
        readability_score=80,
        readability_level="Grade 8",
        summary="A friendly introduction with several agreement errors.",
    )


@pytest.fixture
def analyzer_payload() -> dict:
    """A JSON object shaped like the analyzer's LLM reply."""
    return {
        "suggestions": [
            {
                "type": "GRAMMAR",
                "originalText": "This are",
                "suggestedText": "This is",
                "explanation": "Subject-verb agreement",
                "context": "Welcome to Linguist!",
            },
            {
                "type": "clarity",
                "originalText": "the app work",
                "suggestedText": "the app works",
                "explanation": "Third person singular",
            },
        ],
        "overallScore": 72,
        "toneDetected": "Casual",
        "readabilityScore": 80.4,
        "readabilityLevel": "Grade 8",
        "summary": "A friendly introduction.",
        "learningReview": {
            "grammarFocusAreas": ["Subject-verb agreement"],
            "vocabularyTips": "Prefer precise verbs.",
            "generalFeedback": "Proofread before sending.",
            "recommendedResources": ["Purdue OWL"],
        },
    }


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Create a mock LLM client."""
    client = AsyncMock(spec=LLMClient)
    client.generate = AsyncMock(
        return_value=LLMResponse(text="{}", input_tokens=100, output_tokens=50)
    )
    client.generate_json = AsyncMock(return_value={})
    return client


@pytest.fixture
def mock_search_client() -> SearchClient:
    """Create a mock search client."""
    client = AsyncMock(spec=SearchClient)
    client.search_phrase = AsyncMock(return_value=[])
    client.search = AsyncMock(return_value=[])
    return client
