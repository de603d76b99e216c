"""Tests for the cost calculator."""

from __future__ import annotations

import pytest

from linguist.logging.cost_calculator import (
    MODEL_PRICING,
    TAVILY_COST_PER_SEARCH,
    calculate_cost,
)

HAIKU = "claude-haiku-4-5-20251001"
SONNET = "claude-sonnet-4-5-20250929"


class TestCostCalculator:
    def test_empty(self):
        assert calculate_cost([]) == 0.0

    def test_haiku_one_million_each(self):
        assert calculate_cost([(HAIKU, 1_000_000, 1_000_000)]) == pytest.approx(6.00)

    def test_sonnet_one_million_each(self):
        assert calculate_cost([(SONNET, 1_000_000, 1_000_000)]) == pytest.approx(18.00)

    def test_search_only(self):
        assert calculate_cost([], search_count=3) == pytest.approx(3 * TAVILY_COST_PER_SEARCH)

    def test_mixed_calls_and_searches(self):
        calls = [(HAIKU, 2000, 1000), (SONNET, 1000, 500)]
        expected = (
            (2000 * 1.00 + 1000 * 5.00) / 1_000_000
            + (1000 * 3.00 + 500 * 15.00) / 1_000_000
            + 2 * TAVILY_COST_PER_SEARCH
        )
        assert calculate_cost(calls, search_count=2) == pytest.approx(expected)

    def test_unknown_model_is_free(self):
        assert calculate_cost([("some-other-model", 10_000, 10_000)]) == 0.0

    def test_pricing_covers_configured_models(self):
        assert HAIKU in MODEL_PRICING
        assert SONNET in MODEL_PRICING
