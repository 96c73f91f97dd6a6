"""Tests for the summary reducer."""

from __future__ import annotations

import math
from datetime import date

from retail_insights.analysis.models import CorrelationResult, DailyAggregate
from retail_insights.analysis.summary import summarize


def _result(factor: str, correlation: float) -> CorrelationResult:
    return CorrelationResult(
        factor=factor,
        correlation=correlation,
        significance=0.8,
        sample_size=5,
        description="",
    )


def _daily(sales: float) -> DailyAggregate:
    return DailyAggregate(
        date=date(2024, 1, 1),
        total_sales=sales,
        total_footfall=0,
        total_transactions=0,
        day_of_week=1,
    )


class TestSummarize:
    """Test strongest-factor selection and averages."""

    def test_picks_extremes(self) -> None:
        correlations = [
            _result("Temperature", 0.4),
            _result("Day of week: Saturday", 0.7),
            _result("Rainy weather", -0.3),
            _result("Humidity", -0.6),
            _result("Event", 0.0),
        ]

        summary = summarize(correlations, [_daily(100), _daily(200), _daily(300)])

        assert summary.strongest_positive.factor == "Day of week: Saturday"
        assert summary.strongest_negative.factor == "Humidity"
        assert summary.total_analyzed_days == 3
        assert summary.average_daily_sales == 200

    def test_first_wins_on_ties(self) -> None:
        summary = summarize([_result("A", 0.5), _result("B", 0.5)], [_daily(1)])
        assert summary.strongest_positive.factor == "A"

    def test_zero_is_neither(self) -> None:
        summary = summarize([_result("Event", 0.0)], [_daily(1)])
        assert summary.strongest_positive is None
        assert summary.strongest_negative is None

    def test_empty(self) -> None:
        summary = summarize([], [])
        assert summary.strongest_positive is None
        assert summary.strongest_negative is None
        assert summary.total_analyzed_days == 0
        assert summary.average_daily_sales == 0

    def test_ignores_nan(self) -> None:
        summary = summarize([_result("Broken", math.nan), _result("Temp", -0.2)], [_daily(1)])
        assert summary.strongest_positive is None
        assert summary.strongest_negative.factor == "Temp"
