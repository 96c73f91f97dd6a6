"""Tests for the weekday x weather heatmap."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from retail_insights.analysis.conditions import day_of_week
from retail_insights.analysis.heatmap import build_heatmap
from retail_insights.analysis.models import DailyAggregate


def _daily(day: date, sales: float, condition: str | None = None) -> DailyAggregate:
    return DailyAggregate(
        date=day,
        total_sales=sales,
        total_footfall=0,
        total_transactions=0,
        day_of_week=day_of_week(day),
        weather_condition=condition,
    )


MONDAY = date(2024, 1, 1)


class TestBuildHeatmap:
    """Test cell grouping and normalization."""

    def test_empty(self) -> None:
        assert build_heatmap([]) == []

    def test_values_relative_to_overall_mean(self) -> None:
        days = [
            _daily(MONDAY, 150, "Sunny"),
            _daily(MONDAY + timedelta(days=7), 150, "晴れ"),
            _daily(MONDAY + timedelta(days=1), 50, "Rain"),
            _daily(MONDAY + timedelta(days=2), 50, "Cloudy"),
        ]

        cells = build_heatmap(days)

        monday = next(c for c in cells if c.x == "Mon")
        assert monday.y == "sunny"
        assert monday.count == 2
        assert monday.value == pytest.approx(1.5)
        assert monday.tooltip == "Monday, sunny: average sales 150 (2 days)"

        tuesday = next(c for c in cells if c.x == "Tue")
        assert (tuesday.y, tuesday.value) == ("rainy", pytest.approx(0.5))

    def test_counts_match_days(self) -> None:
        conditions = ["Sunny", "Partly cloudy", "Rain", None, "Snow", "晴時々曇"]
        days = [
            _daily(MONDAY + timedelta(days=i), 100 + i * 10, conditions[i % len(conditions)])
            for i in range(20)
        ]

        cells = build_heatmap(days)

        assert sum(c.count for c in cells) == len(days)
        assert all(c.value >= 0 for c in cells)
        assert len({(c.x, c.y) for c in cells}) == len(cells)

    def test_missing_weather_goes_to_other(self) -> None:
        days = [_daily(MONDAY + timedelta(days=i), 100) for i in range(7)]
        cells = build_heatmap(days)
        assert {c.y for c in cells} == {"other"}
        assert len(cells) == 7

    def test_cell_order(self) -> None:
        days = [
            _daily(MONDAY, 100, "Rain"),
            _daily(MONDAY, 100, "Sunny"),
            _daily(MONDAY - timedelta(days=1), 100, "Cloudy"),
        ]
        cells = build_heatmap(days)
        assert [(c.x, c.y) for c in cells] == [
            ("Sun", "cloudy"),
            ("Mon", "sunny"),
            ("Mon", "rainy"),
        ]

    def test_zero_overall_sales(self) -> None:
        days = [_daily(MONDAY + timedelta(days=i), 0, "Sunny") for i in range(3)]
        assert all(c.value == 0 for c in build_heatmap(days))

    def test_negative_average_floors_at_zero(self) -> None:
        days = [
            _daily(MONDAY, -50, "Rain"),
            _daily(MONDAY + timedelta(days=1), 250, "Sunny"),
        ]
        rainy = next(c for c in build_heatmap(days) if c.y == "rainy")
        assert rainy.value == 0
