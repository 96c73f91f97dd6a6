"""Weekday x weather heatmap of normalized average sales."""

from __future__ import annotations

import statistics
from typing import TYPE_CHECKING

from retail_insights.analysis.conditions import (
    WEATHER_BUCKETS,
    WEEKDAY_LABELS,
    WEEKDAY_NAMES,
    classify_condition,
)
from retail_insights.analysis.models import HeatmapCell

if TYPE_CHECKING:
    from collections.abc import Sequence

    from retail_insights.analysis.models import DailyAggregate


def build_heatmap(aggregates: Sequence[DailyAggregate]) -> list[HeatmapCell]:
    """Average sales per (weekday, weather bucket) as a ratio to the overall mean.

    A value of 1.0 means the cell sells like an average day. Each day lands
    in exactly one bucket; cells with no matching day are omitted.

    Args:
        aggregates: Output of ``build_daily_aggregates``.

    Returns:
        Cells ordered Sunday..Saturday, then sunny, cloudy, rainy, other.
    """
    if not aggregates:
        return []

    overall = statistics.fmean(d.total_sales for d in aggregates)

    grid: dict[tuple[int, str], list[float]] = {}
    for daily in aggregates:
        key = (daily.day_of_week, classify_condition(daily.weather_condition))
        grid.setdefault(key, []).append(daily.total_sales)

    cells: list[HeatmapCell] = []
    for day in range(7):
        for bucket in WEATHER_BUCKETS:
            values = grid.get((day, bucket))
            if not values:
                continue
            avg_sales = statistics.fmean(values)
            value = max(0.0, avg_sales / overall) if overall > 0 else 0.0
            cells.append(
                HeatmapCell(
                    x=WEEKDAY_LABELS[day],
                    y=bucket,
                    value=value,
                    count=len(values),
                    tooltip=(
                        f"{WEEKDAY_NAMES[day]}, {bucket}: average sales "
                        f"{avg_sales:,.0f} ({len(values)} days)"
                    ),
                )
            )
    return cells
