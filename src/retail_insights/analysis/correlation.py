"""Correlate daily sales with calendar, weather and event factors.

Four families of factors are produced:

  - day of week: each weekday's mean sales relative to the overall mean
  - continuous weather (temperature, humidity, precipitation): Pearson r
  - rain: mean sales on rainy days relative to the overall mean
  - events: event-day mean minus non-event-day mean, relative to the overall mean

Relative scores are clamped to [-1, 1] so they share a scale with Pearson r.
Significance values are fixed heuristic levels, not the output of a test.
"""

from __future__ import annotations

import math
import statistics
from typing import TYPE_CHECKING

from retail_insights.analysis.conditions import WEEKDAY_NAMES
from retail_insights.analysis.models import (
    MIN_SAMPLE_SIZE,
    SIGNIFICANCE_HIGH,
    SIGNIFICANCE_LOW,
    SIGNIFICANCE_MODERATE,
    SIGNIFICANCE_NONE,
    SIGNIFICANCE_STRONG,
    SIGNIFICANCE_WEAK,
    CorrelationResult,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from retail_insights.analysis.models import DailyAggregate

#: Aggregate attribute -> factor label for Pearson correlations.
CONTINUOUS_FACTORS = {
    "temperature": "Temperature",
    "humidity": "Humidity",
    "precipitation": "Precipitation",
}

RAIN_FACTOR = "Rainy weather"
EVENT_FACTOR = "Event"

# Sample counts at which the heuristic significance steps up
WEEKDAY_CONFIDENT_SAMPLES = 3
PEARSON_CONFIDENT_SAMPLES = 10
PARTITION_CONFIDENT_SAMPLES = 5


def clamp(value: float, low: float = -1.0, high: float = 1.0) -> float:
    """Clamp to [low, high]; NaN passes through so it can be filtered later."""
    if math.isnan(value):
        return value
    return max(low, min(high, value))


def ieee_divide(numerator: float, denominator: float) -> float:
    """Divide like IEEE 754: x/0 is +/-inf, 0/0 is NaN."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator


def relative_shift(value: float, baseline: float) -> float:
    """Return ``(value - baseline) / baseline``."""
    return ieee_divide(value - baseline, baseline)


def pearson_correlation(x: Sequence[float], y: Sequence[float]) -> float:
    """Pearson product-moment correlation from population sums.

    Returns 0.0 for empty or mismatched input and when either series has
    zero variance.
    """
    n = len(x)
    if n == 0 or n != len(y):
        return 0.0

    sum_x = sum(x)
    sum_y = sum(y)
    sum_xy = sum(a * b for a, b in zip(x, y, strict=True))
    sum_x2 = sum(a * a for a in x)
    sum_y2 = sum(b * b for b in y)

    numerator = n * sum_xy - sum_x * sum_y
    spread = (n * sum_x2 - sum_x * sum_x) * (n * sum_y2 - sum_y * sum_y)
    if spread <= 0:
        return 0.0
    return numerator / math.sqrt(spread)


def _percent_of(ratio: float) -> str:
    return f"{ratio * 100 + 100:.1f}%"


def day_of_week_correlations(aggregates: Sequence[DailyAggregate]) -> list[CorrelationResult]:
    """Each weekday's mean sales as a deviation from the overall mean."""
    sales_by_day: dict[int, list[float]] = {}
    for daily in aggregates:
        sales_by_day.setdefault(daily.day_of_week, []).append(daily.total_sales)

    overall = statistics.fmean(d.total_sales for d in aggregates)

    results: list[CorrelationResult] = []
    for day in range(7):
        values = sales_by_day.get(day)
        if not values:
            continue
        shift = relative_shift(statistics.fmean(values), overall)
        name = WEEKDAY_NAMES[day]
        results.append(
            CorrelationResult(
                factor=f"Day of week: {name}",
                correlation=clamp(shift),
                significance=(
                    SIGNIFICANCE_HIGH
                    if len(values) >= WEEKDAY_CONFIDENT_SAMPLES
                    else SIGNIFICANCE_LOW
                ),
                sample_size=len(values),
                description=f"{name} average sales are {_percent_of(shift)} of the overall average",
            )
        )
    return results


def weather_correlations(aggregates: Sequence[DailyAggregate]) -> list[CorrelationResult]:
    """Pearson r for each continuous weather variable, plus the rain shift."""
    results: list[CorrelationResult] = []

    for attr, label in CONTINUOUS_FACTORS.items():
        present = [d for d in aggregates if getattr(d, attr) is not None]
        if len(present) < MIN_SAMPLE_SIZE:
            continue
        r = pearson_correlation(
            [d.total_sales for d in present],
            [getattr(d, attr) for d in present],
        )
        results.append(
            CorrelationResult(
                factor=label,
                correlation=clamp(r),
                significance=(
                    SIGNIFICANCE_HIGH
                    if len(present) >= PEARSON_CONFIDENT_SAMPLES
                    else SIGNIFICANCE_MODERATE
                ),
                sample_size=len(present),
                description=f"Correlation between {label.lower()} and sales: {r:.3f}",
            )
        )

    rainy = [d.total_sales for d in aggregates if d.is_rainy]
    sunny = [d.total_sales for d in aggregates if d.is_sunny]
    if rainy and sunny:
        overall = statistics.fmean(d.total_sales for d in aggregates)
        shift = relative_shift(statistics.fmean(rainy), overall)
        results.append(
            CorrelationResult(
                factor=RAIN_FACTOR,
                correlation=clamp(shift),
                significance=(
                    SIGNIFICANCE_STRONG
                    if len(rainy) >= PARTITION_CONFIDENT_SAMPLES
                    else SIGNIFICANCE_WEAK
                ),
                sample_size=len(rainy),
                description=f"Sales on rainy days are {_percent_of(shift)} of the average",
            )
        )

    return results


def insufficient_event_data() -> CorrelationResult:
    """Placeholder emitted when every day has events, or none does."""
    return CorrelationResult(
        factor=EVENT_FACTOR,
        correlation=0.0,
        significance=SIGNIFICANCE_NONE,
        sample_size=0,
        description="Not enough event data to compare event and non-event days",
    )


def event_correlation(aggregates: Sequence[DailyAggregate]) -> CorrelationResult:
    """Lift of event days over non-event days, relative to the overall mean."""
    event_sales = [d.total_sales for d in aggregates if d.has_event]
    quiet_sales = [d.total_sales for d in aggregates if not d.has_event]
    if not event_sales or not quiet_sales:
        return insufficient_event_data()

    event_mean = statistics.fmean(event_sales)
    quiet_mean = statistics.fmean(quiet_sales)
    overall = statistics.fmean(d.total_sales for d in aggregates)

    lift = ieee_divide(event_mean - quiet_mean, overall)

    if quiet_mean:
        description = f"Event days average {event_mean / quiet_mean * 100:.1f}% of non-event days"
    else:
        description = "Event days compared with non-event days that had no sales"

    return CorrelationResult(
        factor=EVENT_FACTOR,
        correlation=clamp(lift),
        significance=(
            SIGNIFICANCE_STRONG
            if min(len(event_sales), len(quiet_sales)) >= PARTITION_CONFIDENT_SAMPLES
            else SIGNIFICANCE_WEAK
        ),
        sample_size=len(event_sales),
        description=description,
    )


def compute_correlations(aggregates: Sequence[DailyAggregate]) -> list[CorrelationResult]:
    """Compute every factor correlation for a set of daily aggregates.

    Args:
        aggregates: Output of ``build_daily_aggregates``.

    Returns:
        Day-of-week, weather and event results, in that order. Empty when
        fewer than three days are available. Results whose score is not a
        finite number (malformed upstream values) are dropped.
    """
    if len(aggregates) < MIN_SAMPLE_SIZE:
        return []

    results = [
        *day_of_week_correlations(aggregates),
        *weather_correlations(aggregates),
        event_correlation(aggregates),
    ]
    return [r for r in results if math.isfinite(r.correlation)]
