"""Derived analysis entities and constants."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date

    from retail_insights.schemas import EventRecord

# Minimum number of days before any correlation is attempted
MIN_SAMPLE_SIZE = 3

# Heuristic significance levels (fixed constants, not p-values)
SIGNIFICANCE_HIGH = 0.95
SIGNIFICANCE_STRONG = 0.9
SIGNIFICANCE_MODERATE = 0.8
SIGNIFICANCE_WEAK = 0.7
SIGNIFICANCE_LOW = 0.5
SIGNIFICANCE_NONE = 0.0


@dataclass
class DailyAggregate:
    """Sales, weather and events for one calendar date."""

    date: date
    total_sales: float
    total_footfall: int
    total_transactions: int
    day_of_week: int  # 0 = Sunday .. 6 = Saturday
    temperature: float | None = None
    humidity: float | None = None
    precipitation: float | None = None
    weather_condition: str | None = None
    is_rainy: bool = False
    is_sunny: bool = False
    has_event: bool = False
    events: list[EventRecord] = field(default_factory=list)


@dataclass
class CorrelationResult:
    """Association between daily sales and one context factor."""

    factor: str
    correlation: float
    significance: float
    sample_size: int
    description: str


@dataclass
class HeatmapCell:
    """Average sales ratio for one weekday x weather bucket."""

    x: str
    y: str
    value: float
    count: int
    tooltip: str


@dataclass
class ComparisonRow:
    """Sales for a date next to the previous day and the previous year."""

    date: date
    current: float
    previous_day: float
    previous_year: float
    day_of_week: str
    weather: str | None = None
    has_event: bool | None = None


@dataclass
class AnalysisSummary:
    """Headline numbers for a correlation analysis."""

    strongest_positive: CorrelationResult | None
    strongest_negative: CorrelationResult | None
    total_analyzed_days: int
    average_daily_sales: float


@dataclass
class CorrelationStats:
    """Everything one analysis call produces."""

    correlations: list[CorrelationResult] = field(default_factory=list)
    heatmap_data: list[HeatmapCell] = field(default_factory=list)
    comparison_data: list[ComparisonRow] = field(default_factory=list)
    summary: AnalysisSummary = field(
        default_factory=lambda: AnalysisSummary(None, None, 0, 0.0)
    )
