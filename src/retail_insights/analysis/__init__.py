"""Cross-datasource joins, correlations, and comparison series.

Each module combines sales with weather and event rows into structures the
dashboard API can return directly. This is the domain logic layer.

Dependency rule: analysis/ works on ``schemas`` rows and its own dataclasses.
It never fetches data itself; the one exception is
``comparison.fetch_previous_year_totals``, which takes an injected gateway.

Modules:
  - conditions: weather-condition and weekday classification
  - daily: sales + weather + events -> one DailyAggregate per date
  - correlation: day-of-week, Pearson weather, rain and event factors
  - heatmap: weekday x weather grid of normalized average sales
  - comparison: previous-day / previous-year series
  - summary: strongest factors, average daily sales
  - serialization: camelCase dicts for JSON output

Adding a factor
---------------
1. Write a pure function in ``correlation.py`` taking
   ``Sequence[DailyAggregate]`` and returning ``CorrelationResult`` objects.
2. Clamp the score to [-1, 1] and pick a fixed significance level.
3. Add it to ``compute_correlations`` and test it in
   ``tests/test_correlation.py``.
"""

from retail_insights.analysis.comparison import (
    build_comparison_series,
    fetch_previous_year_totals,
)
from retail_insights.analysis.correlation import compute_correlations, pearson_correlation
from retail_insights.analysis.daily import build_daily_aggregates, sales_totals_by_date
from retail_insights.analysis.heatmap import build_heatmap
from retail_insights.analysis.models import (
    AnalysisSummary,
    ComparisonRow,
    CorrelationResult,
    CorrelationStats,
    DailyAggregate,
    HeatmapCell,
)
from retail_insights.analysis.serialization import stats_to_dict
from retail_insights.analysis.summary import summarize

__all__ = [
    "AnalysisSummary",
    "ComparisonRow",
    "CorrelationResult",
    "CorrelationStats",
    "DailyAggregate",
    "HeatmapCell",
    "build_comparison_series",
    "build_daily_aggregates",
    "build_heatmap",
    "compute_correlations",
    "fetch_previous_year_totals",
    "pearson_correlation",
    "sales_totals_by_date",
    "stats_to_dict",
    "summarize",
]
