"""Reduce correlation results to headline numbers."""

from __future__ import annotations

import math
import statistics
from typing import TYPE_CHECKING

from retail_insights.analysis.models import AnalysisSummary

if TYPE_CHECKING:
    from collections.abc import Sequence

    from retail_insights.analysis.models import CorrelationResult, DailyAggregate


def summarize(
    correlations: Sequence[CorrelationResult],
    aggregates: Sequence[DailyAggregate],
) -> AnalysisSummary:
    """Pick the strongest positive and negative factors and average daily sales."""
    strongest_positive: CorrelationResult | None = None
    strongest_negative: CorrelationResult | None = None

    for corr in correlations:
        if not math.isfinite(corr.correlation):
            continue
        if corr.correlation > 0 and (
            strongest_positive is None or corr.correlation > strongest_positive.correlation
        ):
            strongest_positive = corr
        if corr.correlation < 0 and (
            strongest_negative is None or corr.correlation < strongest_negative.correlation
        ):
            strongest_negative = corr

    average = statistics.fmean(d.total_sales for d in aggregates) if aggregates else 0.0

    return AnalysisSummary(
        strongest_positive=strongest_positive,
        strongest_negative=strongest_negative,
        total_analyzed_days=len(aggregates),
        average_daily_sales=average,
    )
