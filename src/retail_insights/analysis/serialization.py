"""JSON serialization helpers for analysis results.

Keys use the camelCase names the dashboard API returns.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from retail_insights.analysis.models import (
        AnalysisSummary,
        ComparisonRow,
        CorrelationResult,
        CorrelationStats,
        HeatmapCell,
    )


def correlation_to_dict(result: CorrelationResult) -> dict[str, Any]:
    return {
        "factor": result.factor,
        "correlation": result.correlation,
        "significance": result.significance,
        "sampleSize": result.sample_size,
        "description": result.description,
    }


def heatmap_cell_to_dict(cell: HeatmapCell) -> dict[str, Any]:
    return {
        "x": cell.x,
        "y": cell.y,
        "value": cell.value,
        "count": cell.count,
        "tooltip": cell.tooltip,
    }


def comparison_row_to_dict(row: ComparisonRow) -> dict[str, Any]:
    return {
        "date": row.date.isoformat(),
        "current": row.current,
        "previousDay": row.previous_day,
        "previousYear": row.previous_year,
        "dayOfWeek": row.day_of_week,
        "weather": row.weather,
        "hasEvent": row.has_event,
    }


def summary_to_dict(summary: AnalysisSummary) -> dict[str, Any]:
    positive = summary.strongest_positive
    negative = summary.strongest_negative
    return {
        "strongestPositive": correlation_to_dict(positive) if positive else None,
        "strongestNegative": correlation_to_dict(negative) if negative else None,
        "totalAnalyzedDays": summary.total_analyzed_days,
        "averageDailySales": summary.average_daily_sales,
    }


def stats_to_dict(stats: CorrelationStats) -> dict[str, Any]:
    """Serialize a full analysis result to a JSON-compatible dict.

    Args:
        stats: Result of ``CorrelationService.analyze_correlations``.

    Returns:
        Dict with ``correlations``, ``heatmapData``, ``comparisonData``
        and ``summary`` keys.
    """
    return {
        "correlations": [correlation_to_dict(c) for c in stats.correlations],
        "heatmapData": [heatmap_cell_to_dict(c) for c in stats.heatmap_data],
        "comparisonData": [comparison_row_to_dict(r) for r in stats.comparison_data],
        "summary": summary_to_dict(stats.summary),
    }
