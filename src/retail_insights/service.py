"""
Correlation analysis entry point.

``CorrelationService`` wires an injected data access gateway to the pure
analysis functions:

    fetch (sales | weather | events | previous-year sales, in parallel)
      -> build_daily_aggregates
      -> compute_correlations, build_heatmap, build_comparison_series
      -> summarize

A failed sales, weather or event fetch aborts the analysis with an
``UpstreamFetchError`` as soon as it fails, without waiting for the other
fetches. A failed previous-year fetch only zeroes the
previous-year column of the comparison series.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import TYPE_CHECKING, Any

from retail_insights.analysis import (
    CorrelationStats,
    build_comparison_series,
    build_daily_aggregates,
    build_heatmap,
    compute_correlations,
    fetch_previous_year_totals,
    summarize,
)
from retail_insights.analysis.conditions import WEATHER_BUCKETS
from retail_insights.analysis.correlation import CONTINUOUS_FACTORS
from retail_insights.exceptions import FilterValidationError, UpstreamFetchError

if TYPE_CHECKING:
    from collections.abc import Callable
    from concurrent.futures import Future

    from retail_insights.config import Settings
    from retail_insights.gateway import DataAccessGateway
    from retail_insights.schemas import CorrelationFilters

logger = logging.getLogger(__name__)

# sales, weather, events, previous-year sales
FETCH_WORKERS = 4


def _primary_results(futures: dict[str, Future[Any]]) -> dict[str, Any]:
    """Wait for the primary fetches, failing on the first one that raises.

    Args:
        futures: Source name ("sales", "weather", "event") -> fetch future.

    Raises:
        UpstreamFetchError: Naming the failed source, as soon as any fetch
            fails; the other fetches are not waited for.
    """
    done, _ = wait(futures.values(), return_when=FIRST_EXCEPTION)
    for source, future in futures.items():
        exc = future.exception() if future in done else None
        if exc is not None:
            raise UpstreamFetchError(source, exc) from exc
    return {source: future.result() for source, future in futures.items()}


class CorrelationService:
    """Runs correlation analyses against one data access gateway."""

    def __init__(
        self,
        gateway: DataAccessGateway,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.gateway = gateway
        self.clock = clock

    def analyze_correlations(self, filters: CorrelationFilters) -> CorrelationStats:
        """Analyze how daily sales relate to weekday, weather and events.

        Args:
            filters: Date range (inclusive) and optional store, department
                and category constraints.

        Returns:
            Correlations, heatmap cells, comparison rows and a summary.

        Raises:
            UpstreamFetchError: The sales, weather or event fetch failed.
        """
        started = self.clock()
        date_range = filters.date_range

        pool = ThreadPoolExecutor(max_workers=FETCH_WORKERS, thread_name_prefix="correlation-fetch")
        try:
            primary = {
                "sales": pool.submit(
                    self.gateway.fetch_sales,
                    date_range,
                    store_id=filters.store_id,
                    department=filters.department,
                    category=filters.category,
                ),
                "weather": pool.submit(self.gateway.fetch_weather, date_range),
                "event": pool.submit(self.gateway.fetch_events, date_range),
            }
            previous_year_future = pool.submit(fetch_previous_year_totals, self.gateway, filters)

            fetched = _primary_results(primary)

            daily = build_daily_aggregates(fetched["sales"], fetched["weather"], fetched["event"])
            correlations = compute_correlations(daily)
            heatmap = build_heatmap(daily)
            comparison = build_comparison_series(daily, previous_year_future.result())
        finally:
            # Fetches still running after a failure finish in the background
            pool.shutdown(wait=False, cancel_futures=True)

        summary = summarize(correlations, daily)

        elapsed_ms = (self.clock() - started) * 1000
        logger.info(
            "Correlation analysis completed in %.0fms (%d days, %d factors)",
            elapsed_ms,
            len(daily),
            len(correlations),
        )

        return CorrelationStats(
            correlations=correlations,
            heatmap_data=heatmap,
            comparison_data=comparison,
            summary=summary,
        )

    def measure_performance(self, filters: CorrelationFilters) -> dict[str, Any]:
        """Run one analysis and report its response time and output size."""
        started = self.clock()
        stats = self.analyze_correlations(filters)
        return {
            "response_time_ms": (self.clock() - started) * 1000,
            "data_size": len(stats.comparison_data),
        }


def validate_period(filters: CorrelationFilters, settings: Settings) -> None:
    """Reject analysis periods outside the configured minimum and maximum.

    Raises:
        FilterValidationError: With one message per violated limit.
    """
    errors: list[str] = []
    if filters.period_days < settings.min_period_days:
        errors.append(f"Analysis period must be at least {settings.min_period_days} days")
    if filters.period_days > settings.max_period_days:
        errors.append(f"Analysis period must be at most {settings.max_period_days} days")
    if errors:
        raise FilterValidationError(errors)


def analysis_config(settings: Settings) -> dict[str, Any]:
    """Describe what the analysis supports and the limits it enforces."""
    return {
        "performance_sla_ms": settings.sla_ms,
        "timeout_seconds": settings.analysis_timeout_seconds,
        "supported_factors": [
            "day_of_week",
            *CONTINUOUS_FACTORS,
            "rainy_weather",
            "event",
            "previous_day",
            "previous_year",
        ],
        "weather_buckets": list(WEATHER_BUCKETS),
        "correlation_methods": [
            "pearson",
            "mean_comparison",
            "heatmap",
        ],
        "limits": {
            "min_period_days": settings.min_period_days,
            "max_period_days": settings.max_period_days,
        },
    }
