"""
Prefect flow for running a correlation analysis and saving the result.

Reads rows through the configured gateway (local snapshots or Supabase),
runs the analysis under a hard timeout, checks the response-time SLA and
writes the result to ``derived/correlation/`` in the data store.

Run locally:
    python -m retail_insights.flows.analyze 2024-01-01 2024-03-31

Run with Prefect dashboard:
    prefect server start &
    python -m retail_insights.flows.analyze 2024-01-01 2024-03-31
"""

from __future__ import annotations

import logging
import re
import sys
import time
from typing import TYPE_CHECKING, Any

from prefect import flow, task
from prefect.cache_policies import NO_CACHE

from retail_insights.analysis import CorrelationStats, stats_to_dict
from retail_insights.config import get_settings
from retail_insights.datasources.supabase import SupabaseGateway
from retail_insights.gateway import SnapshotGateway
from retail_insights.schemas import CorrelationFilters
from retail_insights.service import CorrelationService, validate_period
from retail_insights.store import DataStore

if TYPE_CHECKING:
    from pathlib import Path

    from retail_insights.config import Settings
    from retail_insights.gateway import DataAccessGateway

logger = logging.getLogger(__name__)

# Data store rooted at the configured data directory
store = DataStore(get_settings().data_dir)

# Subdirectory of derived/ for saved analysis results
RESULTS_DIR = "correlation"


def create_gateway(settings: Settings) -> DataAccessGateway:
    """Build the gateway selected by ``settings.data_source``."""
    if settings.data_source == "supabase":
        if not settings.supabase_url or not settings.supabase_key:
            msg = "data_source=supabase requires supabase_url and supabase_key"
            raise ValueError(msg)
        return SupabaseGateway(settings.supabase_url, settings.supabase_key)
    return SnapshotGateway(store)


def result_path(filters: CorrelationFilters) -> Path:
    """Store path for a result, e.g. ``derived/correlation/2024-01-01_2024-01-31.json``."""
    parts = [filters.start_date.isoformat(), filters.end_date.isoformat()]
    for value in (filters.store_id, filters.department, filters.category):
        if value:
            parts.append(re.sub(r"[^A-Za-z0-9-]+", "-", value).strip("-") or "x")
    return store.derived_path(RESULTS_DIR, f"{'_'.join(parts)}.json")


@task(name="run-correlation-analysis", cache_policy=NO_CACHE)
def run_analysis(filters: CorrelationFilters, gateway: DataAccessGateway) -> CorrelationStats:
    """Fetch rows and compute correlations, heatmap, comparison and summary."""
    return CorrelationService(gateway).analyze_correlations(filters)


@task(name="save-analysis", cache_policy=NO_CACHE)
def save_analysis(
    result: dict[str, Any],
    filters: CorrelationFilters,
    processing_ms: float,
    within_sla: bool,
) -> Path:
    """Save an analysis result via store."""
    return store.write(
        result_path(filters),
        result,
        source="correlation-analysis",
        filters=filters.model_dump(mode="json"),
        processing_ms=round(processing_ms, 1),
        within_sla=within_sla,
    )


@flow(name="correlation-analysis", log_prints=True)
def analyze_all(
    start_date: str,
    end_date: str,
    store_id: str | None = None,
    department: str | None = None,
    category: str | None = None,
) -> dict[str, Any]:
    """
    Run one correlation analysis and persist it.

    This is the main Prefect flow for the analytics engine. Period limits
    are checked before any data is fetched; the analysis task fails if it
    runs longer than ``analysis_timeout_seconds``.
    """
    settings = get_settings()
    filters = CorrelationFilters(
        start_date=start_date,
        end_date=end_date,
        store_id=store_id,
        department=department,
        category=category,
    )
    validate_period(filters, settings)

    print(f"Analyzing {filters.start_date} to {filters.end_date} ({settings.data_source})...")
    gateway = create_gateway(settings)

    started = time.perf_counter()
    stats = run_analysis.with_options(timeout_seconds=settings.analysis_timeout_seconds)(
        filters, gateway
    )
    processing_ms = (time.perf_counter() - started) * 1000
    within_sla = processing_ms <= settings.sla_ms
    if not within_sla:
        logger.warning(
            "Correlation analysis SLA exceeded: %.0fms > %dms (%d comparison rows)",
            processing_ms,
            settings.sla_ms,
            len(stats.comparison_data),
        )

    result = stats_to_dict(stats)
    output_path = save_analysis(result, filters, processing_ms, within_sla)
    print(f"Saved analysis of {stats.summary.total_analyzed_days} days to {output_path}")

    return {
        "output": str(output_path),
        "processing_ms": processing_ms,
        "within_sla": within_sla,
        "total_days": stats.summary.total_analyzed_days,
        "correlations": len(stats.correlations),
        "result": result,
    }


if __name__ == "__main__":
    summary = analyze_all(*sys.argv[1:3])
    print(f"Flow complete: {summary['output']} in {summary['processing_ms']:.0f}ms")
