"""Previous-day and previous-year comparison series.

The previous-year totals come from a second gateway query. That query is
best-effort: when it fails the series is still produced with
``previous_year = 0`` on every row.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING

from retail_insights.analysis.conditions import WEEKDAY_LABELS
from retail_insights.analysis.daily import sales_totals_by_date
from retail_insights.analysis.models import ComparisonRow
from retail_insights.schemas import shift_years

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from datetime import date

    from retail_insights.analysis.models import DailyAggregate
    from retail_insights.gateway import DataAccessGateway
    from retail_insights.schemas import CorrelationFilters

logger = logging.getLogger(__name__)


def fetch_previous_year_totals(
    gateway: DataAccessGateway,
    filters: CorrelationFilters,
) -> dict[date, float]:
    """Daily sales totals for the same filters one calendar year earlier.

    Returns an empty dict (and logs a warning) if the gateway query fails.
    """
    previous = filters.previous_year()
    try:
        sales = gateway.fetch_sales(
            previous.date_range,
            store_id=previous.store_id,
            department=previous.department,
            category=previous.category,
        )
    except Exception as exc:  # noqa: BLE001
        logger.warning(
            "Failed to fetch previous year sales (%s to %s): %s",
            previous.start_date,
            previous.end_date,
            exc,
        )
        return {}
    return sales_totals_by_date(sales)


def build_comparison_series(
    aggregates: Sequence[DailyAggregate],
    previous_year_totals: Mapping[date, float] | None = None,
) -> list[ComparisonRow]:
    """One comparison row per aggregate, sorted by date.

    Args:
        aggregates: Output of ``build_daily_aggregates``.
        previous_year_totals: Date -> total sales for the prior year.
            Missing dates (or a missing mapping) compare against 0.

    Returns:
        Rows with ``previous_day`` taken from the same aggregate set and
        ``previous_year`` from ``previous_year_totals``.
    """
    totals = previous_year_totals or {}
    sales_by_date = {d.date: d.total_sales for d in aggregates}

    rows = [
        ComparisonRow(
            date=daily.date,
            current=daily.total_sales,
            previous_day=sales_by_date.get(daily.date - timedelta(days=1), 0.0),
            previous_year=totals.get(shift_years(daily.date, -1), 0.0),
            day_of_week=WEEKDAY_LABELS[daily.day_of_week],
            weather=daily.weather_condition,
            has_event=daily.has_event,
        )
        for daily in aggregates
    ]
    rows.sort(key=lambda row: row.date)
    return rows
