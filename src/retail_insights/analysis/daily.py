"""Join sales, weather and event rows into one record per sales date.

Analysis is sales-date driven: a date with weather or events but no sales
rows never produces an aggregate.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from retail_insights.analysis import conditions
from retail_insights.analysis.models import DailyAggregate

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import date

    from retail_insights.schemas import EventRecord, SalesRecord, WeatherRecord


def build_daily_aggregates(
    sales: Iterable[SalesRecord],
    weather: Iterable[WeatherRecord] = (),
    events: Iterable[EventRecord] = (),
) -> list[DailyAggregate]:
    """Aggregate sales per date and attach that date's weather and events.

    Args:
        sales: Sales rows, already filtered by date range/store/department.
        weather: Weather rows; if a date has several, the last one wins.
        events: Event rows; every row of a date is attached.

    Returns:
        One DailyAggregate per distinct sales date, ordered by date.
    """
    by_date: dict[date, DailyAggregate] = {}
    for sale in sales:
        daily = by_date.get(sale.date)
        if daily is None:
            daily = DailyAggregate(
                date=sale.date,
                total_sales=0.0,
                total_footfall=0,
                total_transactions=0,
                day_of_week=conditions.day_of_week(sale.date),
            )
            by_date[sale.date] = daily
        daily.total_sales += sale.revenue_ex_tax or 0
        daily.total_footfall += sale.footfall or 0
        daily.total_transactions += sale.transactions or 0

    for record in weather:
        daily = by_date.get(record.date)
        if daily is None:
            continue
        daily.temperature = record.temp_avg
        daily.humidity = record.humidity
        daily.precipitation = record.precipitation
        daily.weather_condition = record.condition
        daily.is_rainy = conditions.is_rainy(record.condition)
        daily.is_sunny = conditions.is_sunny(record.condition)

    for event in events:
        daily = by_date.get(event.date)
        if daily is None:
            continue
        daily.events.append(event)
        daily.has_event = True

    return [by_date[d] for d in sorted(by_date)]


def sales_totals_by_date(sales: Iterable[SalesRecord]) -> dict[date, float]:
    """Total revenue per date, using the same grouping as the aggregates."""
    return {daily.date: daily.total_sales for daily in build_daily_aggregates(sales)}
