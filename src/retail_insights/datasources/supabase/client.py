"""Supabase (PostgREST) client constants and query helpers.

API docs: https://postgrest.org/en/stable/references/api/tables_views.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from retail_insights.schemas import DateRange

REST_PATH = "/rest/v1"

SALES_TABLE = "sales"
WEATHER_TABLE = "ext_weather_daily"
EVENTS_TABLE = "ext_events"

# PostgREST caps responses at 1000 rows by default; page through with offset
PAGE_SIZE = 1000

# Every table has a UUID primary key; it breaks ties between rows of one date
# so limit/offset pages never overlap or skip rows
ORDER_BY = "date.asc,id.asc"


def table_url(base_url: str, table: str) -> str:
    """REST endpoint for a table, e.g. ``https://x.supabase.co/rest/v1/sales``."""
    return f"{base_url.rstrip('/')}{REST_PATH}/{table}"


def auth_headers(api_key: str) -> dict[str, str]:
    return {"apikey": api_key, "Authorization": f"Bearer {api_key}"}


def date_range_params(
    date_range: DateRange,
    **equals: str | None,
) -> list[tuple[str, str]]:
    """Build query params for ``date`` between the range bounds (inclusive).

    Keyword arguments become ``column=eq.value`` filters; None values are
    skipped.
    """
    params = [
        ("select", "*"),
        ("date", f"gte.{date_range.start.isoformat()}"),
        ("date", f"lte.{date_range.end.isoformat()}"),
        ("order", ORDER_BY),
    ]
    params.extend((column, f"eq.{value}") for column, value in equals.items() if value is not None)
    return params
