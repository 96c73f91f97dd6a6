"""Data access gateway backed by the hosted Supabase database."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from retail_insights.datasources.supabase.client import (
    EVENTS_TABLE,
    PAGE_SIZE,
    SALES_TABLE,
    WEATHER_TABLE,
    auth_headers,
    date_range_params,
    table_url,
)
from retail_insights.gateway import RecordT, parse_rows
from retail_insights.schemas import EventRecord, SalesRecord, WeatherRecord
from retail_insights.services.http import create_session

if TYPE_CHECKING:
    import requests

    from retail_insights.schemas import DateRange


class SupabaseGateway:
    """Reads sales, weather and event rows through the PostgREST API.

    HTTP and connection errors propagate (after the session's own retries)
    so callers never see partial tables. An injected ``session`` must already
    carry the API key headers.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        session: requests.Session | None = None,
        page_size: int = PAGE_SIZE,
    ) -> None:
        self.base_url = base_url
        self.session = session or create_session(headers=auth_headers(api_key))
        self.page_size = page_size

    def _select(self, table: str, params: list[tuple[str, str]]) -> list[dict[str, Any]]:
        """Fetch every row matching ``params``, one page at a time."""
        rows: list[dict[str, Any]] = []
        offset = 0
        while True:
            page_params = [*params, ("limit", str(self.page_size)), ("offset", str(offset))]
            resp = self.session.get(table_url(self.base_url, table), params=page_params)
            resp.raise_for_status()
            page: list[dict[str, Any]] = resp.json()
            rows.extend(page)
            if len(page) < self.page_size:
                return rows
            offset += self.page_size

    def _fetch(
        self, table: str, model: type[RecordT], date_range: DateRange, **equals: str | None
    ) -> list[RecordT]:
        return parse_rows(model, self._select(table, date_range_params(date_range, **equals)))

    def fetch_sales(
        self,
        date_range: DateRange,
        store_id: str | None = None,
        department: str | None = None,
        category: str | None = None,
    ) -> list[SalesRecord]:
        return self._fetch(
            SALES_TABLE,
            SalesRecord,
            date_range,
            store_id=store_id,
            department=department,
            product_category=category,
        )

    def fetch_weather(self, date_range: DateRange) -> list[WeatherRecord]:
        return self._fetch(WEATHER_TABLE, WeatherRecord, date_range)

    def fetch_events(self, date_range: DateRange) -> list[EventRecord]:
        return self._fetch(EVENTS_TABLE, EventRecord, date_range)
