"""
Data access gateway: where the analysis engine gets its rows.

The engine never talks to a database directly. It is handed an object
implementing ``DataAccessGateway`` and calls its three fetch methods with
an inclusive date range (and, for sales, optional store/department/category
constraints). Implementations must raise on failure rather than return
partial data.

Implementations:
  - InMemoryGateway: filters row lists held in memory (fixtures, tests)
  - SnapshotGateway: reads table snapshots from a ``DataStore``
  - datasources.supabase.SupabaseGateway: hosted Postgres over PostgREST
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, TypeVar

from pydantic import BaseModel

from retail_insights.schemas import EventRecord, SalesRecord, WeatherRecord

if TYPE_CHECKING:
    from collections.abc import Iterable

    from retail_insights.schemas import DateRange
    from retail_insights.store import DataStore

RecordT = TypeVar("RecordT", bound=BaseModel)


class DataAccessGateway(Protocol):
    """Read-only access to sales, weather and event rows."""

    def fetch_sales(
        self,
        date_range: DateRange,
        store_id: str | None = None,
        department: str | None = None,
        category: str | None = None,
    ) -> list[SalesRecord]: ...

    def fetch_weather(self, date_range: DateRange) -> list[WeatherRecord]: ...

    def fetch_events(self, date_range: DateRange) -> list[EventRecord]: ...


def parse_rows(model: type[RecordT], rows: Iterable[RecordT | dict[str, Any]]) -> list[RecordT]:
    """Validate raw row dicts into records; records pass through unchanged."""
    return [row if isinstance(row, model) else model.model_validate(row) for row in rows]


def filter_sales(
    rows: Iterable[SalesRecord],
    date_range: DateRange,
    store_id: str | None = None,
    department: str | None = None,
    category: str | None = None,
) -> list[SalesRecord]:
    """Apply the sales query constraints: date range plus exact matches, by date."""
    matched = [
        r
        for r in rows
        if date_range.contains(r.date)
        and (store_id is None or r.store_id == store_id)
        and (department is None or r.department == department)
        and (category is None or r.product_category == category)
    ]
    return sorted(matched, key=lambda r: r.date)


def filter_dates(rows: Iterable[RecordT], date_range: DateRange) -> list[RecordT]:
    """Rows whose ``date`` falls inside the range, ordered by date."""
    matched = [r for r in rows if date_range.contains(r.date)]  # type: ignore[attr-defined]
    return sorted(matched, key=lambda r: r.date)  # type: ignore[attr-defined]


class InMemoryGateway:
    """Gateway over row lists already in memory.

    Rows are filtered the way the database query would be: inclusive date
    range, exact match on each given sales constraint, ordered by date.
    """

    def __init__(
        self,
        sales: Iterable[SalesRecord | dict[str, Any]] = (),
        weather: Iterable[WeatherRecord | dict[str, Any]] = (),
        events: Iterable[EventRecord | dict[str, Any]] = (),
    ) -> None:
        self.sales = parse_rows(SalesRecord, sales)
        self.weather = parse_rows(WeatherRecord, weather)
        self.events = parse_rows(EventRecord, events)

    def fetch_sales(
        self,
        date_range: DateRange,
        store_id: str | None = None,
        department: str | None = None,
        category: str | None = None,
    ) -> list[SalesRecord]:
        return filter_sales(self.sales, date_range, store_id, department, category)

    def fetch_weather(self, date_range: DateRange) -> list[WeatherRecord]:
        return filter_dates(self.weather, date_range)

    def fetch_events(self, date_range: DateRange) -> list[EventRecord]:
        return filter_dates(self.events, date_range)


class SnapshotGateway:
    """Gateway over table snapshots saved in a ``DataStore``.

    Reads ``snapshots/sales.json``, ``snapshots/weather.json`` and
    ``snapshots/events.json`` (each a list of row dicts) on every fetch.
    A missing sales snapshot raises ``FileNotFoundError``; missing weather
    or event snapshots read as empty tables.
    """

    def __init__(self, store: DataStore) -> None:
        self.store = store

    def _load(self, table: str, model: type[RecordT], *, required: bool = False) -> list[RecordT]:
        path = self.store.snapshot_path(table)
        rows = self.store.read(path)
        if rows is None:
            if required:
                msg = f"Snapshot not found: {self.store.base / path}"
                raise FileNotFoundError(msg)
            return []
        return parse_rows(model, rows)

    def fetch_sales(
        self,
        date_range: DateRange,
        store_id: str | None = None,
        department: str | None = None,
        category: str | None = None,
    ) -> list[SalesRecord]:
        rows = self._load("sales", SalesRecord, required=True)
        return filter_sales(rows, date_range, store_id, department, category)

    def fetch_weather(self, date_range: DateRange) -> list[WeatherRecord]:
        return filter_dates(self._load("weather", WeatherRecord), date_range)

    def fetch_events(self, date_range: DateRange) -> list[EventRecord]:
        return filter_dates(self._load("events", EventRecord), date_range)
