"""Tests for the Supabase REST gateway."""

from __future__ import annotations

from datetime import date
from unittest.mock import Mock, patch

import pytest
import requests

from retail_insights.datasources.supabase import SupabaseGateway, date_range_params, table_url
from retail_insights.datasources.supabase.client import auth_headers
from retail_insights.schemas import DateRange

JANUARY = DateRange(date(2024, 1, 1), date(2024, 1, 31))


def _response(rows: list[dict]) -> Mock:
    resp = Mock()
    resp.json.return_value = rows
    resp.raise_for_status = Mock()
    return resp


class TestClientHelpers:
    """Test URL, header and query builders."""

    def test_table_url(self) -> None:
        assert (
            table_url("https://xyz.supabase.co/", "sales")
            == "https://xyz.supabase.co/rest/v1/sales"
        )

    def test_auth_headers(self) -> None:
        headers = auth_headers("secret")
        assert headers["apikey"] == "secret"
        assert headers["Authorization"] == "Bearer secret"

    def test_date_range_params(self) -> None:
        params = date_range_params(JANUARY, store_id="store1", department=None)
        assert ("date", "gte.2024-01-01") in params
        assert ("date", "lte.2024-01-31") in params
        assert ("order", "date.asc,id.asc") in params
        assert ("store_id", "eq.store1") in params
        assert all(key != "department" for key, _ in params)


class TestSupabaseGateway:
    """Test fetching and paging through the REST API."""

    def test_fetch_sales_maps_category(self) -> None:
        session = Mock()
        session.get.return_value = _response(
            [{"date": "2024-01-01", "store_id": "store1", "revenue_ex_tax": 1200.0}]
        )
        gateway = SupabaseGateway("https://xyz.supabase.co", "key", session=session)

        rows = gateway.fetch_sales(JANUARY, store_id="store1", category="tv")

        assert rows[0].revenue_ex_tax == 1200.0
        url = session.get.call_args.args[0]
        params = session.get.call_args.kwargs["params"]
        assert url.endswith("/rest/v1/sales")
        assert ("product_category", "eq.tv") in params
        assert ("offset", "0") in params

    def test_pages_until_short_page(self) -> None:
        session = Mock()
        session.get.side_effect = [
            _response([{"date": "2024-01-01", "title": "A"}, {"date": "2024-01-02", "title": "B"}]),
            _response([{"date": "2024-01-03", "title": "C"}]),
        ]
        gateway = SupabaseGateway("https://xyz.supabase.co", "key", session=session, page_size=2)

        events = gateway.fetch_events(JANUARY)

        assert [e.title for e in events] == ["A", "B", "C"]
        assert session.get.call_count == 2
        assert ("offset", "2") in session.get.call_args.kwargs["params"]
        for call in session.get.call_args_list:
            assert ("order", "date.asc,id.asc") in call.kwargs["params"]

    def test_weather_table(self) -> None:
        session = Mock()
        session.get.return_value = _response(
            [{"date": "2024-01-01", "temperature_avg": 8.0, "weather_condition": "晴れ"}]
        )
        gateway = SupabaseGateway("https://xyz.supabase.co", "key", session=session)

        weather = gateway.fetch_weather(JANUARY)

        assert weather[0].condition == "晴れ"
        assert session.get.call_args.args[0].endswith("/ext_weather_daily")

    def test_http_error_propagates(self) -> None:
        session = Mock()
        resp = _response([])
        resp.raise_for_status.side_effect = requests.HTTPError("503 Server Error")
        session.get.return_value = resp
        gateway = SupabaseGateway("https://xyz.supabase.co", "key", session=session)

        with pytest.raises(requests.HTTPError):
            gateway.fetch_sales(JANUARY)

    def test_default_session_carries_api_key(self) -> None:
        gateway = SupabaseGateway("https://xyz.supabase.co", "key")

        assert gateway.session.headers["apikey"] == "key"
        assert gateway.session.headers["Authorization"] == "Bearer key"

    @patch("retail_insights.datasources.supabase.gateway.create_session")
    def test_builds_session_when_none_given(self, mock_create: Mock) -> None:
        mock_create.return_value.get.return_value = _response([])
        gateway = SupabaseGateway("https://xyz.supabase.co", "key")

        assert gateway.fetch_events(JANUARY) == []
        mock_create.assert_called_once_with(headers=auth_headers("key"))
