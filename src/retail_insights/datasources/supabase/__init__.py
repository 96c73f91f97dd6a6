"""Supabase data source (hosted Postgres exposed through PostgREST).

Public API:
  - gateway: SupabaseGateway (DataAccessGateway over the REST API)
  - client: table names, URL/header/query helpers
"""

from retail_insights.datasources.supabase.client import (
    EVENTS_TABLE,
    SALES_TABLE,
    WEATHER_TABLE,
    date_range_params,
    table_url,
)
from retail_insights.datasources.supabase.gateway import SupabaseGateway

__all__ = [
    "EVENTS_TABLE",
    "SALES_TABLE",
    "WEATHER_TABLE",
    "SupabaseGateway",
    "date_range_params",
    "table_url",
]
