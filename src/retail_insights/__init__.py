"""Retail Insights - correlation analytics for daily sales and their context.

Architecture::

    schemas.py     Pydantic rows (sales, weather, events) and analysis filters
    gateway.py     DataAccessGateway protocol + in-memory / snapshot gateways
    datasources/   Hosted data sources (Supabase REST gateway)
    analysis/      Pure joins, correlations, heatmap, comparisons, summary
    service.py     CorrelationService: parallel fetches -> analysis pipeline
    store.py       Enveloped JSON files (row snapshots, saved results)
    flows/         Prefect orchestration (timeout, SLA check, save result)
    services/      Shared utilities (HTTP client with retry)

Data flow: gateway -> analysis.daily -> {correlation, heatmap, comparison}
-> summary -> store (derived/correlation/)

Extension points - see each package's docstring for step-by-step guides:
  - New data source:   datasources/__init__.py
  - New factor:        analysis/__init__.py
"""

__version__ = "0.1.0"

from retail_insights.config import Settings
from retail_insights.schemas import CorrelationFilters

__all__ = ["CorrelationFilters", "Settings", "__version__"]
