"""
Prefect flows for the analytics pipeline.

Flows:
- analyze: run a correlation analysis and save it under derived/correlation/

Usage (local):
    python -m retail_insights.flows.analyze 2024-01-01 2024-03-31

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    prefect deployment run 'correlation-analysis/default'
"""
