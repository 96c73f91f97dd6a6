"""Upstream data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # URLs, table names, request helpers
    └── gateway.py        # DataAccessGateway implementation

Adding a new datasource
-----------------------
1. Create ``datasources/{name}/`` with the files above.
   See ``supabase/`` for an example.

2. Implement the three fetch methods of ``retail_insights.gateway.DataAccessGateway``
   and return ``schemas`` records (``gateway.parse_rows`` validates raw dicts).
   Raise on any failure; never return a partial table.

3. Re-export the public API in ``__init__.py`` with ``__all__``.

4. Select it in ``flows/analyze.create_gateway`` via a ``data_source`` setting.

5. Add tests in ``tests/test_{name}.py``.
"""
