"""Exceptions raised by the analytics engine."""

from __future__ import annotations


class RetailInsightsError(Exception):
    """Base class for errors raised by retail_insights."""


class UpstreamFetchError(RetailInsightsError):
    """A primary sales, weather or event fetch failed; the analysis is aborted."""

    def __init__(self, source: str, cause: BaseException | str) -> None:
        self.source = source
        super().__init__(f"Failed to fetch {source} data: {cause}")


class FilterValidationError(RetailInsightsError):
    """The requested analysis period is outside the configured limits."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__("; ".join(errors))
