"""Tests for engine exceptions."""

from __future__ import annotations

from retail_insights.exceptions import (
    FilterValidationError,
    RetailInsightsError,
    UpstreamFetchError,
)


class TestUpstreamFetchError:
    def test_message_names_source(self) -> None:
        error = UpstreamFetchError("event", TimeoutError("read timed out"))
        assert str(error) == "Failed to fetch event data: read timed out"
        assert error.source == "event"
        assert isinstance(error, RetailInsightsError)


class TestFilterValidationError:
    def test_joins_messages(self) -> None:
        error = FilterValidationError(["first", "second"])
        assert str(error) == "first; second"
        assert error.errors == ["first", "second"]
