"""
Domain models for retail insights.

Pydantic models for rows supplied by the data access gateway and for the
analysis request. These define the canonical schema - gateways normalize
database rows to these.
"""

from __future__ import annotations

from datetime import date
from typing import NamedTuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

# =============================================================================
# Requests
# =============================================================================


class DateRange(NamedTuple):
    """Inclusive calendar date range."""

    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


def shift_years(day: date, years: int) -> date:
    """Move a date by whole calendar years, mapping Feb 29 to Feb 28."""
    try:
        return day.replace(year=day.year + years)
    except ValueError:
        return day.replace(year=day.year + years, day=28)


class CorrelationFilters(BaseModel):
    """Parameters of one correlation analysis."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    start_date: date = Field(..., description="First day analyzed (inclusive)")
    end_date: date = Field(..., description="Last day analyzed (inclusive)")
    store_id: str | None = None
    department: str | None = None
    category: str | None = Field(default=None, description="Product category")

    @model_validator(mode="after")
    def _check_order(self) -> CorrelationFilters:
        if self.start_date > self.end_date:
            msg = f"start_date {self.start_date} is after end_date {self.end_date}"
            raise ValueError(msg)
        return self

    @property
    def date_range(self) -> DateRange:
        return DateRange(self.start_date, self.end_date)

    @property
    def period_days(self) -> int:
        return (self.end_date - self.start_date).days

    def previous_year(self) -> CorrelationFilters:
        """Same filters shifted back exactly one calendar year."""
        return self.model_copy(
            update={
                "start_date": shift_years(self.start_date, -1),
                "end_date": shift_years(self.end_date, -1),
            }
        )


# =============================================================================
# Upstream rows
# =============================================================================


class SalesRecord(BaseModel):
    """One sales entry (store x department x category x day)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    date: date
    store_id: str | None = None
    department: str | None = None
    product_category: str | None = None
    revenue_ex_tax: float | None = None
    footfall: int | None = None
    transactions: int | None = None
    discounts: float | None = None
    tax: float | None = None


class WeatherRecord(BaseModel):
    """Daily weather observation, accepting the ext_weather_daily column names."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    date: date
    location: str | None = None
    temp_avg: float | None = Field(
        default=None, validation_alias=AliasChoices("temp_avg", "temperature_avg")
    )
    temp_max: float | None = Field(
        default=None, validation_alias=AliasChoices("temp_max", "temperature_max")
    )
    temp_min: float | None = Field(
        default=None, validation_alias=AliasChoices("temp_min", "temperature_min")
    )
    humidity: float | None = Field(
        default=None, validation_alias=AliasChoices("humidity", "humidity_avg")
    )
    precipitation: float | None = None
    condition: str | None = Field(
        default=None, validation_alias=AliasChoices("condition", "weather_condition")
    )


class EventRecord(BaseModel):
    """A local event; unknown columns (category, attendance...) are kept."""

    model_config = ConfigDict(frozen=True, extra="allow")

    date: date
    title: str
    location: str | None = None
    distance_km: float | None = None
