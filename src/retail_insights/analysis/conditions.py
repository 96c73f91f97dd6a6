"""Weather-condition and weekday classification.

Condition text comes from upstream feeds as free text ("晴れ", "曇り時々雨",
"Light rain"...). Classification is a plain substring test against a small
token list per bucket; historical dashboards depend on exactly this behavior,
so it is kept as a heuristic rather than a parsed enum.
"""

from __future__ import annotations

from datetime import date

SUNNY = "sunny"
CLOUDY = "cloudy"
RAINY = "rainy"
OTHER = "other"

#: Heatmap bucket order. A condition lands in the first bucket it matches.
WEATHER_BUCKETS = (SUNNY, CLOUDY, RAINY, OTHER)

#: Substring tokens per bucket (Japanese markers first).
CONDITION_TOKENS: dict[str, tuple[str, ...]] = {
    SUNNY: ("晴", "sunny", "clear"),
    CLOUDY: ("曇", "cloud", "overcast"),
    RAINY: ("雨", "rain"),
}

WEEKDAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
WEEKDAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


def matches(condition: str | None, bucket: str) -> bool:
    """Return True if the condition text contains any token of ``bucket``."""
    if not condition:
        return False
    text = condition.lower()
    return any(token in text for token in CONDITION_TOKENS.get(bucket, ()))


def is_rainy(condition: str | None) -> bool:
    return matches(condition, RAINY)


def is_sunny(condition: str | None) -> bool:
    return matches(condition, SUNNY)


def classify_condition(condition: str | None) -> str:
    """Map condition text to exactly one heatmap bucket.

    Missing or unrecognized text is ``"other"``.
    """
    for bucket in (SUNNY, CLOUDY, RAINY):
        if matches(condition, bucket):
            return bucket
    return OTHER


def day_of_week(day: date) -> int:
    """Weekday index with 0 = Sunday .. 6 = Saturday."""
    return (day.weekday() + 1) % 7
