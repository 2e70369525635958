"""Grouping-key normalization for brewery records."""

from typing import Callable, Optional

from brewery_insights.models import BreweryRecord, NormalizedKeys

UNKNOWN_LABEL = "Unknown"

KeyFn = Callable[[BreweryRecord], str]


def label_or_unknown(value: Optional[str]) -> str:
    if value is None:
        return UNKNOWN_LABEL
    value = value.strip()
    return value or UNKNOWN_LABEL


def type_key(record: BreweryRecord) -> str:
    return label_or_unknown(record.brewery_type)


def country_key(record: BreweryRecord) -> str:
    return label_or_unknown(record.country)


def state_key(record: BreweryRecord) -> str:
    return label_or_unknown(record.state_province)


def city_key(record: BreweryRecord) -> str:
    return label_or_unknown(record.city)


def normalize(record: BreweryRecord) -> NormalizedKeys:
    """Return the grouping keys of ``record`` with absent fields labelled ``Unknown``."""
    return NormalizedKeys(
        brewery_type=type_key(record),
        country=country_key(record),
        state=state_key(record),
        city=city_key(record),
    )


def display_label(key: str) -> str:
    """Capitalize a category key for display (``micro`` -> ``Micro``)."""
    return key[:1].upper() + key[1:]
