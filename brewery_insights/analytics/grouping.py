"""Count tables keyed by normalized grouping keys."""

import logging
from typing import Dict, Iterable, Mapping

from brewery_insights.etl.normalize import KeyFn, city_key, country_key, state_key, type_key
from brewery_insights.models import BreweryRecord

logger = logging.getLogger(__name__)

CountTable = Dict[str, int]

DIMENSIONS: Mapping[str, KeyFn] = {
    "type": type_key,
    "country": country_key,
    "state": state_key,
    "city": city_key,
}


def group_by(records: Iterable[BreweryRecord], key_fn: KeyFn) -> CountTable:
    """Count records per key. Keys keep the order in which they were first seen."""
    table: CountTable = {}
    for record in records:
        key = key_fn(record)
        table[key] = table.get(key, 0) + 1
    return table


def group_by_many(records: Iterable[BreweryRecord], key_fns: Mapping[str, KeyFn]) -> Dict[str, CountTable]:
    """Fill one independent count table per key function in a single pass."""
    tables: Dict[str, CountTable] = {name: {} for name in key_fns}
    seen = 0
    for record in records:
        seen += 1
        for name, key_fn in key_fns.items():
            table = tables[name]
            key = key_fn(record)
            table[key] = table.get(key, 0) + 1
    logger.debug(
        "Grouped %d records: %s",
        seen,
        ", ".join(f"{name}={len(table)}" for name, table in tables.items()),
    )
    return tables


def group_dimensions(records: Iterable[BreweryRecord]) -> Dict[str, CountTable]:
    """Count tables for type, country, state and city."""
    return group_by_many(records, DIMENSIONS)
