"""Address completeness scoring."""

import logging
from typing import Dict, Sequence

from brewery_insights.analytics.ratios import Ratio, field_present, presence_ratio
from brewery_insights.core.config import DEFAULT_ADDRESS_FIELDS
from brewery_insights.models import BreweryRecord

logger = logging.getLogger(__name__)

ADDRESS_FIELDS = DEFAULT_ADDRESS_FIELDS


class EmptyInputError(ValueError):
    """Raised when a statistic is requested over zero records."""


def _check_fields(fields: Sequence[str]) -> None:
    if not fields:
        raise ValueError("at least one field is required to score completeness")


def record_completeness(record: BreweryRecord, fields: Sequence[str] = ADDRESS_FIELDS) -> float:
    """Fraction of ``fields`` that are filled on ``record``."""
    _check_fields(fields)
    filled = sum(1 for field in fields if field_present(field)(record))
    return filled / len(fields)


def mean_completeness(records: Sequence[BreweryRecord], fields: Sequence[str] = ADDRESS_FIELDS) -> float:
    _check_fields(fields)
    if not records:
        raise EmptyInputError("completeness is undefined for an empty record set")
    total = sum(record_completeness(record, fields) for record in records)
    mean = total / len(records)
    logger.debug("Mean completeness over %d records: %.4f", len(records), mean)
    return mean


def field_completeness(records: Sequence[BreweryRecord], field: str) -> Ratio:
    return presence_ratio(records, field_present(field))


def completeness_breakdown(records: Sequence[BreweryRecord], fields: Sequence[str] = ADDRESS_FIELDS) -> Dict[str, Ratio]:
    """Per-field completeness, in the order of ``fields``."""
    _check_fields(fields)
    return {field: field_completeness(records, field) for field in fields}
