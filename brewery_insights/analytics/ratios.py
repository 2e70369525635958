"""Presence ratios over brewery records.

A ratio is ``matching / total``. When ``total`` is zero the ratio does not
exist, and the calculators return :data:`NOT_APPLICABLE` instead of a number so
that no ``NaN`` or artificial zero reaches a percentage display.

Percentages are always rounded the same way: one decimal place, half away
from zero.
"""

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Dict, Iterable, Optional, Sequence, Union

from brewery_insights.etl.normalize import KeyFn
from brewery_insights.models import BreweryRecord

logger = logging.getLogger(__name__)

Predicate = Callable[[BreweryRecord], bool]


class NotApplicableRatio:
    """Marker for a ratio over zero records. Use the :data:`NOT_APPLICABLE` instance."""

    _instance: Optional["NotApplicableRatio"] = None

    def __new__(cls) -> "NotApplicableRatio":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOT_APPLICABLE"

    def __reduce__(self):
        return (NotApplicableRatio, ())


NOT_APPLICABLE = NotApplicableRatio()

Ratio = Union[float, NotApplicableRatio]


@dataclass(frozen=True)
class GroupPresence:
    total: int
    matching: int
    ratio: Ratio


def ratio(matching: int, total: int) -> Ratio:
    if total == 0:
        return NOT_APPLICABLE
    return matching / total


def has_coordinates(record: BreweryRecord) -> bool:
    return record.latitude is not None and record.longitude is not None


def field_present(field: str) -> Predicate:
    """Predicate that checks ``field`` is set and not blank."""

    def _present(record: BreweryRecord) -> bool:
        value = getattr(record, field)
        if isinstance(value, str):
            return bool(value.strip())
        return value is not None

    _present.__name__ = f"{field}_present"
    return _present


has_website = field_present("website_url")
has_phone = field_present("phone")


def presence_ratio(records: Iterable[BreweryRecord], predicate: Predicate) -> Ratio:
    total = 0
    matching = 0
    for record in records:
        total += 1
        if predicate(record):
            matching += 1
    return ratio(matching, total)


def presence_ratio_by_group(
    records: Iterable[BreweryRecord],
    predicate: Predicate,
    key_fn: KeyFn,
    keys: Optional[Sequence[str]] = None,
) -> Dict[str, GroupPresence]:
    """Presence ratio per group.

    With ``keys`` the result covers exactly those keys, in that order, even
    when a key has no records (its ratio is then ``NOT_APPLICABLE``). Without
    ``keys`` groups appear in first-encountered order.
    """
    counts: Dict[str, list] = {key: [0, 0] for key in keys} if keys is not None else {}
    for record in records:
        key = key_fn(record)
        bucket = counts.get(key)
        if bucket is None:
            if keys is not None:
                continue
            bucket = counts[key] = [0, 0]
        bucket[0] += 1
        if predicate(record):
            bucket[1] += 1

    result = {key: GroupPresence(total, matching, ratio(matching, total)) for key, (total, matching) in counts.items()}
    empty = [key for key, presence in result.items() if presence.ratio is NOT_APPLICABLE]
    if empty:
        logger.debug("Groups without records: %s", ", ".join(empty))
    return result


def to_percentage(value: Ratio) -> Ratio:
    """Express a ratio as a percentage rounded to one decimal, half away from zero."""
    if value is NOT_APPLICABLE:
        return NOT_APPLICABLE
    scaled = Decimal(repr(value)) * 100
    return float(scaled.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def format_percentage(value: Ratio) -> str:
    percentage = to_percentage(value)
    if percentage is NOT_APPLICABLE:
        return "n/a"
    return f"{percentage:.1f}%"
