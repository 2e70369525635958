"""Utilities for transforming brewery JSON payloads into records."""

import logging
import math
from typing import Any, Dict, Iterable, List, Mapping, Optional

from brewery_insights.models import BreweryRecord

logger = logging.getLogger(__name__)

# Older payloads use ``state`` and ``street`` instead of the current names.
_FALLBACK_KEYS = {
    "state_province": "state",
    "address_1": "street",
}


def _strip_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    value_str = str(value).strip()
    return value_str or None


def _safe_float(value: Any) -> Optional[float]:
    try:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _text_field(raw: Mapping[str, Any], key: str) -> Optional[str]:
    value = _strip_or_none(raw.get(key))
    if value is None and key in _FALLBACK_KEYS:
        value = _strip_or_none(raw.get(_FALLBACK_KEYS[key]))
    return value


def to_brewery_record(raw: Mapping[str, Any]) -> BreweryRecord:
    if not isinstance(raw, Mapping):
        raise TypeError(f"brewery record must be a mapping, got {type(raw).__name__}")

    return BreweryRecord(
        brewery_type=_text_field(raw, "brewery_type"),
        country=_text_field(raw, "country"),
        state_province=_text_field(raw, "state_province"),
        city=_text_field(raw, "city"),
        address_1=_text_field(raw, "address_1"),
        postal_code=_text_field(raw, "postal_code"),
        website_url=_text_field(raw, "website_url"),
        phone=_text_field(raw, "phone"),
        latitude=_safe_float(raw.get("latitude")),
        longitude=_safe_float(raw.get("longitude")),
        id=_strip_or_none(raw.get("id")),
        name=_strip_or_none(raw.get("name")),
    )


def to_brewery_records(items: Iterable[Mapping[str, Any]]) -> List[BreweryRecord]:
    """Convert a sequence of raw payloads, keeping their order."""
    records = [to_brewery_record(item) for item in items]
    logger.debug("Transformed %d brewery payloads", len(records))
    return records


def extract_items(payload: Any) -> List[Dict[str, Any]]:
    """Accept either a bare list of records or an object with a ``records`` list."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping):
        items = payload.get("records")
        if isinstance(items, list):
            return items
    raise ValueError("payload must be a list of records or an object with a 'records' list")
