"""Core data models shared by the brewery analytics engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class BreweryRecord:
    """Read-only snapshot of one brewery entry.

    Every descriptive field is optional; ``None`` means the source left it
    absent or empty.
    """

    brewery_type: Optional[str] = None
    country: Optional[str] = None
    state_province: Optional[str] = None
    city: Optional[str] = None
    address_1: Optional[str] = None
    postal_code: Optional[str] = None
    website_url: Optional[str] = None
    phone: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    id: Optional[str] = None
    name: Optional[str] = None


@dataclass(frozen=True, slots=True)
class NormalizedKeys:
    """Grouping keys for one record; never empty."""

    brewery_type: str
    country: str
    state: str
    city: str
