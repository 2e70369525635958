"""Application configuration helpers.

Every tunable used by the report and chart views lives here so the ranking
cut-offs and heuristic thresholds can be changed without touching the rules
that use them.
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_ADDRESS_FIELDS: Tuple[str, ...] = ("address_1", "city", "state_province", "postal_code", "country")
DEFAULT_DIGITAL_THRESHOLD = 0.70
DEFAULT_PLANNING_GROWTH_THRESHOLD = 10
KNOWN_RECORD_FIELDS = frozenset(
    {
        "brewery_type",
        "country",
        "state_province",
        "city",
        "address_1",
        "postal_code",
        "website_url",
        "phone",
    }
)


class ConfigError(RuntimeError):
    """Raised when configuration values cannot be used."""


@dataclass(frozen=True)
class Settings:
    address_fields: Tuple[str, ...] = DEFAULT_ADDRESS_FIELDS
    top_countries: int = 5
    top_states_report: int = 10
    top_states_chart: int = 8
    top_cities: int = 15
    digital_threshold: float = DEFAULT_DIGITAL_THRESHOLD
    planning_growth_threshold: int = DEFAULT_PLANNING_GROWTH_THRESHOLD
    server_port: int = 8080


def _get_positive_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


def _get_threshold(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be numeric, got {raw!r}") from exc
    if not 0.0 <= value <= 1.0:
        raise ConfigError(f"{name} must be between 0 and 1, got {value}")
    return value


def _get_address_fields() -> Tuple[str, ...]:
    raw = os.getenv("ADDRESS_FIELDS")
    if raw is None or not raw.strip():
        return DEFAULT_ADDRESS_FIELDS
    fields = tuple(part.strip() for part in raw.split(",") if part.strip())
    unknown = [field for field in fields if field not in KNOWN_RECORD_FIELDS]
    if unknown:
        raise ConfigError(f"ADDRESS_FIELDS contains unknown fields: {', '.join(unknown)}")
    if not fields:
        raise ConfigError("ADDRESS_FIELDS must name at least one field")
    return fields


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load, validate and cache analytics settings from the environment."""
    load_dotenv()

    settings = Settings(
        address_fields=_get_address_fields(),
        top_countries=_get_positive_int("TOP_COUNTRIES", 5),
        top_states_report=_get_positive_int("TOP_STATES_REPORT", 10),
        top_states_chart=_get_positive_int("TOP_STATES_CHART", 8),
        top_cities=_get_positive_int("TOP_CITIES", 15),
        digital_threshold=_get_threshold("DIGITAL_ADOPTION_THRESHOLD", DEFAULT_DIGITAL_THRESHOLD),
        planning_growth_threshold=_get_positive_int("PLANNING_GROWTH_THRESHOLD", DEFAULT_PLANNING_GROWTH_THRESHOLD),
        server_port=_get_positive_int("PORT", 8080),
    )

    if settings.address_fields != DEFAULT_ADDRESS_FIELDS:
        logger.warning("Using custom address completeness fields: %s", ", ".join(settings.address_fields))

    return settings
