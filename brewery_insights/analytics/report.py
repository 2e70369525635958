"""Assemble the report view and the chart view from one record set.

Both builders are pure: they read the records, compute every table they
need and return plain dictionaries. Empty input raises
:class:`~brewery_insights.analytics.completeness.EmptyInputError`; the entry
points turn that into a "no data" response.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, is_dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from brewery_insights.analytics.completeness import EmptyInputError, completeness_breakdown, mean_completeness
from brewery_insights.analytics.grouping import group_dimensions
from brewery_insights.analytics.insights import generate_insights
from brewery_insights.analytics.ranking import RankedEntry, share_of_total, top_n
from brewery_insights.analytics.ratios import (
    NotApplicableRatio,
    has_coordinates,
    has_phone,
    has_website,
    presence_ratio,
    presence_ratio_by_group,
    ratio,
    to_percentage,
)
from brewery_insights.analytics.suggestions import generate_suggestions
from brewery_insights.analytics.view_modes import DisplayState
from brewery_insights.core.config import Settings
from brewery_insights.etl.normalize import display_label, type_key
from brewery_insights.models import BreweryRecord

logger = logging.getLogger(__name__)

REPORT_CLUSTER_TOP_N = 5


def _ranked_with_share(entries: Sequence[RankedEntry], total: int) -> List[Dict[str, Any]]:
    return [
        {
            "key": entry.key,
            "label": display_label(entry.key),
            "count": entry.count,
            "percentage": to_percentage(ratio(entry.count, total)),
        }
        for entry in entries
    ]


def _ranked(entries: Sequence[RankedEntry]) -> List[Dict[str, Any]]:
    return [{"key": entry.key, "count": entry.count} for entry in entries]


def _require_records(records: Sequence[BreweryRecord]) -> None:
    if not records:
        raise EmptyInputError("no brewery records to analyse")


def build_analysis_report(records: Sequence[BreweryRecord], settings: Settings) -> Dict[str, Any]:
    """Statistics behind the comprehensive analysis page."""
    _require_records(records)
    total = len(records)
    tables = group_dimensions(records)

    business_models = top_n(tables["type"])
    top_states = top_n(tables["state"], settings.top_states_report)
    clustered = top_states[:REPORT_CLUSTER_TOP_N]

    website_ratio = presence_ratio(records, has_website)
    phone_ratio = presence_ratio(records, has_phone)
    digital_by_type = presence_ratio_by_group(
        records, has_website, type_key, keys=[entry.key for entry in business_models]
    )

    avg_completeness = mean_completeness(records, settings.address_fields)
    breakdown = completeness_breakdown(records, settings.address_fields)

    logger.info("Built analysis report for %d records (%d types)", total, len(business_models))
    return {
        "total": total,
        "country_count": len(tables["country"]),
        "state_count": len(tables["state"]),
        "business_models": _ranked_with_share(business_models, total),
        "top_countries": _ranked_with_share(top_n(tables["country"], settings.top_countries), total),
        "top_states": _ranked(top_states),
        "top_cities": _ranked(top_n(tables["city"], settings.top_cities)),
        "clustering": {
            "top_n": REPORT_CLUSTER_TOP_N,
            "percentage": to_percentage(ratio(share_of_total(clustered, total), total)),
        },
        "digital_presence": {
            "website_percentage": to_percentage(website_ratio),
            "phone_percentage": to_percentage(phone_ratio),
            "by_type": [
                {
                    "key": key,
                    "label": display_label(key),
                    "total": presence.total,
                    "with_website": presence.matching,
                    "percentage": to_percentage(presence.ratio),
                }
                for key, presence in digital_by_type.items()
            ],
        },
        "address_completeness": {
            "fields": list(settings.address_fields),
            "average_percentage": to_percentage(avg_completeness),
            "missing_percentage": to_percentage(1 - avg_completeness),
            "by_field": {field: to_percentage(value) for field, value in breakdown.items()},
        },
        "coordinates_percentage": to_percentage(presence_ratio(records, has_coordinates)),
        "insights": generate_insights(
            records,
            digital_threshold=settings.digital_threshold,
            planning_threshold=settings.planning_growth_threshold,
            cluster_top_n=REPORT_CLUSTER_TOP_N,
            tables=tables,
        ),
    }


def build_chart_data(
    records: Sequence[BreweryRecord],
    settings: Settings,
    display: Optional[DisplayState] = None,
) -> Dict[str, Any]:
    """Series and panels for the interactive visualization page."""
    _require_records(records)
    display = display or DisplayState()
    total = len(records)
    tables = group_dimensions(records)

    website_groups = presence_ratio_by_group(records, has_website, type_key)
    by_total = top_n({key: presence.total for key, presence in website_groups.items()})
    website_by_type = []
    for entry in by_total:
        presence = website_groups[entry.key]
        website_by_type.append(
            {
                "key": entry.key,
                "label": display_label(entry.key),
                "total": presence.total,
                "with_website": presence.matching,
                "percentage": to_percentage(presence.ratio),
            }
        )

    logger.info("Built chart data for %d records (mode=%s)", total, display.mode.value)
    return {
        "total": total,
        "display": display,
        "type_distribution": [
            {"key": entry.key, "label": display_label(entry.key), "count": entry.count}
            for entry in top_n(tables["type"])
        ],
        "top_states": _ranked(top_n(tables["state"], settings.top_states_chart)),
        "website_by_type": website_by_type,
        "country_distribution": [
            {"name": country, "value": count, "percentage": to_percentage(ratio(count, total))}
            for country, count in tables["country"].items()
        ],
        "website_percentage": to_percentage(presence_ratio(records, has_website)),
        "suggestions": generate_suggestions(records, digital_threshold=settings.digital_threshold)
        if display.show_suggestions
        else [],
        "insights": generate_insights(
            records,
            digital_threshold=settings.digital_threshold,
            planning_threshold=settings.planning_growth_threshold,
            tables=tables,
        )
        if display.show_insights
        else [],
    }


def to_jsonable(value: Any) -> Any:
    """Convert report values into JSON-ready structures. ``NOT_APPLICABLE`` becomes ``None``."""
    if isinstance(value, NotApplicableRatio):
        return None
    if isinstance(value, Enum):
        return value.value
    if is_dataclass(value) and not isinstance(value, type):
        return {key: to_jsonable(item) for key, item in asdict(value).items()}
    if isinstance(value, tuple) and hasattr(value, "_asdict"):
        return {key: to_jsonable(item) for key, item in value._asdict().items()}
    if isinstance(value, dict):
        return {str(key): to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    return value

