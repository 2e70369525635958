"""Narrative insights for the report and chart views."""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from brewery_insights.analytics.grouping import CountTable, group_dimensions
from brewery_insights.analytics.ranking import share_of_total, top_n
from brewery_insights.analytics.ratios import (
    NOT_APPLICABLE,
    format_percentage,
    has_coordinates,
    has_website,
    presence_ratio,
    ratio,
)
from brewery_insights.core.config import DEFAULT_DIGITAL_THRESHOLD, DEFAULT_PLANNING_GROWTH_THRESHOLD
from brewery_insights.etl.normalize import display_label
from brewery_insights.models import BreweryRecord

logger = logging.getLogger(__name__)

PLANNING_TYPE = "planning"
ARTISANAL_TYPE = "micro"
CLUSTER_TOP_N = 3


@dataclass(frozen=True)
class Insight:
    icon: str
    title: str
    text: str


def _dominant_model(types: CountTable, total: int) -> Optional[Insight]:
    ranked = top_n(types, 1)
    if not ranked:
        return None
    leader = ranked[0]
    label = display_label(leader.key)
    if leader.key.lower() == ARTISANAL_TYPE:
        preference = "artisanal, small-batch production"
    else:
        preference = "this specific business approach"
    return Insight(
        icon="🏭",
        title="Dominant Model",
        text=(
            f"{label} breweries lead with {leader.count} locations "
            f"({format_percentage(ratio(leader.count, total))} market share), "
            f"indicating a preference for {preference}."
        ),
    )


def _fragmentation(types: CountTable) -> Insight:
    return Insight(
        icon="🧩",
        title="Market Fragmentation",
        text=(
            f"The presence of {len(types)} different business models shows a diverse ecosystem "
            "catering to various market segments and consumer preferences."
        ),
    )


def _growth(types: CountTable, planning_threshold: int) -> Insight:
    planning = types.get(PLANNING_TYPE, 0)
    outlook = "strong continued growth" if planning > planning_threshold else "steady market expansion"
    return Insight(
        icon="📈",
        title="Growth Indicators",
        text=f"{planning} breweries in planning phase suggest {outlook} in the industry.",
    )


def _concentration(states: CountTable, total: int, cluster_top_n: int) -> Optional[Insight]:
    leaders = top_n(states, cluster_top_n)
    if not leaders:
        return None
    held = share_of_total(leaders, total)
    return Insight(
        icon="🗺️",
        title="Geographic Concentration",
        text=(
            f"{leaders[0].key} dominates with {leaders[0].count} breweries. "
            f"The top {cluster_top_n} states control {format_percentage(ratio(held, total))} of locations, "
            "indicating regional clustering."
        ),
    )


def _digital(records: Sequence[BreweryRecord], digital_threshold: float) -> Optional[Insight]:
    website_ratio = presence_ratio(records, has_website)
    if website_ratio is NOT_APPLICABLE:
        return None
    strong = website_ratio > digital_threshold
    return Insight(
        icon="🌐",
        title="Digital Transformation",
        text=(
            f"{format_percentage(website_ratio)} have established web presence. "
            f"This {'high' if strong else 'moderate'} adoption rate suggests the industry is "
            f"{'embracing digital marketing' if strong else 'still developing digital strategies'}."
        ),
    )


def _coordinates(records: Sequence[BreweryRecord]) -> Optional[Insight]:
    coordinate_ratio = presence_ratio(records, has_coordinates)
    if coordinate_ratio is NOT_APPLICABLE:
        return None
    return Insight(
        icon="📍",
        title="Geographic Data",
        text=(
            f"{format_percentage(coordinate_ratio)} of breweries have coordinates, "
            "enabling location-based analysis and mapping."
        ),
    )


def _global_reach(countries: CountTable) -> Insight:
    return Insight(
        icon="🌍",
        title="Global Expansion",
        text=f"{len(countries)} countries represented shows international craft beer growth.",
    )


def generate_insights(
    records: Sequence[BreweryRecord],
    digital_threshold: float = DEFAULT_DIGITAL_THRESHOLD,
    planning_threshold: int = DEFAULT_PLANNING_GROWTH_THRESHOLD,
    cluster_top_n: int = CLUSTER_TOP_N,
    tables: Optional[Dict[str, CountTable]] = None,
) -> List[Insight]:
    """Build the ordered insight list; empty input gives an empty list.

    ``tables`` may carry count tables already computed by
    :func:`group_dimensions` for the same records.
    """
    if not records:
        return []
    if tables is None:
        tables = group_dimensions(records)
    total = len(records)

    candidates = [
        _dominant_model(tables["type"], total),
        _fragmentation(tables["type"]),
        _growth(tables["type"], planning_threshold),
        _concentration(tables["state"], total, cluster_top_n),
        _digital(records, digital_threshold),
        _coordinates(records),
        _global_reach(tables["country"]),
    ]
    insights = [insight for insight in candidates if insight is not None]
    logger.debug("Generated %d insights for %d records", len(insights), total)
    return insights
