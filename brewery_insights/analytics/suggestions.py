"""Filter suggestions derived from the aggregate tables."""

import logging
from dataclasses import dataclass
from typing import List, Sequence

from brewery_insights.analytics.grouping import group_by_many
from brewery_insights.analytics.ranking import top_n
from brewery_insights.analytics.ratios import NOT_APPLICABLE, format_percentage, has_website, presence_ratio
from brewery_insights.core.config import DEFAULT_DIGITAL_THRESHOLD
from brewery_insights.etl.normalize import display_label, state_key, type_key
from brewery_insights.models import BreweryRecord

logger = logging.getLogger(__name__)

DIGITAL_ADOPTION_THRESHOLD = DEFAULT_DIGITAL_THRESHOLD


@dataclass(frozen=True)
class Suggestion:
    icon: str
    title: str
    description: str
    filter_key: str
    filter_value: str


def generate_suggestions(
    records: Sequence[BreweryRecord],
    digital_threshold: float = DIGITAL_ADOPTION_THRESHOLD,
) -> List[Suggestion]:
    """Return up to three suggestions: top type, top state, and low website adoption.

    The website rule compares the unrounded ratio with ``digital_threshold``;
    only the text uses the rounded percentage.
    """
    tables = group_by_many(records, {"type": type_key, "state": state_key})
    suggestions: List[Suggestion] = []

    top_types = top_n(tables["type"], 1)
    if top_types:
        dominant = top_types[0]
        label = display_label(dominant.key)
        suggestions.append(
            Suggestion(
                icon="🏭",
                title=f"Explore {label} Breweries",
                description=(
                    f"{label} breweries dominate with {dominant.count} locations. "
                    "Filter by this type to understand regional patterns."
                ),
                filter_key="brewery_type",
                filter_value=dominant.key,
            )
        )

    top_states = top_n(tables["state"], 1)
    if top_states:
        leader = top_states[0]
        suggestions.append(
            Suggestion(
                icon="🗺️",
                title=f"Focus on {leader.key}",
                description=(
                    f"{leader.key} leads with {leader.count} breweries. "
                    "Explore this brewery capital's distribution."
                ),
                filter_key="state",
                filter_value=leader.key,
            )
        )

    website_ratio = presence_ratio(records, has_website)
    if website_ratio is not NOT_APPLICABLE and website_ratio < digital_threshold:
        suggestions.append(
            Suggestion(
                icon="🌐",
                title="Digital Presence Analysis",
                description=(
                    f"Only {format_percentage(website_ratio)} have websites. "
                    'Filter by "Has Website" to see digitally advanced breweries.'
                ),
                filter_key="website",
                filter_value="yes",
            )
        )

    logger.debug("Generated %d suggestions for %d records", len(suggestions), len(records))
    return suggestions
