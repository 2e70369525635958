"""Top-N selection over count tables."""

import logging
from typing import List, Mapping, NamedTuple, Optional, Sequence

logger = logging.getLogger(__name__)


class RankedEntry(NamedTuple):
    key: str
    count: int


def top_n(table: Mapping[str, int], n: Optional[int] = None) -> List[RankedEntry]:
    """Rank ``table`` by descending count and keep the first ``n`` entries.

    ``n=None`` keeps everything. Equal counts stay in the table's insertion
    order because ``sorted`` is stable, so only the count is used as key.
    """
    if n is not None and n < 0:
        raise ValueError("n must be non-negative")
    ranked = sorted((RankedEntry(key, count) for key, count in table.items()), key=lambda entry: -entry.count)
    if n is not None:
        ranked = ranked[:n]
    logger.debug("Ranked %d keys, kept %d", len(table), len(ranked))
    return ranked


def share_of_total(entries: Sequence[RankedEntry], total: int) -> int:
    """Sum of counts held by ``entries``; ``total`` bounds the result."""
    held = sum(entry.count for entry in entries)
    if held > total:
        raise ValueError(f"ranked entries hold {held} records but only {total} exist")
    return held
