"""Aggregate reviewer responses into counts and per-category breakdowns."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Mapping, Tuple

from src.catalog import category_for_id
from src.models import ArtworkResponse
from src.reporting.models import CategoryBreakdown, RatingCounts

logger = logging.getLogger(__name__)


def tally_ratings(responses: Iterable[ArtworkResponse]) -> RatingCounts:
    """Return yes/maybe/no counts over *responses*."""
    counts = RatingCounts()
    for response in responses:
        counts.add(response.rating)
    return counts


def sorted_by_category(
    responses: Mapping[str, ArtworkResponse],
) -> List[Tuple[str, ArtworkResponse]]:
    """Return ``(category, response)`` pairs ordered by category, then artwork id."""
    pairs = [(category_for_id(artwork_id), r) for artwork_id, r in responses.items()]
    pairs.sort(key=lambda pair: (pair[0], pair[1].artwork_id))
    return pairs


def build_category_breakdown(
    responses: Mapping[str, ArtworkResponse],
) -> List[CategoryBreakdown]:
    """Group reviewed responses by category.

    Unreviewed entries (no rating, blank comment) are skipped entirely, so a
    category only appears once something in it was reviewed. The function is
    read-only; it does not mutate *responses*.
    """
    groups: Dict[str, CategoryBreakdown] = defaultdict(lambda: CategoryBreakdown(title=""))
    for category, response in sorted_by_category(responses):
        if not response.is_reviewed:
            continue
        group = groups[category]
        group.title = category
        group.counts.add(response.rating)
        if response.has_comment:
            group.commented.append(response)

    logger.debug("Built breakdown for %d categor(ies)", len(groups))
    return [groups[title] for title in sorted(groups)]
