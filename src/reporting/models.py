"""Data structures for reporting pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

from src.models import ArtworkResponse, Rating


@dataclass(slots=True)
class RatingCounts:
    """Tally of yes/maybe/no ratings; unrated responses are not counted."""

    yes: int = 0
    maybe: int = 0
    no: int = 0

    def add(self, rating: Rating) -> None:
        if rating is Rating.YES:
            self.yes += 1
        elif rating is Rating.MAYBE:
            self.maybe += 1
        elif rating is Rating.NO:
            self.no += 1

    @property
    def rated(self) -> int:
        return self.yes + self.maybe + self.no

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass(slots=True)
class CategoryBreakdown:
    """Counts for one category plus the responses that carry a comment."""

    title: str
    counts: RatingCounts = field(default_factory=RatingCounts)
    commented: List[ArtworkResponse] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "counts": self.counts.to_dict(),
            "commented": [
                {
                    "artwork_id": r.artwork_id,
                    "rating": r.rating.value,
                    "emoji": r.rating.emoji,
                    "comment": r.comment,
                }
                for r in self.commented
            ],
        }
