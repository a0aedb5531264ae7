"""Context dataclass for rendering submission notifications.

This module defines `NotificationContext`, a typed container that holds all
values expected by the templates in `src/reporting/templates/`. Keeping the
context separate from rendering lets the business rules (what is counted,
which items are highlighted) be tested without touching template strings.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime as _dt
from datetime import timezone as _tz
from typing import Any, Dict, List, Optional, Sequence

from src.models import SubmissionPayload
from src.reporting import config
from src.reporting.aggregator import build_category_breakdown, tally_ratings

__all__ = [
    "NotificationContext",
    "build_notification_context",
    "format_timestamp",
]


@dataclass(slots=True)
class NotificationContext:
    """Container with all fields used by the notification templates."""

    # Header & meta
    reviewer_name: str
    submitted_display: str
    received_at: str  # ISO-8601, UTC

    # Aggregates
    total_responses: int
    counts: Dict[str, int]
    categories: List[Dict[str, Any]] = field(default_factory=list)

    # Free text & archive
    additional_feedback: str = ""
    image_urls: List[str] = field(default_factory=list)
    reviewer_email: Optional[str] = None

    # Presentation
    tool_name: str = config.TOOL_NAME
    thumbnail_columns: int = config.THUMBNAIL_COLUMNS

    def to_dict(self) -> Dict[str, Any]:  # noqa: D401 – simple helper
        """Return a *plain* ``dict`` (recursively) for Jinja rendering."""
        return asdict(self)


def format_timestamp(value: str) -> str:
    """Format an ISO-8601 string as e.g. ``May 1, 2024, 12:00 PM UTC``.

    Returns *value* unchanged if it cannot be parsed.
    """
    if not value:
        return ""
    try:
        parsed = _dt.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=_tz.utc)
    parsed = parsed.astimezone(_tz.utc)
    hour = parsed.strftime("%I").lstrip("0") or "12"
    return f"{parsed.strftime('%B')} {parsed.day}, {parsed.year}, {hour}:{parsed.strftime('%M %p')} UTC"


def build_notification_context(
    payload: SubmissionPayload,
    image_urls: Sequence[str],
    *,
    received_at: Optional[str] = None,
) -> NotificationContext:
    """Convert a validated payload into :class:`NotificationContext`.

    The function is *pure*; only reviewed responses (rating or comment) count.
    """
    reviewed = payload.reviewed_responses
    counts = tally_ratings(reviewed.values())
    breakdown = build_category_breakdown(payload.responses)

    return NotificationContext(
        reviewer_name=payload.reviewer_name,
        reviewer_email=payload.reviewer_email,
        submitted_display=format_timestamp(payload.submitted_at),
        received_at=received_at or _dt.now(tz=_tz.utc).isoformat(),
        total_responses=len(reviewed),
        counts=counts.to_dict(),
        categories=[group.to_dict() for group in breakdown],
        additional_feedback=payload.additional_feedback.strip(),
        image_urls=list(image_urls),
    )
