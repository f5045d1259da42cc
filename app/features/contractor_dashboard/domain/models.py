"""
Domain models for the contractor dashboard feature.

Plain dataclasses shared by the repository, the aggregation service and the
API layer. Derived shapes (stats, feed items, overview) are frozen: they are
built once per aggregation and never updated in place.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Literal

BidStatus = Literal["pending", "accepted", "rejected", "withdrawn"]
ProjectStatus = Literal["open", "in_progress", "completed", "cancelled"]

ACCEPTED_STATUS = "accepted"
OPEN_STATUS = "open"


@dataclass(slots=True)
class ContractorProfile:
    """A contractors row; only the fields the dashboard reads."""

    user_id: str
    rating: float = 0.0


@dataclass(slots=True, frozen=True)
class BidSummary:
    """Bid id + owner, joined onto a project for membership checks."""

    id: str
    contractor_id: str


@dataclass(slots=True)
class Project:
    """A projects row with its joined bid summaries."""

    id: str
    title: str
    description: str | None
    city: str | None
    budget_min: float | None
    budget_max: float | None
    created_at: datetime
    status: str
    bids: list[BidSummary] = field(default_factory=list)

    def get_age_description(self, now: datetime | None = None) -> str:
        """Human-readable age of the listing ("3 days ago")."""
        now = now or datetime.now(UTC)
        created = self.created_at
        if created.tzinfo is None:
            created = created.replace(tzinfo=UTC)

        time_diff = now - created
        if time_diff.total_seconds() < 0:
            return "just now"

        if time_diff.days > 0:
            if time_diff.days == 1:
                return "yesterday"
            elif time_diff.days < 7:
                return f"{time_diff.days} days ago"
            elif time_diff.days < 30:
                weeks = time_diff.days // 7
                return f"{weeks} week{'s' if weeks > 1 else ''} ago"
            elif time_diff.days < 365:
                months = time_diff.days // 30
                return f"{months} month{'s' if months > 1 else ''} ago"
            years = time_diff.days // 365
            return f"{years} year{'s' if years > 1 else ''} ago"

        hours = time_diff.seconds // 3600
        if hours > 0:
            return f"{hours} hour{'s' if hours > 1 else ''} ago"

        minutes = time_diff.seconds // 60
        if minutes > 0:
            return f"{minutes} minute{'s' if minutes > 1 else ''} ago"

        return "just now"


@dataclass(slots=True, frozen=True)
class AggregateStats:
    total_bids: int = 0
    accepted_bids: int = 0
    rating: float = 0.0


@dataclass(slots=True, frozen=True)
class ProjectFeedItem:
    project: Project
    already_bid: bool


@dataclass(slots=True, frozen=True)
class DashboardOverview:
    """Render-ready result of one aggregation."""

    viewer_id: str
    stats: AggregateStats
    feed: tuple[ProjectFeedItem, ...]
    generated_at: datetime

    @property
    def feed_empty(self) -> bool:
        return not self.feed
