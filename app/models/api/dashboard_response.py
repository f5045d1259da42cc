"""
Contractor dashboard API response models.
Used by the dashboard router for output formatting.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from app.features.contractor_dashboard.domain.models import DashboardOverview, ProjectFeedItem


class DashboardStatsResponse(BaseModel):
    """Bid statistics and reputation for the viewer."""

    total_bids: int = Field(..., ge=0, description="Bids submitted by the contractor")
    accepted_bids: int = Field(..., ge=0, description="Bids with status 'accepted'")
    rating: float = Field(..., ge=0, description="Average rating, 0 when no profile exists")


class ProjectFeedItemResponse(BaseModel):
    """An open project in the dashboard feed."""

    id: str = Field(..., description="Project ID")
    title: str = Field(..., description="Project title")
    description: str | None = Field(None, description="Project description")
    city: str | None = Field(None, description="City the work is in")
    budget_min: float | None = Field(None, description="Lower budget bound")
    budget_max: float | None = Field(None, description="Upper budget bound")
    created_at: datetime = Field(..., description="When the project was posted")
    posted_ago: str = Field(..., description="Human-readable age (e.g., '2 hours ago')")
    already_bid: bool = Field(..., description="Whether the viewer has bid on this project")

    @classmethod
    def from_domain(cls, item: "ProjectFeedItem", now: datetime) -> "ProjectFeedItemResponse":
        project = item.project
        return cls(
            id=project.id,
            title=project.title,
            description=project.description,
            city=project.city,
            budget_min=project.budget_min,
            budget_max=project.budget_max,
            created_at=project.created_at,
            posted_ago=project.get_age_description(now),
            already_bid=item.already_bid,
        )


class DashboardResponse(BaseModel):
    """Response for GET /contractor/dashboard"""

    stats: DashboardStatsResponse
    feed: list[ProjectFeedItemResponse] = Field(default_factory=list)
    feed_empty: bool = Field(..., description="True when there are no open projects to show")
    generated_at: datetime = Field(..., description="When this aggregation ran")

    @classmethod
    def from_domain(cls, overview: "DashboardOverview") -> "DashboardResponse":
        now = overview.generated_at
        return cls(
            stats=DashboardStatsResponse(
                total_bids=overview.stats.total_bids,
                accepted_bids=overview.stats.accepted_bids,
                rating=overview.stats.rating,
            ),
            feed=[ProjectFeedItemResponse.from_domain(item, now) for item in overview.feed],
            feed_empty=overview.feed_empty,
            generated_at=overview.generated_at,
        )
