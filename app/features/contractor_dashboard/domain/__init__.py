"""
Domain subpackage for the contractor dashboard feature.
"""

from .models import (
    ACCEPTED_STATUS,
    OPEN_STATUS,
    AggregateStats,
    BidStatus,
    BidSummary,
    ContractorProfile,
    DashboardOverview,
    Project,
    ProjectFeedItem,
    ProjectStatus,
)

__all__ = [
    "ACCEPTED_STATUS",
    "OPEN_STATUS",
    "AggregateStats",
    "BidStatus",
    "BidSummary",
    "ContractorProfile",
    "DashboardOverview",
    "Project",
    "ProjectFeedItem",
    "ProjectStatus",
]
