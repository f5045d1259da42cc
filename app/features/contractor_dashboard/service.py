"""
Contractor dashboard aggregation service.

Turns the viewer's contractor profile, bid history and the newest open
projects into the overview shown on the contractor dashboard: bid totals,
accepted bids, rating, and a short project feed flagged with "already bid".
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Iterable
from datetime import UTC, datetime

from app.db.helpers import DatabaseError
from app.infrastructure.observability.logging import get_logger

from .domain.models import (
    ACCEPTED_STATUS,
    OPEN_STATUS,
    AggregateStats,
    BidSummary,
    ContractorProfile,
    DashboardOverview,
    Project,
    ProjectFeedItem,
)
from .errors import DataStoreQueryFailed, DataStoreUnavailable, Unauthorized
from .repository import ContractorDashboardRepository

logger = get_logger(__name__)

FEED_LIMIT = 5


def compute_bid_stats(
    bid_statuses: Iterable[str], profile: ContractorProfile | None
) -> AggregateStats:
    statuses = list(bid_statuses)
    accepted = sum(1 for status in statuses if status == ACCEPTED_STATUS)
    rating = profile.rating if profile and profile.rating is not None else 0.0
    return AggregateStats(total_bids=len(statuses), accepted_bids=accepted, rating=rating)


def has_viewer_bid(viewer_id: str, bids: Iterable[BidSummary]) -> bool:
    return any(bid.contractor_id == viewer_id for bid in bids)


def annotate_projects(
    viewer_id: str, projects: Iterable[Project], limit: int = FEED_LIMIT
) -> tuple[ProjectFeedItem, ...]:
    """
    Build the feed: open projects only, newest first, at most ``limit`` items.

    The store already filters, orders and limits; this re-applies the same
    rules so the feed holds its shape whatever the rows look like. The sort
    is stable, so rows with equal timestamps keep the store's order.
    """
    open_projects = [project for project in projects if project.status == OPEN_STATUS]
    open_projects.sort(key=lambda project: project.created_at, reverse=True)
    return tuple(
        ProjectFeedItem(project=project, already_bid=has_viewer_bid(viewer_id, project.bids))
        for project in open_projects[:limit]
    )


class DashboardAggregationService:
    def __init__(self, repository: type[ContractorDashboardRepository] = ContractorDashboardRepository):
        self.repository = repository

    async def aggregate(self, viewer_id: str | None) -> DashboardOverview:
        """
        Run one aggregation for ``viewer_id``.

        The three reads are issued together and joined before anything is
        derived. A failed bids or projects read fails the whole call; a failed
        profile read counts as "no profile yet" and yields rating 0.

        Raises:
            Unauthorized: viewer_id is empty or missing
            DataStoreUnavailable: the bids or projects read could not reach the store
            DataStoreQueryFailed: the store rejected the bids or projects query
        """
        if not viewer_id or not viewer_id.strip():
            raise Unauthorized()

        start_time = time.time()

        profile_result, bids_result, projects_result = await asyncio.gather(
            self.repository.fetch_contractor_profile(viewer_id),
            self.repository.fetch_bid_statuses(viewer_id),
            self.repository.fetch_open_projects(FEED_LIMIT),
            return_exceptions=True,
        )

        for result in (profile_result, bids_result, projects_result):
            # Cancellation and interpreter exits are not store failures
            if isinstance(result, BaseException) and not isinstance(result, Exception):
                raise result

        self._raise_on_failure(viewer_id, "fetch_bid_statuses", bids_result)
        self._raise_on_failure(viewer_id, "fetch_open_projects", projects_result)

        profile: ContractorProfile | None
        if isinstance(profile_result, Exception):
            if not isinstance(profile_result, DatabaseError):
                raise profile_result
            logger.warning(
                "Contractor profile read failed, using default rating",
                viewer_id=viewer_id,
                error=str(profile_result),
            )
            profile = None
        else:
            profile = profile_result

        stats = compute_bid_stats(bids_result, profile)
        feed = annotate_projects(viewer_id, projects_result)

        logger.info(
            "Dashboard aggregated",
            viewer_id=viewer_id,
            total_bids=stats.total_bids,
            accepted_bids=stats.accepted_bids,
            has_profile=profile is not None,
            feed_size=len(feed),
            duration_ms=round((time.time() - start_time) * 1000, 2),
        )

        return DashboardOverview(
            viewer_id=viewer_id,
            stats=stats,
            feed=feed,
            generated_at=datetime.now(UTC),
        )

    @staticmethod
    def _raise_on_failure(viewer_id: str, operation: str, result: object) -> None:
        if not isinstance(result, Exception):
            return
        if isinstance(result, DatabaseError):
            logger.error(
                "Dashboard read failed",
                viewer_id=viewer_id,
                operation=operation,
                recoverable=result.recoverable,
                error=str(result),
            )
            error_cls = DataStoreUnavailable if result.recoverable else DataStoreQueryFailed
            raise error_cls(
                f"Dashboard data unavailable: {result}",
                viewer_id=viewer_id,
                operation=operation,
            ) from result
        raise result


dashboard_aggregation_service = DashboardAggregationService()
