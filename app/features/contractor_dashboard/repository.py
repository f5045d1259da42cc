"""
Repository for the contractor dashboard reads.

Three independent, read-only queries against the Supabase Postgres schema:
the viewer's contractor profile, the statuses of the viewer's bids, and the
newest open projects with their bid summaries joined in.
"""

from typing import Any

from app.db.helpers import fetch_all, fetch_one
from app.infrastructure.observability.logging import get_logger

from .domain.models import BidSummary, ContractorProfile, Project

logger = get_logger(__name__)


def _to_float(value: Any) -> float | None:
    # numeric columns come back as Decimal
    return float(value) if value is not None else None


def _row_to_project(row: dict[str, Any]) -> Project:
    bids = [
        BidSummary(id=str(bid["id"]), contractor_id=str(bid["contractor_id"]))
        for bid in row.get("bids") or []
        if bid and bid.get("contractor_id") is not None
    ]
    return Project(
        id=str(row["id"]),
        title=row.get("title") or "",
        description=row.get("description"),
        city=row.get("city"),
        budget_min=_to_float(row.get("budget_min")),
        budget_max=_to_float(row.get("budget_max")),
        created_at=row["created_at"],
        status=row["status"],
        bids=bids,
    )


class ContractorDashboardRepository:
    """Raw SQL helpers for the contractor dashboard."""

    @classmethod
    async def fetch_contractor_profile(cls, viewer_id: str) -> ContractorProfile | None:
        query = """
            SELECT
                user_id::text AS user_id,
                COALESCE(rating, 0) AS rating
            FROM contractors
            WHERE user_id = %s
            LIMIT 1
        """

        row = await fetch_one(query, (viewer_id,))
        if not row:
            return None
        # the column has no CHECK constraint and the API only reports ratings >= 0
        rating = max(_to_float(row["rating"]) or 0.0, 0.0)
        return ContractorProfile(user_id=row["user_id"], rating=rating)

    @classmethod
    async def fetch_bid_statuses(cls, viewer_id: str) -> list[str]:
        query = """
            SELECT status
            FROM bids
            WHERE contractor_id = %s
        """

        rows = await fetch_all(query, (viewer_id,))
        return [row["status"] for row in rows]

    @classmethod
    async def fetch_open_projects(cls, limit: int) -> list[Project]:
        """
        Newest open projects first, each with its (id, contractor_id) bid rows.

        Ties on created_at fall back to id so repeated reads keep one order.
        """
        query = """
            SELECT
                p.id::text AS id,
                p.title,
                p.description,
                p.city,
                p.budget_min,
                p.budget_max,
                p.created_at,
                p.status,
                COALESCE(pb.bids, '[]'::json) AS bids
            FROM projects p
            LEFT JOIN LATERAL (
                SELECT json_agg(
                    json_build_object('id', b.id::text, 'contractor_id', b.contractor_id::text)
                ) AS bids
                FROM bids b
                WHERE b.project_id = p.id
            ) pb ON true
            WHERE p.status = 'open'
            ORDER BY p.created_at DESC, p.id
            LIMIT %s
        """

        rows = await fetch_all(query, (limit,))
        projects = [_row_to_project(row) for row in rows]
        logger.debug("Open projects fetched", count=len(projects), limit=limit)
        return projects
