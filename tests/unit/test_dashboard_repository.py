from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from app.db.helpers import DatabaseError
from app.features.contractor_dashboard.repository import ContractorDashboardRepository

MODULE = "app.features.contractor_dashboard.repository"


@pytest.mark.asyncio
async def test_profile_row_maps_rating(monkeypatch):
    fetch_one_mock = AsyncMock(return_value={"user_id": "user-123", "rating": Decimal("4.5")})
    monkeypatch.setattr(f"{MODULE}.fetch_one", fetch_one_mock)

    profile = await ContractorDashboardRepository.fetch_contractor_profile("user-123")

    assert profile.user_id == "user-123"
    assert profile.rating == 4.5
    assert fetch_one_mock.await_args.args[1] == ("user-123",)


@pytest.mark.asyncio
async def test_missing_profile_is_none(monkeypatch):
    monkeypatch.setattr(f"{MODULE}.fetch_one", AsyncMock(return_value=None))

    assert await ContractorDashboardRepository.fetch_contractor_profile("user-123") is None


@pytest.mark.asyncio
async def test_bid_statuses_are_projected(monkeypatch):
    fetch_all_mock = AsyncMock(return_value=[{"status": "accepted"}, {"status": "pending"}])
    monkeypatch.setattr(f"{MODULE}.fetch_all", fetch_all_mock)

    statuses = await ContractorDashboardRepository.fetch_bid_statuses("user-123")

    assert statuses == ["accepted", "pending"]
    query, params = fetch_all_mock.await_args.args
    assert "contractor_id = %s" in query
    assert params == ("user-123",)


@pytest.mark.asyncio
async def test_open_projects_rows_map_to_domain(monkeypatch):
    created_at = datetime(2026, 10, 18, 9, 30, tzinfo=UTC)
    fetch_all_mock = AsyncMock(
        return_value=[
            {
                "id": "p1",
                "title": "Bathroom remodel",
                "description": "Retile floor",
                "city": "Mumbai",
                "budget_min": Decimal("25000"),
                "budget_max": None,
                "created_at": created_at,
                "status": "open",
                "bids": [
                    {"id": "b1", "contractor_id": "user-123"},
                    {"id": "b2", "contractor_id": "other"},
                ],
            },
            {
                "id": "p2",
                "title": "Roof repair",
                "description": None,
                "city": None,
                "budget_min": None,
                "budget_max": None,
                "created_at": created_at,
                "status": "open",
                "bids": [],
            },
        ]
    )
    monkeypatch.setattr(f"{MODULE}.fetch_all", fetch_all_mock)

    projects = await ContractorDashboardRepository.fetch_open_projects(5)

    first, second = projects
    assert first.budget_min == 25000.0
    assert first.budget_max is None
    assert [bid.contractor_id for bid in first.bids] == ["user-123", "other"]
    assert second.bids == []
    assert second.description is None

    query, params = fetch_all_mock.await_args.args
    assert params == (5,)
    assert "p.status = 'open'" in query
    assert "ORDER BY p.created_at DESC" in query
    assert "LIMIT %s" in query


@pytest.mark.asyncio
async def test_database_errors_propagate(monkeypatch):
    monkeypatch.setattr(f"{MODULE}.fetch_all", AsyncMock(side_effect=DatabaseError("down")))

    with pytest.raises(DatabaseError):
        await ContractorDashboardRepository.fetch_open_projects(5)


@pytest.mark.asyncio
async def test_negative_rating_is_clamped_to_zero(monkeypatch):
    monkeypatch.setattr(
        f"{MODULE}.fetch_one", AsyncMock(return_value={"user_id": "user-123", "rating": Decimal("-1.5")})
    )

    profile = await ContractorDashboardRepository.fetch_contractor_profile("user-123")

    assert profile.rating == 0.0


@pytest.mark.asyncio
async def test_null_title_maps_to_empty_string(monkeypatch):
    row = {
        "id": "p1",
        "title": None,
        "description": None,
        "city": None,
        "budget_min": None,
        "budget_max": None,
        "created_at": datetime(2026, 10, 18, 9, 30, tzinfo=UTC),
        "status": "open",
        "bids": None,
    }
    monkeypatch.setattr(f"{MODULE}.fetch_all", AsyncMock(return_value=[row]))

    (project,) = await ContractorDashboardRepository.fetch_open_projects(5)

    assert project.title == ""
    assert project.bids == []
