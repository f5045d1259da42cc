"""
Contractor dashboard routes.

GET /contractor/dashboard
    Bid statistics, rating and the newest open projects for the
    authenticated contractor.

Status codes:
    200: aggregation succeeded (empty stats/feed included)
    401: invalid token or no user id in it
    500: the database rejected a dashboard query; retrying will not help
    503: the database could not be reached; retry the whole request
"""

from fastapi import APIRouter, Depends, HTTPException, status

from app.auth.verify import viewer_id_dependency
from app.config import settings
from app.infrastructure.observability.logging import get_logger
from app.models.api.dashboard_response import DashboardResponse

from ..errors import DataStoreQueryFailed, DataStoreUnavailable, Unauthorized
from ..service import DashboardAggregationService, dashboard_aggregation_service

router = APIRouter(prefix="/contractor", tags=["contractor-dashboard"])
logger = get_logger(__name__)


def get_dashboard_service() -> DashboardAggregationService:
    return dashboard_aggregation_service


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    viewer_id: str = Depends(viewer_id_dependency),
    service: DashboardAggregationService = Depends(get_dashboard_service),
):
    try:
        overview = await service.aggregate(viewer_id)
    except Unauthorized as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
    except DataStoreUnavailable as e:
        logger.error(
            "Dashboard unavailable",
            viewer_id=viewer_id,
            operation=e.operation,
            error=str(e),
        )
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Dashboard data is temporarily unavailable",
            headers={"Retry-After": str(settings.DASHBOARD_RETRY_AFTER_SECONDS)},
        ) from e
    except DataStoreQueryFailed as e:
        logger.error(
            "Dashboard query rejected",
            viewer_id=viewer_id,
            operation=e.operation,
            error=str(e),
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Dashboard data could not be loaded",
        ) from e

    return DashboardResponse.from_domain(overview)
