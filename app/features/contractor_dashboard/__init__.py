"""
Contractor dashboard feature package.

Everything behind the contractor overview screen lives here: domain models,
the read-only repository, the aggregation service, the last-request-wins
refresher and the HTTP router.
"""

from .api.router import router as dashboard_router  # noqa: F401
from .domain.models import AggregateStats, DashboardOverview, ProjectFeedItem  # noqa: F401
from .errors import (  # noqa: F401
    DashboardError,
    DataStoreQueryFailed,
    DataStoreUnavailable,
    Unauthorized,
)
from .refresher import DashboardRefresher, DashboardViewState  # noqa: F401
from .service import (  # noqa: F401
    FEED_LIMIT,
    DashboardAggregationService,
    dashboard_aggregation_service,
)
