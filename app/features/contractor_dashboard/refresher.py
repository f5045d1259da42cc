"""
Last-request-wins coordinator for an interactive dashboard session.

A session re-aggregates whenever the viewer identity becomes available or
changes. Only the most recent request may publish its result: an older
in-flight aggregation is cancelled, and if it completes anyway its result is
dropped.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, replace
from typing import Literal

from app.infrastructure.observability.logging import get_logger

from .domain.models import DashboardOverview
from .errors import DashboardError, Unauthorized
from .service import DashboardAggregationService, dashboard_aggregation_service

logger = get_logger(__name__)

ViewStatus = Literal["idle", "loading", "ready", "empty", "failed", "unauthorized"]


@dataclass(slots=True, frozen=True)
class DashboardViewState:
    status: ViewStatus = "idle"
    viewer_id: str | None = None
    overview: DashboardOverview | None = None
    # True when overview is left over from an earlier request
    stale: bool = False
    error: DashboardError | None = None


class DashboardRefresher:
    def __init__(self, service: DashboardAggregationService = dashboard_aggregation_service):
        self._service = service
        self._generation = 0
        self._task: asyncio.Task[DashboardOverview] | None = None
        self.state = DashboardViewState()

    @property
    def in_flight(self) -> bool:
        return self._task is not None and not self._task.done()

    def cancel(self) -> None:
        """Drop any in-flight aggregation; a pending load falls back to idle."""
        self._generation += 1
        if self.in_flight:
            self._task.cancel()
        if self.state.status == "loading":
            self.state = replace(self.state, status="idle")

    async def refresh(self, viewer_id: str | None) -> DashboardViewState:
        """
        Aggregate for ``viewer_id`` and publish the result unless superseded.

        Returns the session state after this call. When a newer refresh has
        started in the meantime that is the newer request's state, untouched.
        """
        self.cancel()
        generation = self._generation

        if not viewer_id:
            self.state = DashboardViewState(status="unauthorized", error=Unauthorized())
            return self.state

        previous = self.state.overview
        if previous is not None and previous.viewer_id != viewer_id:
            # Another viewer's numbers must never show, not even as stale
            previous = None
        self.state = DashboardViewState(
            status="loading",
            viewer_id=viewer_id,
            overview=previous,
            stale=previous is not None,
        )

        task = asyncio.create_task(self._service.aggregate(viewer_id))
        self._task = task

        try:
            overview = await task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if (current is not None and current.cancelling()) or generation == self._generation:
                raise
            logger.debug("Superseded dashboard refresh cancelled", viewer_id=viewer_id)
            return self.state
        except DashboardError as exc:
            if generation != self._generation:
                return self.state
            logger.warning(
                "Dashboard refresh failed",
                viewer_id=viewer_id,
                error=str(exc),
                recoverable=exc.recoverable,
            )
            if isinstance(exc, Unauthorized):
                self.state = DashboardViewState(status="unauthorized", error=exc)
            else:
                self.state = replace(
                    self.state, status="failed", stale=self.state.overview is not None, error=exc
                )
            return self.state
        except Exception as exc:
            if generation == self._generation:
                logger.exception("Dashboard refresh crashed", viewer_id=viewer_id)
                self.state = replace(
                    self.state,
                    status="failed",
                    stale=self.state.overview is not None,
                    error=DashboardError(str(exc), viewer_id=viewer_id, recoverable=False),
                )
            raise

        if generation != self._generation:
            logger.debug("Discarding superseded dashboard result", viewer_id=viewer_id)
            return self.state

        self.state = DashboardViewState(
            status="empty" if overview.feed_empty else "ready",
            viewer_id=viewer_id,
            overview=overview,
        )
        return self.state
