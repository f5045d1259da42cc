"""
Typed failures raised by the dashboard aggregation.

An empty result (no profile, no bids, no open projects) is never an error;
these exist so callers can tell "nothing to show" from "could not load".
"""


class DashboardError(Exception):
    """Base exception for dashboard aggregation failures."""

    def __init__(self, message: str, viewer_id: str | None = None, recoverable: bool = True):
        super().__init__(message)
        self.viewer_id = viewer_id
        self.recoverable = recoverable


class DataStoreUnavailable(DashboardError):
    """The store could not be reached or failed mid-read. Retry the whole call."""

    def __init__(self, message: str, viewer_id: str | None = None, operation: str = "unknown"):
        super().__init__(message, viewer_id=viewer_id, recoverable=True)
        self.operation = operation


class Unauthorized(DashboardError):
    """The viewer identity is missing. Re-authenticate instead of retrying."""

    def __init__(self, message: str = "Viewer identity is not resolved"):
        super().__init__(message, viewer_id=None, recoverable=False)


class DataStoreQueryFailed(DashboardError):
    """The store answered but rejected the query. Retrying will not help."""

    def __init__(self, message: str, viewer_id: str | None = None, operation: str = "unknown"):
        super().__init__(message, viewer_id=viewer_id, recoverable=False)
        self.operation = operation
