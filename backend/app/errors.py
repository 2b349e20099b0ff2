"""Planning error taxonomy.

Every error carries a human-readable message plus the HTTP status the API
boundary maps it to.
"""


class PlanningError(Exception):
    """Base class for all planning failures."""

    status_code: int = 500
    code: str = "planning_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidRequest(PlanningError):
    """Request rejected before any external call."""

    status_code = 400
    code = "invalid_request"


class RouteUnavailable(PlanningError):
    """Directions provider found no usable route."""

    status_code = 400
    code = "route_unavailable"


class NoCandidatesFound(PlanningError):
    """No points of interest matched the search."""

    status_code = 404
    code = "no_candidates_found"


class PlanNotFound(PlanningError):
    """Stored plan does not exist or belongs to another user."""

    status_code = 404
    code = "plan_not_found"


class ProviderError(PlanningError):
    """External provider call failed (timeout, auth, quota, transport)."""

    status_code = 500
    code = "provider_error"
