"""Models package - re-exports for convenience."""

from backend.app.models.answer import (
    ApiResponse,
    DayPlan,
    EnrichedDaySegment,
    PointToPointPlanResponse,
    ProximityPlanResponse,
)
from backend.app.models.common import (
    Coordinate,
    Location,
    PointType,
    RouteType,
    TransportMode,
)
from backend.app.models.intent import PlanPreferences, PointToPointRequest, ProximityRequest
from backend.app.models.places import AttractionCandidate, DayBucket, PlaceSuggestion
from backend.app.models.plan import PlanTree, TravelPlan, TravelPoint
from backend.app.models.route import DaySegment, Route, RouteLeg, RouteStep

__all__ = [
    # Common
    "Coordinate",
    "Location",
    "TransportMode",
    "RouteType",
    "PointType",
    # Intent
    "PlanPreferences",
    "PointToPointRequest",
    "ProximityRequest",
    # Route
    "RouteStep",
    "RouteLeg",
    "Route",
    "DaySegment",
    # Places
    "PlaceSuggestion",
    "AttractionCandidate",
    "DayBucket",
    # Plan
    "TravelPlan",
    "TravelPoint",
    "PlanTree",
    # Responses
    "EnrichedDaySegment",
    "DayPlan",
    "PointToPointPlanResponse",
    "ProximityPlanResponse",
    "ApiResponse",
]
