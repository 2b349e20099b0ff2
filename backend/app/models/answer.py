"""Response models for the /ai-route endpoints."""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

from backend.app.models.common import Location
from backend.app.models.places import AttractionCandidate, PlaceSuggestion
from backend.app.models.plan import TravelPlan
from backend.app.models.route import DaySegment

T = TypeVar("T")


class EnrichedDaySegment(DaySegment):
    """Point-to-point day with amenities attached."""

    attractions: list[PlaceSuggestion] = Field(default_factory=list)
    food_options: list[PlaceSuggestion] = Field(default_factory=list)
    accommodations: list[PlaceSuggestion] = Field(default_factory=list)


class DayPlan(BaseModel):
    """Proximity-based day with amenities attached."""

    day_number: int = Field(..., ge=1)
    attractions: list[AttractionCandidate]
    food_options: list[PlaceSuggestion] = Field(default_factory=list)
    accommodations: list[PlaceSuggestion] = Field(default_factory=list)
    start_point: Location
    end_point: Location


class PointToPointPlanResponse(BaseModel):
    """Result of a point-to-point generation."""

    travel_plan: TravelPlan
    daily_segments: list[EnrichedDaySegment]


class ProximityPlanResponse(BaseModel):
    """Result of a proximity-based generation."""

    travel_plan: TravelPlan
    daily_plans: list[DayPlan]


class ApiResponse(BaseModel, Generic[T]):
    """Envelope returned by every /ai-route endpoint."""

    success: bool = True
    data: T
