"""Intent models - plan generation requests."""

from typing import Annotated, Any

from pydantic import BaseModel, Field, field_validator

from backend.app.models.common import Location, TransportMode


class PlanPreferences(BaseModel):
    """Options shared by both planning modes."""

    travel_days: Annotated[int, Field(ge=1)]
    transportation_type: TransportMode = TransportMode.car
    interests: list[str] = Field(default_factory=list)
    include_food: bool = False
    include_accommodation: bool = False

    @field_validator("transportation_type", mode="before")
    @classmethod
    def coerce_transportation_type(cls, v: Any) -> TransportMode:
        """Unknown or missing modes default to car."""
        return TransportMode.coerce(v)

    @field_validator("interests")
    @classmethod
    def strip_interests(cls, v: list[str]) -> list[str]:
        """Drop blank interests and surrounding whitespace."""
        return [interest.strip() for interest in v if interest.strip()]


class PointToPointRequest(PlanPreferences):
    """Plan a trip along the route between two locations."""

    start_location: Location
    end_location: Location


class ProximityRequest(PlanPreferences):
    """Plan daily excursions around a single start location."""

    start_location: Location
    max_distance_per_day: Annotated[float, Field(gt=0)] | None = None
    return_to_start: bool = False
