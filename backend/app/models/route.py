"""Route models - directions provider shapes and day segments."""

from pydantic import BaseModel, ConfigDict, Field

from backend.app.models.common import Coordinate, Location


class RouteStep(BaseModel):
    """Atomic maneuver within a leg, as returned by the directions provider."""

    model_config = ConfigDict(frozen=True)

    start_location: Coordinate
    end_location: Coordinate
    distance_meters: int = Field(..., ge=0)
    duration_seconds: int = Field(..., ge=0)
    instructions: str | None = None


class RouteLeg(BaseModel):
    """Origin-to-destination leg made of ordered steps."""

    model_config = ConfigDict(frozen=True)

    start_address: str
    end_address: str
    start_location: Coordinate
    end_location: Coordinate
    distance_meters: int = Field(..., ge=0)
    duration_seconds: int = Field(..., ge=0)
    steps: list[RouteStep]


class Route(BaseModel):
    """Route returned by the directions provider."""

    model_config = ConfigDict(frozen=True)

    legs: list[RouteLeg]
    summary: str | None = None

    @property
    def steps(self) -> list[RouteStep]:
        """All steps flattened in traversal order."""
        return [step for leg in self.legs for step in leg.steps]

    @property
    def total_distance_meters(self) -> int:
        return sum(step.distance_meters for step in self.steps)


class DaySegment(BaseModel):
    """One day of a point-to-point trip."""

    day_number: int = Field(..., ge=1)
    start_location: Location
    end_location: Location
    mid_point: Location
    distance_km: float = Field(..., ge=0)
    duration_minutes: float = Field(..., ge=0)
    steps: list[RouteStep]
