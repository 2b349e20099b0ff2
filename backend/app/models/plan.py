"""Plan models - persisted travel plans and their points."""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime

from pydantic import BaseModel, Field

from backend.app.models.common import Location, PointType, RouteType, TransportMode


class TravelPlan(BaseModel):
    """Plan record created once per generation request."""

    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    description: str
    start_date: date
    end_date: date
    transportation_type: TransportMode
    total_distance_km: float = Field(..., ge=0)
    route_type: RouteType
    created_at: datetime


class TravelPoint(BaseModel):
    """Day marker or an amenity attached to a day marker."""

    id: uuid.UUID
    travel_plan_id: uuid.UUID
    parent_point_id: uuid.UUID | None = None
    type: PointType
    name: str
    description: str = ""
    location: Location
    day_number: int = Field(..., ge=1)
    # Day markers only
    start_location: Location | None = None
    end_location: Location | None = None
    distance_km: float | None = None
    duration_minutes: float | None = None


@dataclass
class PlanTree:
    """Plan plus all of its points, built in memory before a single write."""

    plan: TravelPlan
    points: list[TravelPoint] = field(default_factory=list)

    def day_markers(self) -> list[TravelPoint]:
        return [p for p in self.points if p.type == PointType.day]

    def children_of(self, marker: TravelPoint) -> list[TravelPoint]:
        return [p for p in self.points if p.parent_point_id == marker.id]
