"""Common types and enums shared across all models."""

from enum import Enum

from pydantic import BaseModel, Field


class Coordinate(BaseModel):
    """Geographic coordinates (WGS84)."""

    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class Location(BaseModel):
    """Named point on the map."""

    name: str
    coordinates: Coordinate


class TransportMode(str, Enum):
    """Transportation type chosen for a trip."""

    walking = "walking"
    bicycle = "bicycle"
    public = "public"
    car = "car"

    @classmethod
    def coerce(cls, value: object) -> "TransportMode":
        """Resolve a raw value to a mode, falling back to car for unknown/missing."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.car


class RouteType(str, Enum):
    """Planning mode a travel plan was generated with."""

    point_to_point = "point-to-point"
    proximity_based = "proximity-based"


class PointType(str, Enum):
    """Kind of travel point stored under a plan."""

    day = "day"
    attraction = "attraction"
    food = "food"
    accommodation = "accommodation"
