"""Places models - nearby-search results and proximity day buckets."""

from pydantic import BaseModel, Field

from backend.app.models.common import Coordinate, Location


class PlaceSuggestion(BaseModel):
    """Food, lodging or attraction result from the places provider."""

    place_id: str
    name: str
    description: str = ""
    location: Location
    category: str
    rating: float | None = None
    distance_km: float | None = Field(
        default=None, ge=0, description="Distance from the point the search was made around"
    )


class AttractionCandidate(BaseModel):
    """Point of interest considered for proximity-based planning."""

    place_id: str
    name: str
    description: str = ""
    coordinates: Coordinate
    distance_from_start: float = Field(..., ge=0)
    distance_from_previous: float | None = Field(default=None, ge=0)

    @property
    def location(self) -> Location:
        return Location(name=self.name, coordinates=self.coordinates)


class DayBucket(BaseModel):
    """One day of a proximity-based trip, attractions in visiting order."""

    day_number: int = Field(..., ge=1)
    attractions: list[AttractionCandidate]
    start_point: Location
    end_point: Location
