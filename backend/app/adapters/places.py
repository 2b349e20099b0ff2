"""Places adapter using the Google Places Nearby Search API."""

import logging
from typing import Any

from backend.app.adapters.calls import ProviderClient
from backend.app.config import Settings
from backend.app.errors import ProviderError
from backend.app.geo.distance import distance_km
from backend.app.models.common import Coordinate, Location
from backend.app.models.places import PlaceSuggestion

logger = logging.getLogger(__name__)

ATTRACTION_TYPE = "tourist_attraction"
FOOD_TYPE = "restaurant"
LODGING_TYPE = "lodging"


def _description(raw: dict[str, Any]) -> str:
    """Use the vicinity, falling back to the place types."""
    if raw.get("vicinity"):
        return str(raw["vicinity"])
    types = [t.replace("_", " ") for t in raw.get("types", []) if t != "point_of_interest"]
    return ", ".join(types)


def parse_place(raw: dict[str, Any], center: Coordinate, category: str) -> PlaceSuggestion:
    """Convert one provider result into a PlaceSuggestion.

    Raises:
        KeyError, TypeError, ValueError: If the result is malformed
    """
    raw_location = raw["geometry"]["location"]
    coordinates = Coordinate(lat=raw_location["lat"], lng=raw_location["lng"])
    name = raw["name"]
    return PlaceSuggestion(
        place_id=raw.get("place_id") or f"{name}@{coordinates.lat:.6f},{coordinates.lng:.6f}",
        name=name,
        description=_description(raw),
        location=Location(name=name, coordinates=coordinates),
        category=category,
        rating=raw.get("rating"),
        distance_km=distance_km(center, coordinates),
    )


class PlacesAdapter:
    """Searches points of interest around a coordinate."""

    def __init__(self, provider: ProviderClient, settings: Settings) -> None:
        self._provider = provider
        self._settings = settings

    async def search_nearby(
        self,
        center: Coordinate,
        radius_km: float,
        place_type: str,
        keyword: str | None = None,
        min_price: int | None = None,
        max_price: int | None = None,
    ) -> list[PlaceSuggestion]:
        """Search places of one type within a radius.

        Args:
            center: Search center
            radius_km: Search radius, clamped to the provider maximum
            place_type: Provider place type (e.g. "restaurant")
            keyword: Optional free-text filter (cuisine, interest, lodging type)
            min_price: Optional minimum provider price level (0-4)
            max_price: Optional maximum provider price level (0-4)

        Returns:
            Places in provider order; empty when the provider has no results

        Raises:
            ProviderError: Call failed or the provider rejected it
        """
        radius_m = int(min(radius_km, self._settings.places_max_radius_km) * 1000)
        params: dict[str, Any] = {
            "location": f"{center.lat},{center.lng}",
            "radius": max(radius_m, 1),
            "type": place_type,
            "key": self._settings.google_maps_api_key,
        }
        if keyword:
            params["keyword"] = keyword
        if min_price is not None:
            params["minprice"] = min_price
        if max_price is not None:
            params["maxprice"] = max_price

        data = await self._provider.get_json("nearby_search", self._settings.places_url, params)

        status = data.get("status", "OK")
        if status == "ZERO_RESULTS":
            return []
        if status != "OK":
            self._provider.reject("nearby_search", status)
            message = data.get("error_message") or status
            raise ProviderError(f"Places provider error: {message}")

        places: list[PlaceSuggestion] = []
        for raw in data.get("results", []):
            try:
                places.append(parse_place(raw, center, place_type))
            except (KeyError, TypeError, ValueError) as e:
                # Malformed entries are dropped individually
                logger.warning(f"Skipping malformed place result: {e}")
        return places
