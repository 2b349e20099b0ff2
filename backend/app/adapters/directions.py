"""Directions adapter using the Google Directions API."""

import logging
from typing import Any

from backend.app.adapters.calls import ProviderClient
from backend.app.config import Settings
from backend.app.errors import ProviderError, RouteUnavailable
from backend.app.models.common import Coordinate, Location, TransportMode
from backend.app.models.route import Route, RouteLeg, RouteStep

logger = logging.getLogger(__name__)

PROVIDER_MODES: dict[TransportMode, str] = {
    TransportMode.walking: "walking",
    TransportMode.bicycle: "bicycling",
    TransportMode.public: "transit",
    TransportMode.car: "driving",
}

# Statuses meaning "the provider answered, but there is nothing to drive"
NO_ROUTE_STATUSES = frozenset(
    {
        "ZERO_RESULTS",
        "NOT_FOUND",
        "INVALID_REQUEST",
        "MAX_WAYPOINTS_EXCEEDED",
        "MAX_ROUTE_LENGTH_EXCEEDED",
    }
)


def provider_mode(mode: TransportMode | str | None) -> str:
    """Map a transportation type to the provider's mode vocabulary (default: driving)."""
    return PROVIDER_MODES[TransportMode.coerce(mode)]


def _coordinate(raw: dict[str, Any]) -> Coordinate:
    return Coordinate(lat=raw["lat"], lng=raw["lng"])


def parse_route(raw: dict[str, Any]) -> Route:
    """Convert one provider route object into a Route.

    Raises:
        KeyError, TypeError, ValueError: If the route object is malformed
    """
    legs = []
    for raw_leg in raw["legs"]:
        steps = [
            RouteStep(
                start_location=_coordinate(raw_step["start_location"]),
                end_location=_coordinate(raw_step["end_location"]),
                distance_meters=raw_step["distance"]["value"],
                duration_seconds=raw_step["duration"]["value"],
                instructions=raw_step.get("html_instructions"),
            )
            for raw_step in raw_leg.get("steps", [])
        ]
        legs.append(
            RouteLeg(
                start_address=raw_leg.get("start_address", ""),
                end_address=raw_leg.get("end_address", ""),
                start_location=_coordinate(raw_leg["start_location"]),
                end_location=_coordinate(raw_leg["end_location"]),
                distance_meters=raw_leg["distance"]["value"],
                duration_seconds=raw_leg["duration"]["value"],
                steps=steps,
            )
        )
    return Route(legs=legs, summary=raw.get("summary"))


class DirectionsAdapter:
    """Fetches routes between two locations."""

    def __init__(self, provider: ProviderClient, settings: Settings) -> None:
        self._provider = provider
        self._settings = settings

    async def get_route(
        self,
        origin: Location,
        destination: Location,
        mode: TransportMode | str | None = TransportMode.car,
    ) -> Route:
        """Fetch the first route the provider returns.

        Args:
            origin: Route start
            destination: Route end
            mode: Transportation type (unknown or missing means car)

        Returns:
            Route with ordered legs and steps

        Raises:
            RouteUnavailable: Provider found no route, or the route has no steps
            ProviderError: Call failed (timeout, auth, quota, transport, bad payload)
        """
        params = {
            "origin": f"{origin.coordinates.lat},{origin.coordinates.lng}",
            "destination": f"{destination.coordinates.lat},{destination.coordinates.lng}",
            "mode": provider_mode(mode),
            "key": self._settings.google_maps_api_key,
        }

        data = await self._provider.get_json("directions", self._settings.directions_url, params)

        status = data.get("status", "OK")
        if status in NO_ROUTE_STATUSES:
            self._provider.reject("directions", status)
            raise RouteUnavailable(
                f"No route found from {origin.name} to {destination.name} ({status})"
            )
        if status != "OK":
            self._provider.reject("directions", status)
            message = data.get("error_message") or status
            raise ProviderError(f"Directions provider error: {message}")

        routes = data.get("routes") or []
        if not routes:
            raise RouteUnavailable(f"No route found from {origin.name} to {destination.name}")

        try:
            route = parse_route(routes[0])
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Malformed directions payload: {e}")
            raise ProviderError("Directions provider returned a malformed route") from e

        if not route.steps:
            raise RouteUnavailable(
                f"Route from {origin.name} to {destination.name} has no steps"
            )

        logger.debug(
            f"Route {origin.name} -> {destination.name}: "
            f"{len(route.legs)} legs, {len(route.steps)} steps, "
            f"{route.total_distance_meters} m"
        )
        return route
