"""Route planning service - point-to-point and proximity-based plan generation."""

import logging
import uuid
from collections.abc import Sequence

from backend.app.adapters.directions import DirectionsAdapter
from backend.app.db.context import RequestContext
from backend.app.db.repositories import PlanRepository
from backend.app.errors import InvalidRequest, PlanNotFound
from backend.app.geo.distance import midpoint
from backend.app.models.answer import PointToPointPlanResponse, ProximityPlanResponse
from backend.app.models.common import Location, PointType
from backend.app.models.intent import PointToPointRequest, ProximityRequest
from backend.app.models.places import AttractionCandidate, PlaceSuggestion
from backend.app.models.plan import TravelPoint
from backend.app.planning.assembler import assemble_point_to_point, assemble_proximity
from backend.app.planning.bucketer import (
    bucket_by_proximity,
    daily_distance_budget,
    search_radius_km,
)
from backend.app.planning.enricher import (
    ACCOMMODATION_DETOUR_KM,
    ATTRACTION_DETOUR_KM,
    FOOD_DETOUR_KM,
    AmenityEnricher,
    check_detour,
    dedupe_places,
    gather_all,
    parse_price_range,
)
from backend.app.planning.segmenter import split_into_days
from backend.app.utils.metrics import record_plan_created

logger = logging.getLogger(__name__)


def _check_days(travel_days: int) -> None:
    if travel_days < 1:
        raise InvalidRequest(f"travel_days must be at least 1, got {travel_days}")


def _to_candidate(place: PlaceSuggestion) -> AttractionCandidate:
    return AttractionCandidate(
        place_id=place.place_id,
        name=place.name,
        description=place.description,
        coordinates=place.location.coordinates,
        distance_from_start=place.distance_km or 0.0,
    )


class RoutePlanningService:
    """Generates multi-day plans and answers amenity lookups on stored plans."""

    def __init__(
        self,
        directions: DirectionsAdapter,
        enricher: AmenityEnricher,
        repository: PlanRepository,
    ) -> None:
        self._directions = directions
        self._enricher = enricher
        self._repository = repository

    async def generate_point_to_point(
        self, request: PointToPointRequest, ctx: RequestContext
    ) -> PointToPointPlanResponse:
        """Plan a trip along the route between two locations.

        Raises:
            InvalidRequest: Bad day count (checked before any provider call)
            RouteUnavailable: No route between the locations
            ProviderError: Directions or places provider failure
        """
        _check_days(request.travel_days)

        route = await self._directions.get_route(
            request.start_location, request.end_location, request.transportation_type
        )
        segments = split_into_days(route, request.travel_days)

        enriched = await self._enricher.enrich_segments(
            segments,
            request.interests,
            include_food=request.include_food,
            include_accommodation=request.include_accommodation,
        )

        tree = assemble_point_to_point(request, route, enriched, ctx)
        await self._repository.save_plan(tree)
        record_plan_created(tree.plan.route_type.value)

        logger.info(
            f"Point-to-point plan {tree.plan.id}: {request.start_location.name} -> "
            f"{request.end_location.name}, {len(enriched)} days, "
            f"{tree.plan.total_distance_km} km, {len(tree.points)} points"
        )
        return PointToPointPlanResponse(travel_plan=tree.plan, daily_segments=enriched)

    async def generate_proximity_based(
        self, request: ProximityRequest, ctx: RequestContext
    ) -> ProximityPlanResponse:
        """Plan daily excursions around a start location, nearest attractions first.

        Raises:
            InvalidRequest: Bad day count or budget (checked before any provider call)
            NoCandidatesFound: No attractions around the start location
            ProviderError: Places provider failure
        """
        _check_days(request.travel_days)
        budget_km = daily_distance_budget(
            request.transportation_type, request.max_distance_per_day
        )
        radius_km = search_radius_km(
            request.transportation_type, request.travel_days, request.max_distance_per_day
        )

        places = await self._enricher.find_attractions(
            request.start_location, None, request.interests, radius_km
        )
        candidates = sorted(
            (_to_candidate(place) for place in places), key=lambda c: c.distance_from_start
        )

        buckets = bucket_by_proximity(
            request.start_location,
            candidates,
            budget_km,
            request.travel_days,
            return_to_start=request.return_to_start,
        )

        days = await self._enricher.enrich_buckets(
            buckets,
            include_food=request.include_food,
            include_accommodation=request.include_accommodation,
        )

        tree = assemble_proximity(request, days, ctx)
        await self._repository.save_plan(tree)
        record_plan_created(tree.plan.route_type.value)

        logger.info(
            f"Proximity plan {tree.plan.id}: around {request.start_location.name}, "
            f"{len(candidates)} candidates, {len(days)} days, budget {budget_km} km/day"
        )
        return ProximityPlanResponse(travel_plan=tree.plan, daily_plans=days)

    async def find_attractions_on_route(
        self,
        route_id: uuid.UUID,
        ctx: RequestContext,
        interests: Sequence[str] = (),
        max_detour_km: float = ATTRACTION_DETOUR_KM,
    ) -> list[PlaceSuggestion]:
        """Attractions reachable within max_detour_km of each day's path."""
        check_detour(max_detour_km)
        markers = await self._day_markers(route_id, ctx)

        per_day = await gather_all(
            *[
                self._enricher.find_attractions(
                    _start_of(marker), _end_of(marker), interests, max_detour_km
                )
                for marker in markers
            ]
        )
        return dedupe_places(place for day in per_day for place in day)

    async def find_food_options_on_route(
        self,
        route_id: uuid.UUID,
        ctx: RequestContext,
        cuisine_types: Sequence[str] = (),
        max_detour_km: float = FOOD_DETOUR_KM,
    ) -> list[PlaceSuggestion]:
        """Restaurants near the middle of each day's path."""
        check_detour(max_detour_km)
        markers = await self._day_markers(route_id, ctx)

        per_day = await gather_all(
            *[
                self._enricher.find_food(_middle_of(marker), max_detour_km, cuisine_types)
                for marker in markers
            ]
        )
        return dedupe_places(place for day in per_day for place in day)

    async def find_accommodations_on_route(
        self,
        route_id: uuid.UUID,
        ctx: RequestContext,
        types: Sequence[str] = (),
        price_range: str | None = None,
        max_detour_km: float = ACCOMMODATION_DETOUR_KM,
    ) -> list[PlaceSuggestion]:
        """Lodging near the end of every day except the last."""
        check_detour(max_detour_km)
        parse_price_range(price_range)
        markers = await self._day_markers(route_id, ctx)

        per_day = await gather_all(
            *[
                self._enricher.find_accommodations(
                    _end_of(marker), max_detour_km, types, price_range
                )
                for marker in markers[:-1]
            ]
        )
        return dedupe_places(place for day in per_day for place in day)

    async def _day_markers(self, route_id: uuid.UUID, ctx: RequestContext) -> list[TravelPoint]:
        plan = await self._repository.get_plan(route_id, ctx)
        if plan is None:
            raise PlanNotFound(f"Travel plan {route_id} not found")

        markers = await self._repository.list_points(route_id, ctx, PointType.day)
        return sorted(markers, key=lambda m: m.day_number)


def _start_of(marker: TravelPoint) -> Location:
    return marker.start_location or marker.location


def _end_of(marker: TravelPoint) -> Location:
    return marker.end_location or marker.location


def _middle_of(marker: TravelPoint) -> Location:
    start, end = _start_of(marker), _end_of(marker)
    return Location(
        name=f"{marker.name} midpoint",
        coordinates=midpoint(start.coordinates, end.coordinates),
    )
