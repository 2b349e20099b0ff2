"""Amenity lookups (attractions, food, lodging) around day segments and buckets.

Lookups for different days run concurrently in an asyncio.TaskGroup; results
are re-joined by day index. A failing lookup cancels its siblings, waits for
them to finish, and the ProviderError propagates to the caller.
"""

import asyncio
import logging
import math
from collections.abc import Coroutine, Iterable, Sequence
from typing import Any, TypeVar

from backend.app.adapters.places import (
    ATTRACTION_TYPE,
    FOOD_TYPE,
    LODGING_TYPE,
    PlacesAdapter,
)
from backend.app.errors import InvalidRequest
from backend.app.geo.distance import detour_km, distance_km, midpoint
from backend.app.models.answer import DayPlan, EnrichedDaySegment
from backend.app.models.common import Location
from backend.app.models.places import DayBucket, PlaceSuggestion
from backend.app.models.route import DaySegment

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Maximum detour (km) per amenity kind
ATTRACTION_DETOUR_KM = 5.0
FOOD_DETOUR_KM = 3.0
ACCOMMODATION_DETOUR_KM = 5.0

MAX_PRICE_LEVEL = 4


def parse_price_range(price_range: str | None) -> tuple[int | None, int | None]:
    """Parse "min-max" (or a single level) on the provider's 0-4 price scale.

    Raises:
        InvalidRequest: If the range is malformed or out of bounds
    """
    if price_range is None or not price_range.strip():
        return None, None

    parts = [p.strip() for p in price_range.split("-")]
    try:
        if len(parts) == 1:
            low = high = int(parts[0])
        elif len(parts) == 2:
            low, high = int(parts[0]), int(parts[1])
        else:
            raise ValueError(price_range)
    except ValueError as e:
        raise InvalidRequest(f"Invalid price range '{price_range}' (expected e.g. '1-3')") from e

    if not (0 <= low <= high <= MAX_PRICE_LEVEL):
        raise InvalidRequest(
            f"Invalid price range '{price_range}' (levels must satisfy 0 <= min <= max <= 4)"
        )
    return low, high


def dedupe_places(places: Iterable[PlaceSuggestion]) -> list[PlaceSuggestion]:
    seen: set[str] = set()
    unique = []
    for place in places:
        if place.place_id not in seen:
            seen.add(place.place_id)
            unique.append(place)
    return unique


async def gather_all(*coros: Coroutine[Any, Any, T]) -> list[T]:
    """Run coroutines concurrently and return their results in argument order.

    The first failure cancels the remaining lookups and waits for them to
    finish before it is re-raised unwrapped (never as an ExceptionGroup).
    """
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(coro) for coro in coros]
    except BaseExceptionGroup as errors:
        raise errors.exceptions[0]
    return [task.result() for task in tasks]


def check_detour(max_detour_km: float) -> None:
    if not math.isfinite(max_detour_km) or max_detour_km <= 0:
        raise InvalidRequest("max_detour must be a positive number")


class AmenityEnricher:
    """Attaches attractions, food and lodging suggestions to planned days."""

    def __init__(self, places: PlacesAdapter) -> None:
        self._places = places

    async def find_attractions(
        self,
        start: Location,
        end: Location | None,
        interests: Sequence[str] = (),
        max_detour_km: float = ATTRACTION_DETOUR_KM,
    ) -> list[PlaceSuggestion]:
        """Find attractions around a point, or along the way between two points.

        Without `end`, every place within max_detour_km of `start` qualifies.
        With `end`, places qualify when passing through them costs at most
        max_detour_km extra. One search is made per interest.

        Returns:
            De-duplicated places sorted by distance from `start`
        """
        check_detour(max_detour_km)

        if end is None:
            center = start.coordinates
            radius = max_detour_km
        else:
            center = midpoint(start.coordinates, end.coordinates)
            radius = distance_km(start.coordinates, end.coordinates) / 2 + max_detour_km

        keywords: list[str | None] = list(interests) or [None]
        results = await gather_all(
            *[
                self._places.search_nearby(center, radius, ATTRACTION_TYPE, keyword=keyword)
                for keyword in keywords
            ]
        )

        attractions = []
        for place in dedupe_places(p for batch in results for p in batch):
            place_coords = place.location.coordinates
            if end is None:
                within = distance_km(start.coordinates, place_coords) <= max_detour_km
            else:
                within = detour_km(start.coordinates, end.coordinates, place_coords) <= max_detour_km
            if within:
                attractions.append(
                    place.model_copy(
                        update={"distance_km": distance_km(start.coordinates, place_coords)}
                    )
                )

        attractions.sort(key=lambda p: p.distance_km or 0.0)
        logger.debug(
            f"{len(attractions)} attractions near {start.name} "
            f"(interests={list(interests)}, max_detour={max_detour_km} km)"
        )
        return attractions

    async def find_food(
        self,
        point: Location,
        max_detour_km: float = FOOD_DETOUR_KM,
        cuisines: Sequence[str] = (),
    ) -> list[PlaceSuggestion]:
        """Find restaurants near a point, optionally filtered by cuisine."""
        check_detour(max_detour_km)
        keyword = " ".join(cuisines) if cuisines else None
        places = await self._places.search_nearby(
            point.coordinates, max_detour_km, FOOD_TYPE, keyword=keyword
        )
        return self._within(places, max_detour_km)

    async def find_accommodations(
        self,
        point: Location,
        max_detour_km: float = ACCOMMODATION_DETOUR_KM,
        types: Sequence[str] = (),
        price_range: str | None = None,
    ) -> list[PlaceSuggestion]:
        """Find lodging near a point, optionally filtered by type and price level."""
        check_detour(max_detour_km)
        min_price, max_price = parse_price_range(price_range)
        keyword = " ".join(types) if types else None
        places = await self._places.search_nearby(
            point.coordinates,
            max_detour_km,
            LODGING_TYPE,
            keyword=keyword,
            min_price=min_price,
            max_price=max_price,
        )
        return self._within(places, max_detour_km)

    async def enrich_segments(
        self,
        segments: Sequence[DaySegment],
        interests: Sequence[str],
        include_food: bool,
        include_accommodation: bool,
    ) -> list[EnrichedDaySegment]:
        """Attach amenities to every point-to-point day, concurrently."""
        last_index = len(segments) - 1

        async def enrich(index: int, segment: DaySegment) -> EnrichedDaySegment:
            attractions = await self.find_attractions(
                segment.start_location, segment.end_location, interests
            )
            food = await self.find_food(segment.mid_point) if include_food else []
            lodging = (
                await self.find_accommodations(segment.end_location)
                if include_accommodation and index < last_index
                else []
            )
            return EnrichedDaySegment(
                **segment.model_dump(),
                attractions=attractions,
                food_options=food,
                accommodations=lodging,
            )

        return await gather_all(*[enrich(i, segment) for i, segment in enumerate(segments)])

    async def enrich_buckets(
        self,
        buckets: Sequence[DayBucket],
        include_food: bool,
        include_accommodation: bool,
    ) -> list[DayPlan]:
        """Attach food and lodging to every proximity day, concurrently."""
        last_index = len(buckets) - 1

        async def enrich(index: int, bucket: DayBucket) -> DayPlan:
            stops = bucket.attractions
            mid = stops[len(stops) // 2].location if stops else bucket.start_point
            last_stop = stops[-1].location if stops else bucket.start_point

            food = await self.find_food(mid) if include_food else []
            lodging = (
                await self.find_accommodations(last_stop)
                if include_accommodation and index < last_index
                else []
            )
            return DayPlan(
                day_number=bucket.day_number,
                attractions=stops,
                food_options=food,
                accommodations=lodging,
                start_point=bucket.start_point,
                end_point=bucket.end_point,
            )

        return await gather_all(*[enrich(i, bucket) for i, bucket in enumerate(buckets)])

    @staticmethod
    def _within(places: Iterable[PlaceSuggestion], max_detour_km: float) -> list[PlaceSuggestion]:
        kept = [p for p in places if p.distance_km is None or p.distance_km <= max_detour_km]
        kept.sort(key=lambda p: p.distance_km or 0.0)
        return kept
