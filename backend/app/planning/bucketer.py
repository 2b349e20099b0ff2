"""Proximity-based day bucketing under a per-day distance budget."""

import math
from collections.abc import Sequence

from backend.app.errors import InvalidRequest, NoCandidatesFound
from backend.app.geo.distance import distance_km
from backend.app.models.common import Coordinate, Location, TransportMode
from backend.app.models.places import AttractionCandidate, DayBucket

# Daily distance budgets (km) per transportation type
DEFAULT_DAILY_DISTANCE_KM: dict[TransportMode, float] = {
    TransportMode.walking: 10.0,
    TransportMode.bicycle: 30.0,
    TransportMode.public: 50.0,
    TransportMode.car: 150.0,
}


def daily_distance_budget(
    mode: TransportMode | str | None, max_distance_per_day: float | None = None
) -> float:
    """Per-day distance budget in km; an explicit cap overrides the mode default."""
    if max_distance_per_day is not None:
        if not math.isfinite(max_distance_per_day) or max_distance_per_day <= 0:
            raise InvalidRequest("max_distance_per_day must be positive")
        return max_distance_per_day
    return DEFAULT_DAILY_DISTANCE_KM[TransportMode.coerce(mode)]


def search_radius_km(
    mode: TransportMode | str | None, day_count: int, max_distance_per_day: float | None = None
) -> float:
    """Radius to search for candidates: one daily budget per travel day."""
    return daily_distance_budget(mode, max_distance_per_day) * day_count


def bucket_by_proximity(
    start: Location,
    candidates: Sequence[AttractionCandidate],
    max_distance_per_day: float,
    day_count: int,
    return_to_start: bool = False,
) -> list[DayBucket]:
    """Greedily assign nearest-first candidates to days.

    Each candidate is chained from the previous stop. When adding it would
    push the day over budget, the current day is closed and the next day
    starts again from `start`, so days are excursions from the origin rather
    than one continuous tour. The candidate that caused the overflow always
    opens the new day. Once day_count - 1 days are closed, the open day is
    closed as soon as it holds a candidate and the remaining candidates are
    dropped.

    Args:
        start: Origin every day departs from
        candidates: Candidates sorted ascending by distance_from_start
        max_distance_per_day: Daily budget in km
        day_count: Maximum number of days to emit
        return_to_start: End every day back at `start` instead of the last stop

    Returns:
        At most day_count buckets, numbered from 1

    Raises:
        NoCandidatesFound: If candidates is empty
        InvalidRequest: If day_count < 1 or the budget is not positive
    """
    if not candidates:
        raise NoCandidatesFound("No attractions matched the search criteria")
    if day_count < 1:
        raise InvalidRequest(f"travel_days must be at least 1, got {day_count}")
    if not math.isfinite(max_distance_per_day) or max_distance_per_day <= 0:
        raise InvalidRequest("max_distance_per_day must be positive")

    days: list[list[AttractionCandidate]] = []
    current_day: list[AttractionCandidate] = []
    current_distance = 0.0
    previous: Coordinate = start.coordinates

    for candidate in candidates:
        leg_km = distance_km(previous, candidate.coordinates)

        if current_distance + leg_km > max_distance_per_day and current_day:
            days.append(current_day)
            current_day = []
            current_distance = 0.0
            previous = start.coordinates

        current_day.append(candidate.model_copy(update={"distance_from_previous": leg_km}))
        current_distance += leg_km
        previous = candidate.coordinates

        if len(days) >= day_count - 1 and current_day:
            days.append(current_day)
            current_day = []
            break

    if current_day and len(days) < day_count:
        days.append(current_day)

    return [
        DayBucket(
            day_number=index + 1,
            attractions=attractions,
            start_point=start,
            end_point=start if return_to_start else attractions[-1].location,
        )
        for index, attractions in enumerate(days)
    ]
