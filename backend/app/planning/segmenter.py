"""Point-to-point day splitting by cumulative route distance."""

from backend.app.errors import InvalidRequest, RouteUnavailable
from backend.app.models.common import Location
from backend.app.models.route import DaySegment, Route, RouteStep

WAYPOINT_NAME = "Waypoint"
MIDPOINT_NAME = "Day midpoint"


def _close_day(
    day_number: int,
    start: Location,
    end_name: str,
    steps: list[RouteStep],
    distance_meters: int,
) -> DaySegment:
    last_step = steps[-1]
    mid_step = steps[len(steps) // 2]
    return DaySegment(
        day_number=day_number,
        start_location=start,
        end_location=Location(name=end_name, coordinates=last_step.end_location),
        mid_point=Location(name=MIDPOINT_NAME, coordinates=mid_step.start_location),
        distance_km=distance_meters / 1000,
        duration_minutes=sum(step.duration_seconds for step in steps) / 60,
        steps=list(steps),
    )


def split_into_days(route: Route, day_count: int) -> list[DaySegment]:
    """Split a route into daily segments of roughly equal distance.

    Steps are buffered in traversal order until the buffered distance reaches
    total / day_count, at which point the day is closed and the next day starts
    where it ended. Steps are never split, so a single long step becomes its own
    day. Leftover steps after the walk form a final day, which can yield
    day_count + 1 segments when the division leaves a remainder.

    Args:
        route: Route with at least one step
        day_count: Number of travel days (>= 1)

    Returns:
        Segments numbered from 1 in traversal order

    Raises:
        InvalidRequest: If day_count < 1
        RouteUnavailable: If the route has no steps
    """
    if day_count < 1:
        raise InvalidRequest(f"travel_days must be at least 1, got {day_count}")
    if not route.legs or not route.steps:
        raise RouteUnavailable("Route has no steps to split")

    distance_per_day = route.total_distance_meters / day_count

    first_leg = route.legs[0]
    day_start = Location(name=first_leg.start_address, coordinates=first_leg.start_location)

    segments: list[DaySegment] = []
    buffer: list[RouteStep] = []
    buffered_meters = 0

    all_steps = route.steps
    destination_name = route.legs[-1].end_address

    for index, step in enumerate(all_steps):
        buffer.append(step)
        buffered_meters += step.distance_meters

        if buffered_meters >= distance_per_day:
            is_last_step = index == len(all_steps) - 1
            segment = _close_day(
                len(segments) + 1,
                day_start,
                destination_name if is_last_step else WAYPOINT_NAME,
                buffer,
                buffered_meters,
            )
            segments.append(segment)
            day_start = segment.end_location
            buffer = []
            buffered_meters = 0

    if buffer:
        segments.append(
            _close_day(
                len(segments) + 1,
                day_start,
                destination_name,
                buffer,
                buffered_meters,
            )
        )

    return segments
