"""Builds the plan record and its day/amenity points in memory.

The whole tree (plan, day markers, child points) is assembled with
client-side ids before anything is written, so storage can persist it in a
single transaction.
"""

import uuid
from collections.abc import Iterable
from datetime import UTC, date, datetime, timedelta

from backend.app.db.context import RequestContext
from backend.app.models.answer import DayPlan, EnrichedDaySegment
from backend.app.models.common import Location, PointType, RouteType
from backend.app.models.intent import PointToPointRequest, ProximityRequest
from backend.app.models.places import PlaceSuggestion
from backend.app.models.plan import PlanTree, TravelPlan, TravelPoint
from backend.app.models.route import Route


def _new_plan(
    ctx: RequestContext,
    *,
    name: str,
    description: str,
    travel_days: int,
    request: PointToPointRequest | ProximityRequest,
    total_distance_km: float,
    route_type: RouteType,
    today: date | None,
) -> TravelPlan:
    start_date = today or date.today()
    return TravelPlan(
        id=uuid.uuid4(),
        user_id=ctx.user_id,
        name=name,
        description=description,
        start_date=start_date,
        end_date=start_date + timedelta(days=travel_days),
        transportation_type=request.transportation_type,
        total_distance_km=round(total_distance_km, 3),
        route_type=route_type,
        created_at=datetime.now(UTC),
    )


def _amenity_points(
    plan: TravelPlan,
    marker: TravelPoint,
    point_type: PointType,
    places: Iterable[PlaceSuggestion],
) -> list[TravelPoint]:
    return [
        TravelPoint(
            id=uuid.uuid4(),
            travel_plan_id=plan.id,
            parent_point_id=marker.id,
            type=point_type,
            name=place.name,
            description=place.description,
            location=place.location,
            day_number=marker.day_number,
        )
        for place in places
    ]


def _day_marker(
    plan: TravelPlan,
    day_number: int,
    description: str,
    start: Location,
    end: Location,
    distance_km: float | None,
    duration_minutes: float | None = None,
) -> TravelPoint:
    return TravelPoint(
        id=uuid.uuid4(),
        travel_plan_id=plan.id,
        type=PointType.day,
        name=f"Day {day_number}",
        description=description,
        location=start,
        day_number=day_number,
        start_location=start,
        end_location=end,
        distance_km=distance_km,
        duration_minutes=duration_minutes,
    )


def assemble_point_to_point(
    request: PointToPointRequest,
    route: Route,
    segments: list[EnrichedDaySegment],
    ctx: RequestContext,
    today: date | None = None,
) -> PlanTree:
    """Build the plan tree for a point-to-point trip."""
    mode = request.transportation_type.value
    plan = _new_plan(
        ctx,
        name=f"{request.start_location.name} - {request.end_location.name} Trip",
        description=f"{request.travel_days}-day {mode} trip",
        travel_days=request.travel_days,
        request=request,
        total_distance_km=route.total_distance_meters / 1000,
        route_type=RouteType.point_to_point,
        today=today,
    )

    tree = PlanTree(plan=plan)
    for segment in segments:
        marker = _day_marker(
            plan,
            segment.day_number,
            f"{segment.start_location.name} - {segment.end_location.name}",
            segment.start_location,
            segment.end_location,
            segment.distance_km,
            segment.duration_minutes,
        )
        tree.points.append(marker)
        tree.points.extend(_amenity_points(plan, marker, PointType.attraction, segment.attractions))
        tree.points.extend(_amenity_points(plan, marker, PointType.food, segment.food_options))
        tree.points.extend(
            _amenity_points(plan, marker, PointType.accommodation, segment.accommodations)
        )
    return tree


def assemble_proximity(
    request: ProximityRequest,
    days: list[DayPlan],
    ctx: RequestContext,
    today: date | None = None,
) -> PlanTree:
    """Build the plan tree for a proximity-based trip."""
    mode = request.transportation_type.value
    day_distances = [
        sum(a.distance_from_previous or 0.0 for a in day.attractions) for day in days
    ]
    plan = _new_plan(
        ctx,
        name=f"{request.start_location.name} Exploration Trip",
        description=f"{request.travel_days}-day {mode} exploration trip",
        travel_days=request.travel_days,
        request=request,
        total_distance_km=sum(day_distances),
        route_type=RouteType.proximity_based,
        today=today,
    )

    tree = PlanTree(plan=plan)
    for day, day_distance in zip(days, day_distances, strict=True):
        marker = _day_marker(
            plan,
            day.day_number,
            f"{day.start_point.name} area exploration",
            day.start_point,
            day.end_point,
            round(day_distance, 3),
        )
        tree.points.append(marker)
        tree.points.extend(
            TravelPoint(
                id=uuid.uuid4(),
                travel_plan_id=plan.id,
                parent_point_id=marker.id,
                type=PointType.attraction,
                name=attraction.name,
                description=attraction.description,
                location=attraction.location,
                day_number=day.day_number,
            )
            for attraction in day.attractions
        )
        tree.points.extend(_amenity_points(plan, marker, PointType.food, day.food_options))
        tree.points.extend(
            _amenity_points(plan, marker, PointType.accommodation, day.accommodations)
        )
    return tree
