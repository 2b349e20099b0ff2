"""AI route endpoints - plan generation and amenity lookups on stored plans."""

import logging
import uuid
from collections.abc import Awaitable
from typing import Annotated, TypeVar

from fastapi import APIRouter, Depends, HTTPException, Query, status

from backend.app.api.auth import get_current_context
from backend.app.api.deps import get_route_service
from backend.app.db.context import RequestContext
from backend.app.errors import PlanningError
from backend.app.models.answer import (
    ApiResponse,
    PointToPointPlanResponse,
    ProximityPlanResponse,
)
from backend.app.models.intent import PointToPointRequest, ProximityRequest
from backend.app.models.places import PlaceSuggestion
from backend.app.planning.enricher import (
    ACCOMMODATION_DETOUR_KM,
    ATTRACTION_DETOUR_KM,
    FOOD_DETOUR_KM,
)
from backend.app.planning.service import RoutePlanningService

router = APIRouter(prefix="/ai-route", tags=["ai-route"])
logger = logging.getLogger(__name__)

T = TypeVar("T")


def split_list(value: str | None) -> list[str]:
    """Split a comma-separated query value, dropping blanks."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


async def _run(operation: str, call: Awaitable[T]) -> T:
    try:
        return await call
    except PlanningError as e:
        logger.info(f"{operation} rejected: {e.code} ({e.message})")
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    except Exception as e:
        logger.error(f"{operation} failed", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="internal error"
        ) from e


@router.post(
    "/point-to-point",
    response_model=ApiResponse[PointToPointPlanResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_point_to_point(
    request: PointToPointRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    service: Annotated[RoutePlanningService, Depends(get_route_service)],
) -> ApiResponse[PointToPointPlanResponse]:
    """Generate a multi-day plan along the route between two locations."""
    result = await _run("point-to-point", service.generate_point_to_point(request, ctx))
    return ApiResponse[PointToPointPlanResponse](data=result)


@router.post(
    "/proximity-based",
    response_model=ApiResponse[ProximityPlanResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_proximity_based(
    request: ProximityRequest,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    service: Annotated[RoutePlanningService, Depends(get_route_service)],
) -> ApiResponse[ProximityPlanResponse]:
    """Generate a multi-day exploration plan around a start location."""
    result = await _run("proximity-based", service.generate_proximity_based(request, ctx))
    return ApiResponse[ProximityPlanResponse](data=result)


@router.get("/{route_id}/attractions", response_model=ApiResponse[list[PlaceSuggestion]])
async def get_attractions(
    route_id: uuid.UUID,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    service: Annotated[RoutePlanningService, Depends(get_route_service)],
    interests: Annotated[str | None, Query(description="Comma-separated interests")] = None,
    max_detour: Annotated[float, Query(description="Max detour in km")] = ATTRACTION_DETOUR_KM,
) -> ApiResponse[list[PlaceSuggestion]]:
    """Attractions along each day of a stored plan."""
    places = await _run(
        "attractions",
        service.find_attractions_on_route(
            route_id, ctx, interests=split_list(interests), max_detour_km=max_detour
        ),
    )
    return ApiResponse[list[PlaceSuggestion]](data=places)


@router.get("/{route_id}/food", response_model=ApiResponse[list[PlaceSuggestion]])
async def get_food_options(
    route_id: uuid.UUID,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    service: Annotated[RoutePlanningService, Depends(get_route_service)],
    cuisine_types: Annotated[str | None, Query(description="Comma-separated cuisines")] = None,
    max_detour: Annotated[float, Query(description="Max detour in km")] = FOOD_DETOUR_KM,
) -> ApiResponse[list[PlaceSuggestion]]:
    """Restaurants near the middle of each day of a stored plan."""
    places = await _run(
        "food",
        service.find_food_options_on_route(
            route_id, ctx, cuisine_types=split_list(cuisine_types), max_detour_km=max_detour
        ),
    )
    return ApiResponse[list[PlaceSuggestion]](data=places)


@router.get("/{route_id}/accommodations", response_model=ApiResponse[list[PlaceSuggestion]])
async def get_accommodations(
    route_id: uuid.UUID,
    ctx: Annotated[RequestContext, Depends(get_current_context)],
    service: Annotated[RoutePlanningService, Depends(get_route_service)],
    types: Annotated[str | None, Query(description="Comma-separated lodging types")] = None,
    price_range: Annotated[str | None, Query(description="Price levels, e.g. 1-3")] = None,
    max_detour: Annotated[float, Query(description="Max detour in km")] = ACCOMMODATION_DETOUR_KM,
) -> ApiResponse[list[PlaceSuggestion]]:
    """Lodging near the end of each overnight day of a stored plan."""
    places = await _run(
        "accommodations",
        service.find_accommodations_on_route(
            route_id,
            ctx,
            types=split_list(types),
            price_range=price_range,
            max_detour_km=max_detour,
        ),
    )
    return ApiResponse[list[PlaceSuggestion]](data=places)
