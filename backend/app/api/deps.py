"""FastAPI dependencies wiring providers, repository and planning service."""

from collections.abc import AsyncGenerator
from typing import Annotated

import httpx
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.adapters.calls import ProviderClient
from backend.app.adapters.directions import DirectionsAdapter
from backend.app.adapters.places import PlacesAdapter
from backend.app.config import Settings, get_settings
from backend.app.db.engine import get_session
from backend.app.db.repositories import PlanRepository
from backend.app.db.sql_repositories import SqlPlanRepository
from backend.app.planning.enricher import AmenityEnricher
from backend.app.planning.service import RoutePlanningService
from backend.app.utils.logging import StructuredProviderLogger
from backend.app.utils.metrics import PrometheusProviderMetrics

DIRECTIONS_PROVIDER = "google.directions"
PLACES_PROVIDER = "google.places"


async def get_http_client(
    settings: Annotated[Settings, Depends(get_settings)],
) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Per-request httpx client carrying the provider timeout."""
    async with httpx.AsyncClient(timeout=settings.provider_timeout_seconds) as client:
        yield client


async def get_plan_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> PlanRepository:
    return SqlPlanRepository(session)


async def get_route_service(
    settings: Annotated[Settings, Depends(get_settings)],
    client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
    repository: Annotated[PlanRepository, Depends(get_plan_repository)],
) -> RoutePlanningService:
    metrics = PrometheusProviderMetrics()
    logger = StructuredProviderLogger()

    directions = DirectionsAdapter(
        ProviderClient(DIRECTIONS_PROVIDER, client, metrics=metrics, logger=logger), settings
    )
    places = PlacesAdapter(
        ProviderClient(PLACES_PROVIDER, client, metrics=metrics, logger=logger), settings
    )
    return RoutePlanningService(directions, AmenityEnricher(places), repository)
