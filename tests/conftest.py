"""Shared pytest fixtures for all test suites."""

import uuid
from collections.abc import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from backend.app.adapters.calls import ProviderClient
from backend.app.adapters.directions import DirectionsAdapter
from backend.app.adapters.places import PlacesAdapter
from backend.app.config import Settings
from backend.app.db.context import RequestContext
from backend.app.db.inmemory import InMemoryPlanRepository
from backend.app.db.models import Base
from backend.app.models.common import Location
from backend.app.planning.enricher import AmenityEnricher
from backend.app.planning.service import RoutePlanningService
from tests.factories import DIRECTIONS_URL, PLACES_URL, FakeGoogle, equator


@pytest.fixture
def settings() -> Settings:
    """Settings pointing the adapters at the fake provider URLs."""
    return Settings(
        _env_file=None,
        google_maps_api_key="test-key",
        directions_url=DIRECTIONS_URL,
        places_url=PLACES_URL,
    )


@pytest.fixture
def ctx() -> RequestContext:
    return RequestContext(user_id=uuid.UUID("00000000-0000-0000-0000-000000000002"))


@pytest.fixture
def other_ctx() -> RequestContext:
    return RequestContext(user_id=uuid.UUID("00000000-0000-0000-0000-0000000000ff"))


@pytest.fixture
def fake_google() -> FakeGoogle:
    return FakeGoogle()


@pytest.fixture
def repository() -> InMemoryPlanRepository:
    return InMemoryPlanRepository()


@pytest.fixture
def make_service(
    settings: Settings, fake_google: FakeGoogle, repository: InMemoryPlanRepository
) -> Callable[[], RoutePlanningService]:
    """Factory building a planning service wired to the fakes."""

    def factory() -> RoutePlanningService:
        client = fake_google.client()
        directions = DirectionsAdapter(ProviderClient("google.directions", client), settings)
        places = PlacesAdapter(ProviderClient("google.places", client), settings)
        return RoutePlanningService(directions, AmenityEnricher(places), repository)

    return factory


@pytest.fixture
def origin() -> Location:
    return Location(name="Origin City", coordinates=equator(0))


@pytest.fixture
def destination() -> Location:
    return Location(name="Destination City", coordinates=equator(100))


@pytest_asyncio.fixture
async def sqlite_engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory SQLite engine with the schema created (one shared connection)."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def sqlite_session(sqlite_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSession(sqlite_engine) as session:
        yield session
