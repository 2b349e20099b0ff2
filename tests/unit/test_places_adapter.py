"""Tests for the places adapter."""

import httpx
import pytest

from backend.app.adapters.calls import ProviderClient
from backend.app.adapters.places import FOOD_TYPE, LODGING_TYPE, PlacesAdapter, parse_place
from backend.app.config import Settings
from backend.app.errors import ProviderError
from tests.factories import equator, place_result


def make_adapter(settings: Settings, payload: dict, seen: list[httpx.Request]) -> PlacesAdapter:
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=payload)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return PlacesAdapter(ProviderClient("google.places", client), settings)


@pytest.mark.asyncio
async def test_search_nearby_parses_results(settings: Settings) -> None:
    seen: list[httpx.Request] = []
    payload = {
        "status": "OK",
        "results": [
            place_result("Blue Bistro", equator(1), rating=4.5),
            place_result("Red Diner", equator(2)),
        ],
    }
    adapter = make_adapter(settings, payload, seen)

    places = await adapter.search_nearby(equator(0), 3, FOOD_TYPE, keyword="thai")

    assert [p.name for p in places] == ["Blue Bistro", "Red Diner"]
    assert places[0].place_id == "pid-blue-bistro"
    assert places[0].category == FOOD_TYPE
    assert places[0].rating == 4.5
    assert places[0].description == "Blue Bistro street"
    assert places[0].distance_km == pytest.approx(1.0)

    params = seen[0].url.params
    assert params["type"] == FOOD_TYPE
    assert params["radius"] == "3000"
    assert params["keyword"] == "thai"
    assert "minprice" not in params


@pytest.mark.asyncio
async def test_radius_is_clamped_to_provider_maximum(settings: Settings) -> None:
    seen: list[httpx.Request] = []
    adapter = make_adapter(settings, {"status": "ZERO_RESULTS", "results": []}, seen)

    await adapter.search_nearby(equator(0), 500, LODGING_TYPE, min_price=1, max_price=3)

    params = seen[0].url.params
    assert params["radius"] == "50000"
    assert params["minprice"] == "1"
    assert params["maxprice"] == "3"


@pytest.mark.asyncio
async def test_zero_results_returns_empty_list(settings: Settings) -> None:
    adapter = make_adapter(settings, {"status": "ZERO_RESULTS", "results": []}, [])

    assert await adapter.search_nearby(equator(0), 5, FOOD_TYPE) == []


@pytest.mark.asyncio
async def test_rejected_status_raises_provider_error(settings: Settings) -> None:
    adapter = make_adapter(
        settings, {"status": "OVER_QUERY_LIMIT", "error_message": "quota exceeded"}, []
    )

    with pytest.raises(ProviderError) as exc_info:
        await adapter.search_nearby(equator(0), 5, FOOD_TYPE)

    assert "quota exceeded" in exc_info.value.message


@pytest.mark.asyncio
async def test_malformed_results_are_skipped(settings: Settings) -> None:
    payload = {
        "status": "OK",
        "results": [{"name": "No Geometry"}, place_result("Good Place", equator(1))],
    }
    adapter = make_adapter(settings, payload, [])

    places = await adapter.search_nearby(equator(0), 5, FOOD_TYPE)

    assert [p.name for p in places] == ["Good Place"]


def test_parse_place_without_place_id_or_vicinity() -> None:
    raw = place_result("Old Fort", equator(2), place_id=None, vicinity=None)
    raw["types"] = ["museum", "point_of_interest", "tourist_attraction"]

    place = parse_place(raw, equator(0), "tourist_attraction")

    assert place.place_id.startswith("Old Fort@")
    assert place.description == "museum, tourist attraction"
