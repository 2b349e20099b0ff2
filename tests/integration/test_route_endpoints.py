"""Integration tests for the /ai-route endpoints."""

import uuid
from collections.abc import Callable, Generator

import pytest
from fastapi.testclient import TestClient

from backend.app.adapters.places import ATTRACTION_TYPE, FOOD_TYPE, LODGING_TYPE
from backend.app.api.deps import get_route_service
from backend.app.db.inmemory import InMemoryPlanRepository
from backend.app.main import app
from backend.app.planning.service import RoutePlanningService
from tests.factories import FakeGoogle, build_route, directions_payload, equator, place_result

ORIGIN = {"name": "Origin City", "coordinates": {"lat": 0.0, "lng": 0.0}}
DESTINATION = {
    "name": "Destination City",
    "coordinates": {"lat": 0.0, "lng": equator(100).lng},
}


@pytest.fixture
def client(
    make_service: Callable[[], RoutePlanningService], fake_google: FakeGoogle
) -> Generator[TestClient, None, None]:
    """Test client with the planning service wired to fake providers."""
    fake_google.directions = directions_payload(build_route([25_000] * 4))
    fake_google.places[ATTRACTION_TYPE] = [place_result("Roadside Fort", equator(10))]
    fake_google.places[FOOD_TYPE] = [place_result("Cafe", equator(25.5))]
    fake_google.places[LODGING_TYPE] = [place_result("Hotel", equator(50.2))]

    app.dependency_overrides[get_route_service] = make_service
    yield TestClient(app)
    app.dependency_overrides.clear()


def create_point_to_point(client: TestClient, **overrides: object) -> dict:
    payload = {
        "start_location": ORIGIN,
        "end_location": DESTINATION,
        "travel_days": 2,
        "include_food": True,
        "include_accommodation": True,
        **overrides,
    }
    response = client.post("/ai-route/point-to-point", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_point_to_point_returns_201_with_envelope(client: TestClient) -> None:
    body = create_point_to_point(client)

    assert body["success"] is True
    plan = body["data"]["travel_plan"]
    assert plan["name"] == "Origin City - Destination City Trip"
    assert plan["route_type"] == "point-to-point"
    assert plan["transportation_type"] == "car"
    assert plan["total_distance_km"] == 100.0

    segments = body["data"]["daily_segments"]
    assert [s["day_number"] for s in segments] == [1, 2]
    assert [p["name"] for p in segments[0]["attractions"]] == ["Roadside Fort"]
    assert [p["name"] for p in segments[0]["food_options"]] == ["Cafe"]
    assert [p["name"] for p in segments[0]["accommodations"]] == ["Hotel"]
    assert segments[1]["accommodations"] == []


def test_unknown_transportation_type_defaults_to_car(client: TestClient) -> None:
    body = create_point_to_point(client, transportation_type="spaceship")

    assert body["data"]["travel_plan"]["transportation_type"] == "car"


def test_point_to_point_no_route_returns_400(client: TestClient, fake_google: FakeGoogle) -> None:
    fake_google.directions = {"status": "ZERO_RESULTS", "routes": []}

    response = client.post(
        "/ai-route/point-to-point",
        json={"start_location": ORIGIN, "end_location": DESTINATION, "travel_days": 2},
    )

    assert response.status_code == 400
    assert "No route found" in response.json()["detail"]


def test_provider_failure_returns_500(client: TestClient, fake_google: FakeGoogle) -> None:
    fake_google.directions = {"status": "REQUEST_DENIED", "error_message": "bad key"}

    response = client.post(
        "/ai-route/point-to-point",
        json={"start_location": ORIGIN, "end_location": DESTINATION, "travel_days": 2},
    )

    assert response.status_code == 500
    assert "bad key" in response.json()["detail"]


@pytest.mark.parametrize(
    "payload",
    [
        {"end_location": DESTINATION, "travel_days": 2},
        {"start_location": ORIGIN, "end_location": DESTINATION, "travel_days": 0},
        {
            "start_location": {"name": "X", "coordinates": {"lat": 120, "lng": 0}},
            "end_location": DESTINATION,
            "travel_days": 2,
        },
    ],
)
def test_invalid_body_returns_422(client: TestClient, payload: dict) -> None:
    response = client.post("/ai-route/point-to-point", json=payload)

    assert response.status_code == 422


def test_proximity_based_returns_201(client: TestClient, fake_google: FakeGoogle) -> None:
    fake_google.places[ATTRACTION_TYPE] = [
        place_result("Sight 10", equator(10)),
        place_result("Sight 20", equator(20)),
        place_result("Sight 30", equator(30)),
    ]

    response = client.post(
        "/ai-route/proximity-based",
        json={
            "start_location": ORIGIN,
            "travel_days": 2,
            "max_distance_per_day": 25,
            "return_to_start": True,
        },
    )

    assert response.status_code == 201, response.text
    data = response.json()["data"]
    assert data["travel_plan"]["route_type"] == "proximity-based"
    assert data["travel_plan"]["name"] == "Origin City Exploration Trip"
    days = data["daily_plans"]
    assert [[a["name"] for a in d["attractions"]] for d in days] == [
        ["Sight 10", "Sight 20"],
        ["Sight 30"],
    ]
    assert days[0]["end_point"]["name"] == "Origin City"


def test_proximity_without_candidates_returns_404(
    client: TestClient, fake_google: FakeGoogle
) -> None:
    fake_google.places.clear()

    response = client.post(
        "/ai-route/proximity-based", json={"start_location": ORIGIN, "travel_days": 2}
    )

    assert response.status_code == 404


def test_on_route_lookups(client: TestClient) -> None:
    route_id = create_point_to_point(client)["data"]["travel_plan"]["id"]

    attractions = client.get(
        f"/ai-route/{route_id}/attractions", params={"interests": "history, ,castles"}
    )
    food = client.get(f"/ai-route/{route_id}/food", params={"cuisine_types": "french"})
    lodging = client.get(
        f"/ai-route/{route_id}/accommodations", params={"types": "hotel", "price_range": "1-3"}
    )

    assert attractions.status_code == 200
    assert attractions.json()["success"] is True
    assert [p["name"] for p in attractions.json()["data"]] == ["Roadside Fort"]
    assert [p["name"] for p in food.json()["data"]] == ["Cafe"]
    assert [p["name"] for p in lodging.json()["data"]] == ["Hotel"]


def test_on_route_lookup_unknown_plan_returns_404(client: TestClient) -> None:
    response = client.get(f"/ai-route/{uuid.uuid4()}/food")

    assert response.status_code == 404


def test_on_route_lookup_other_user_returns_404(client: TestClient) -> None:
    route_id = create_point_to_point(client)["data"]["travel_plan"]["id"]

    response = client.get(
        f"/ai-route/{route_id}/attractions",
        headers={"Authorization": f"Bearer {uuid.uuid4()}"},
    )

    assert response.status_code == 404


def test_on_route_lookup_bad_parameters_return_400(client: TestClient) -> None:
    route_id = create_point_to_point(client)["data"]["travel_plan"]["id"]

    detour = client.get(f"/ai-route/{route_id}/food", params={"max_detour": 0})
    price = client.get(f"/ai-route/{route_id}/accommodations", params={"price_range": "cheap"})

    assert detour.status_code == 400
    assert price.status_code == 400


@pytest.mark.parametrize("max_detour", ["nan", "inf", "-inf"])
def test_non_finite_detour_returns_400(client: TestClient, max_detour: str) -> None:
    route_id = create_point_to_point(client)["data"]["travel_plan"]["id"]

    response = client.get(f"/ai-route/{route_id}/food", params={"max_detour": max_detour})

    assert response.status_code == 400
    assert "max_detour" in response.json()["detail"]


def test_malformed_auth_header_returns_401(client: TestClient) -> None:
    response = client.get(
        f"/ai-route/{uuid.uuid4()}/food", headers={"Authorization": "Bearer not-a-uuid"}
    )

    assert response.status_code == 401


def test_storage_failure_returns_internal_error(
    client: TestClient, repository: InMemoryPlanRepository, monkeypatch: pytest.MonkeyPatch
) -> None:
    async def broken_save(tree: object) -> object:
        raise RuntimeError("disk full")

    monkeypatch.setattr(repository, "save_plan", broken_save)

    response = client.post(
        "/ai-route/point-to-point",
        json={"start_location": ORIGIN, "end_location": DESTINATION, "travel_days": 2},
    )

    assert response.status_code == 500
    assert response.json()["detail"] == "internal error"
