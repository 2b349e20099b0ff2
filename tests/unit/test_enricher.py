"""Tests for amenity enrichment of planned days."""

import asyncio
import math

import pytest

from backend.app.adapters.calls import ProviderClient
from backend.app.adapters.places import (
    ATTRACTION_TYPE,
    FOOD_TYPE,
    LODGING_TYPE,
    PlacesAdapter,
    parse_place,
)
from backend.app.config import Settings
from backend.app.errors import InvalidRequest, ProviderError
from backend.app.models.common import Location
from backend.app.models.places import AttractionCandidate, DayBucket
from backend.app.planning.enricher import (
    AmenityEnricher,
    check_detour,
    dedupe_places,
    gather_all,
    parse_price_range,
)
from backend.app.planning.segmenter import split_into_days
from tests.factories import FakeGoogle, build_route, equator, place_result


@pytest.fixture
def enricher(settings: Settings, fake_google: FakeGoogle) -> AmenityEnricher:
    places = PlacesAdapter(ProviderClient("google.places", fake_google.client()), settings)
    return AmenityEnricher(places)


def at(km: float) -> Location:
    return Location(name=f"km {km:g}", coordinates=equator(km))


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, (None, None)),
        ("", (None, None)),
        ("2", (2, 2)),
        ("1-3", (1, 3)),
        (" 0 - 4 ", (0, 4)),
    ],
)
def test_parse_price_range(value: str | None, expected: tuple[int | None, int | None]) -> None:
    assert parse_price_range(value) == expected


@pytest.mark.parametrize("value", ["cheap", "3-1", "1-5", "1-2-3", "-1"])
def test_parse_price_range_rejects_bad_values(value: str) -> None:
    with pytest.raises(InvalidRequest):
        parse_price_range(value)


@pytest.mark.asyncio
async def test_find_attractions_around_point_filters_by_distance(
    enricher: AmenityEnricher, fake_google: FakeGoogle
) -> None:
    fake_google.places[ATTRACTION_TYPE] = [
        place_result("Far Tower", equator(9)),
        place_result("Near Museum", equator(2)),
        place_result("Close Park", equator(1)),
    ]

    found = await enricher.find_attractions(at(0), None, max_detour_km=5)

    assert [p.name for p in found] == ["Close Park", "Near Museum"]
    assert found[0].distance_km == pytest.approx(1.0)


@pytest.mark.asyncio
async def test_find_attractions_searches_once_per_interest_and_dedupes(
    enricher: AmenityEnricher, fake_google: FakeGoogle
) -> None:
    fake_google.places[ATTRACTION_TYPE] = [place_result("Old Castle", equator(1))]

    found = await enricher.find_attractions(at(0), None, ["history", "architecture"])

    keywords = sorted(r.url.params["keyword"] for r in fake_google.searches(ATTRACTION_TYPE))
    assert keywords == ["architecture", "history"]
    assert [p.name for p in found] == ["Old Castle"]


@pytest.mark.asyncio
async def test_find_attractions_along_path_filters_by_detour(
    enricher: AmenityEnricher, fake_google: FakeGoogle
) -> None:
    fake_google.places[ATTRACTION_TYPE] = [
        place_result("On The Way", equator(30, lat=0.01)),
        place_result("Behind Us", equator(-20)),
    ]

    found = await enricher.find_attractions(at(0), at(50), max_detour_km=5)

    assert [p.name for p in found] == ["On The Way"]


@pytest.mark.asyncio
async def test_find_accommodations_sends_price_levels(
    enricher: AmenityEnricher, fake_google: FakeGoogle
) -> None:
    fake_google.places[LODGING_TYPE] = [place_result("Inn", equator(1))]

    found = await enricher.find_accommodations(at(0), 5, ["hostel"], "1-2")

    params = fake_google.searches(LODGING_TYPE)[0].url.params
    assert params["minprice"] == "1"
    assert params["maxprice"] == "2"
    assert params["keyword"] == "hostel"
    assert [p.name for p in found] == ["Inn"]


@pytest.mark.asyncio
async def test_non_positive_detour_rejected(enricher: AmenityEnricher) -> None:
    with pytest.raises(InvalidRequest):
        await enricher.find_food(at(0), 0)


@pytest.mark.asyncio
async def test_enrich_segments_skips_lodging_on_last_day(
    enricher: AmenityEnricher, fake_google: FakeGoogle
) -> None:
    fake_google.places[FOOD_TYPE] = [place_result("Cafe", equator(25.5))]
    fake_google.places[LODGING_TYPE] = [place_result("Hotel", equator(50.2))]
    segments = split_into_days(build_route([25_000] * 4), 2)

    enriched = await enricher.enrich_segments(
        segments, [], include_food=True, include_accommodation=True
    )

    assert [s.day_number for s in enriched] == [1, 2]
    assert [p.name for p in enriched[0].food_options] == ["Cafe"]
    assert [p.name for p in enriched[0].accommodations] == ["Hotel"]
    assert enriched[1].food_options == []
    assert enriched[1].accommodations == []
    assert len(fake_google.searches(LODGING_TYPE)) == 1


@pytest.mark.asyncio
async def test_enrich_segments_without_flags_makes_no_amenity_calls(
    enricher: AmenityEnricher, fake_google: FakeGoogle
) -> None:
    segments = split_into_days(build_route([25_000] * 4), 2)

    enriched = await enricher.enrich_segments(
        segments, [], include_food=False, include_accommodation=False
    )

    assert all(s.food_options == [] and s.accommodations == [] for s in enriched)
    assert fake_google.searches(FOOD_TYPE) == []
    assert fake_google.searches(LODGING_TYPE) == []


@pytest.mark.asyncio
async def test_enrich_buckets_searches_near_stops(
    enricher: AmenityEnricher, fake_google: FakeGoogle
) -> None:
    fake_google.places[FOOD_TYPE] = [place_result("Noodle Bar", equator(10.5))]
    fake_google.places[LODGING_TYPE] = [place_result("Guest House", equator(20.5))]
    start = at(0)
    stops = [
        AttractionCandidate(
            place_id=f"s{km}", name=f"Stop {km}", coordinates=equator(km), distance_from_start=km
        )
        for km in (5, 10, 20)
    ]
    buckets = [
        DayBucket(day_number=1, attractions=stops, start_point=start, end_point=stops[-1].location),
        DayBucket(day_number=2, attractions=stops[:1], start_point=start, end_point=start),
    ]

    days = await enricher.enrich_buckets(buckets, include_food=True, include_accommodation=True)

    assert [p.name for p in days[0].food_options] == ["Noodle Bar"]
    assert [p.name for p in days[0].accommodations] == ["Guest House"]
    assert days[1].accommodations == []
    assert days[0].attractions == stops


@pytest.mark.asyncio
async def test_provider_failure_propagates(
    enricher: AmenityEnricher, fake_google: FakeGoogle
) -> None:
    fake_google.places_status = "REQUEST_DENIED"
    segments = split_into_days(build_route([25_000] * 4), 2)

    with pytest.raises(ProviderError):
        await enricher.enrich_segments(segments, [], include_food=True, include_accommodation=False)


@pytest.mark.asyncio
async def test_gather_all_cancels_and_awaits_siblings_on_failure() -> None:
    siblings: list[asyncio.Task] = []
    cleaned_up: list[str] = []

    async def slow() -> str:
        siblings.append(asyncio.current_task())
        try:
            await asyncio.sleep(10)
        finally:
            cleaned_up.append("slow")
        return "done"

    async def failing() -> str:
        await asyncio.sleep(0)
        raise ProviderError("boom")

    with pytest.raises(ProviderError, match="boom"):
        await gather_all(slow(), failing())

    assert siblings[0].done()
    assert siblings[0].cancelled()
    assert cleaned_up == ["slow"]


@pytest.mark.asyncio
async def test_gather_all_keeps_argument_order() -> None:
    async def after(delay: float, value: int) -> int:
        await asyncio.sleep(delay)
        return value

    assert await gather_all(after(0.02, 1), after(0, 2), after(0.01, 3)) == [1, 2, 3]
    assert await gather_all() == []


@pytest.mark.parametrize("value", [0.0, -1.0, math.nan, math.inf])
def test_check_detour_rejects_non_positive_and_non_finite(value: float) -> None:
    with pytest.raises(InvalidRequest):
        check_detour(value)


def test_dedupe_places_keeps_first_occurrence() -> None:
    first = place_result("Same", equator(1), place_id="p1")
    second = place_result("Same Again", equator(2), place_id="p1")
    places = [parse_place(raw, equator(0), FOOD_TYPE) for raw in (first, second)]

    assert [p.name for p in dedupe_places(places)] == ["Same"]
