import pytest
from fastapi.testclient import TestClient

from itinerary_engine.api.routes import itinerary
from itinerary_engine.main import create_app


def _activity(aid: str, name: str, date: str, lng: float | None = None, **extra) -> dict:
    payload = {"id": aid, "name": name, "start_date": date, "category": "attraction", "duration_minutes": 60}
    if lng is not None:
        payload["coordinates"] = {"lat": 0.0, "lng": lng}
    payload.update(extra)
    return payload


@pytest.fixture(autouse=True)
def clear_report_cache():
    itinerary.report_cache.clear()
    yield
    itinerary.report_cache.clear()


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())


def test_health_endpoints(client: TestClient):
    assert client.get("/api/health").json() == {"status": "ok"}

    config = client.get("/api/health/config").json()
    assert config["fallback_travel_minutes"] == 30
    assert config["road_factor"] == 1.4


def test_optimize_endpoint_reorders_and_reports(client: TestClient):
    payload = {
        "activities": [
            _activity("A", "Alpha", "2024-02-01", 0.0),
            _activity("B", "Bravo", "2024-02-01", 2.0),
            _activity("C", "Charlie", "2024-02-01", 1.0),
        ]
    }

    response = client.post("/api/itinerary/optimize", json=payload)

    assert response.status_code == 200
    body = response.json()
    assert body["original_order"] == ["A", "B", "C"]
    assert body["optimized_order"] == ["A", "C", "B"]
    assert body["improvements"]["total_travel_time_reduced"] == 65
    assert body["suggestions"][0]["kind"] == "reorder"
    assert body["metrics"]["day_count"] == 1


def test_optimize_endpoint_memoizes_identical_requests(client: TestClient):
    payload = {"activities": [_activity("A", "Alpha", "2024-02-01", 0.0)]}

    first = client.post("/api/itinerary/optimize", json=payload)
    second = client.post("/api/itinerary/optimize", json=payload)

    assert first.json() == second.json()
    assert itinerary.report_cache.hits == 1


def test_optimize_endpoint_with_empty_itinerary(client: TestClient):
    response = client.post("/api/itinerary/optimize", json={"activities": []})

    assert response.status_code == 200
    body = response.json()
    assert body["optimized_order"] == []
    assert body["suggestions"] == []
    assert body["improvements"]["efficiency_gain"] == 0.0


def test_duplicate_activity_ids_are_rejected(client: TestClient):
    payload = {
        "activities": [
            _activity("A", "Alpha", "2024-02-01", 0.0),
            _activity("A", "Alpha again", "2024-02-01", 1.0),
        ]
    }

    response = client.post("/api/itinerary/optimize", json=payload)

    assert response.status_code == 400


def test_out_of_range_priority_fails_validation(client: TestClient):
    payload = {"activities": [_activity("A", "Alpha", "2024-02-01", 0.0, priority=6)]}

    response = client.post("/api/itinerary/optimize", json=payload)

    assert response.status_code == 422


def test_timeline_endpoint_expands_stays(client: TestClient):
    payload = {
        "activities": [
            _activity("H", "Harbour Hotel", "2024-01-01", 0.0, end_date="2024-01-03", category="accommodation"),
            _activity("M", "Museum", "2024-01-02", 1.0),
        ]
    }

    response = client.post("/api/itinerary/timeline", json=payload)

    assert response.status_code == 200
    body = response.json()
    assert [day["date"] for day in body["days"]] == ["2024-01-01", "2024-01-02", "2024-01-03"]
    assert [activity["id"] for activity in body["days"][1]["activities"]] == ["H", "M"]
    assert body["totals"]["travel_minutes"] == 234


def test_conflicts_endpoint(client: TestClient):
    payload = {
        "activities": [
            _activity("X", "Tour", "2024-06-01", start_time="09:00:00", end_time="10:00:00"),
            _activity("Y", "Lunch", "2024-06-01", start_time="09:30:00", end_time="11:00:00"),
        ]
    }

    response = client.post("/api/itinerary/conflicts", json=payload)

    assert response.status_code == 200
    assert response.json() == [
        {"date": "2024-06-01", "first_id": "X", "second_id": "Y", "overlap_minutes": 30}
    ]


def test_travel_compare_endpoint(client: TestClient):
    payload = {
        "origin": _activity("A", "Alpha", "2024-02-01", 0.0),
        "destination": _activity("B", "Bravo", "2024-02-01", 1.0),
    }

    response = client.post("/api/travel/compare", json=payload)

    assert response.status_code == 200
    body = response.json()
    assert body["driving_minutes"] == 117
    assert body["walking_minutes"] == 1334
    assert body["transit_minutes"] == 282
    assert body["flight_minutes"] == 128
    assert set(body["routes"]) == {"driving", "walking", "transit", "flight"}


def test_travel_compare_requires_coordinates(client: TestClient):
    payload = {
        "origin": _activity("A", "Alpha", "2024-02-01", 0.0),
        "destination": _activity("B", "Bravo", "2024-02-01"),
    }

    assert client.post("/api/travel/compare", json=payload).status_code == 422


def test_travel_compare_rejects_same_activity(client: TestClient):
    activity = _activity("A", "Alpha", "2024-02-01", 0.0)

    response = client.post("/api/travel/compare", json={"origin": activity, "destination": activity})

    assert response.status_code == 400
