import pytest

from itinerary_engine.models.domain import Activity, Coordinates, TravelMode
from itinerary_engine.services.geospatial import haversine_km
from itinerary_engine.services.travel.estimator import (
    GeoTravelEstimator,
    driving_minutes,
    flight_minutes,
    transit_minutes,
    walking_minutes,
)


def _activity(aid: str, lat: float | None = None, lng: float | None = None) -> Activity:
    coordinates = Coordinates(lat=lat, lng=lng) if lat is not None and lng is not None else None
    return Activity(id=aid, name=f"Activity {aid}", start_date="2024-01-01", coordinates=coordinates)


def test_haversine_one_degree_on_equator():
    assert haversine_km(0.0, 0.0, 0.0, 1.0) == pytest.approx(111.195, abs=0.01)
    assert haversine_km(48.1, 11.5, 48.1, 11.5) == 0.0


def test_driving_minutes_uses_speed_tiers_and_floor():
    assert driving_minutes(3.0) == 10  # 6 min at 30 km/h, floored
    assert driving_minutes(5.0) == 10  # 5 min at 60 km/h, floored
    assert driving_minutes(40.0) == 40
    assert driving_minutes(50.0) == 38  # 80 km/h tier starts at 50 km
    assert driving_minutes(100.0) == 75
    assert driving_minutes(200.0) == 133
    assert driving_minutes(300.0) == 200


def test_alternate_modes_are_independent_of_each_other():
    assert walking_minutes(10.0) == 120
    assert transit_minutes(25.0) == 75
    assert transit_minutes(0.0) == 15
    assert flight_minutes(100.0) is None
    assert flight_minutes(800.0) == 180


def test_missing_coordinates_fall_back_to_fixed_minutes_and_zero_distance():
    estimator = GeoTravelEstimator()
    located = _activity("A", 0.0, 0.0)
    unlocated = _activity("B")

    assert estimator.travel_minutes(located, unlocated) == 30
    assert estimator.travel_minutes(unlocated, located, TravelMode.WALKING) == 30
    assert estimator.distance_km(located, unlocated) == 0.0
    assert estimator.road_distance_km(located, unlocated) == 0.0


def test_fallback_minutes_can_be_configured():
    estimator = GeoTravelEstimator(fallback_minutes=45)

    assert estimator.travel_minutes(_activity("A"), _activity("B")) == 45


def test_same_activity_has_no_travel():
    estimator = GeoTravelEstimator()
    hotel = _activity("H", 48.1, 11.5)

    assert estimator.travel_minutes(hotel, hotel) == 0


def test_road_factor_applies_to_driving_only_when_requested():
    estimator = GeoTravelEstimator()
    a = _activity("A", 0.0, 0.0)
    b = _activity("B", 0.0, 1.0)

    assert estimator.road_distance_km(a, b) == pytest.approx(estimator.distance_km(a, b) * 1.4)
    assert estimator.travel_minutes(a, b) == 117  # 155.7 km at 80 km/h
    assert estimator.travel_minutes(a, b, road_factor=False) == 83  # 111.2 km at 80 km/h


def test_walking_and_transit_modes_use_raw_distance():
    estimator = GeoTravelEstimator()
    a = _activity("A", 0.0, 0.0)
    b = _activity("B", 0.0, 1.0)

    assert estimator.travel_minutes(a, b, "walking") == 1334
    assert estimator.travel_minutes(a, b, TravelMode.TRANSIT) == 282
    assert estimator.travel_minutes(a, b, TravelMode.FLIGHT) == 128


def test_flight_mode_on_short_hop_uses_driving_estimate():
    estimator = GeoTravelEstimator()
    a = _activity("A", 48.13, 11.57)
    b = _activity("B", 48.14, 11.58)

    assert estimator.travel_minutes(a, b, TravelMode.FLIGHT) == estimator.travel_minutes(a, b)


def test_compare_travel_methods_includes_flight_for_long_distances():
    estimator = GeoTravelEstimator()
    comparison = estimator.compare_travel_methods(_activity("A", 0.0, 0.0), _activity("B", 0.0, 1.0))

    assert comparison is not None
    assert comparison.distance_km == 111.2
    assert comparison.driving_minutes == 117
    assert comparison.walking_minutes == 1334
    assert comparison.transit_minutes == 282
    assert comparison.flight_minutes == 128
    assert comparison.routes["flight"].type == "via_airport"
    assert comparison.routes["transit"].type == "via_transit"
    assert comparison.routes["driving"].steps[1] == "Cross-country drive"


def test_compare_travel_methods_short_distance_and_missing_coordinates():
    estimator = GeoTravelEstimator()
    short = estimator.compare_travel_methods(_activity("A", 48.13, 11.57), _activity("B", 48.14, 11.58))

    assert short is not None
    assert short.flight_minutes is None
    assert "flight" not in short.routes
    assert short.routes["walking"].steps[1] == "Short walk"
    assert estimator.compare_travel_methods(_activity("A", 0.0, 0.0), _activity("B")) is None


def test_comparison_minutes_keep_short_legs_apart():
    estimator = GeoTravelEstimator()
    origin = _activity("A", 0.0, 0.0)
    near = _activity("B", 0.0, 0.02)
    far = _activity("C", 0.0, 0.04)

    # both legs sit under the 10 minute driving minimum
    assert estimator.travel_minutes(origin, near, road_factor=False) == 10
    assert estimator.travel_minutes(origin, far, road_factor=False) == 10
    assert estimator.comparison_minutes(origin, near) == pytest.approx(4.448, abs=0.01)
    assert estimator.comparison_minutes(origin, far) == pytest.approx(8.896, abs=0.01)
    assert estimator.comparison_minutes(origin, origin) == 0.0
    assert estimator.comparison_minutes(origin, _activity("X")) == 30.0
