from itinerary_engine.models.domain import Activity, Coordinates, OptimizationSettings, VehicleConfig
from itinerary_engine.services.planner.cache import LatestRequestGate, ReportCache, fingerprint


def _activity(aid: str, lng: float = 0.0) -> Activity:
    return Activity(
        id=aid,
        name=f"Activity {aid}",
        start_date="2024-05-01",
        coordinates=Coordinates(lat=0.0, lng=lng),
    )


def test_fingerprint_is_stable_for_equal_inputs():
    first = fingerprint([_activity("A"), _activity("B", 1.0)], OptimizationSettings(), VehicleConfig())
    second = fingerprint([_activity("A"), _activity("B", 1.0)], OptimizationSettings(), VehicleConfig())

    assert first == second


def test_fingerprint_changes_with_order_settings_and_vehicle():
    base = fingerprint([_activity("A"), _activity("B", 1.0)])

    assert fingerprint([_activity("B", 1.0), _activity("A")]) != base
    assert fingerprint([_activity("A"), _activity("B", 1.5)]) != base
    assert fingerprint([_activity("A"), _activity("B", 1.0)], OptimizationSettings(prioritize_proximity=False)) != base
    assert (
        fingerprint([_activity("A"), _activity("B", 1.0)], vehicle_config=VehicleConfig(fuel_price_per_unit=2.0))
        != base
    )


def test_cache_returns_memoized_result():
    cache: ReportCache[str] = ReportCache(max_size=4)
    calls = []

    def compute():
        calls.append(1)
        return "report"

    assert cache.get_or_compute("key", compute) == "report"
    assert cache.get_or_compute("key", compute) == "report"
    assert len(calls) == 1
    assert (cache.hits, cache.misses) == (1, 1)


def test_cache_evicts_least_recently_used():
    cache: ReportCache[str] = ReportCache(max_size=2)
    cache.get_or_compute("a", lambda: "A")
    cache.get_or_compute("b", lambda: "B")
    cache.get_or_compute("a", lambda: "unused")
    cache.get_or_compute("c", lambda: "C")

    assert len(cache) == 2
    assert cache.get_or_compute("a", lambda: "recomputed") == "A"
    assert cache.get_or_compute("b", lambda: "recomputed") == "recomputed"


def test_zero_sized_cache_stores_nothing():
    cache: ReportCache[int] = ReportCache(max_size=0)
    counter = iter(range(10))

    assert cache.get_or_compute("key", lambda: next(counter)) == 0
    assert cache.get_or_compute("key", lambda: next(counter)) == 1
    assert len(cache) == 0


def test_clear_resets_entries_and_counters():
    cache: ReportCache[str] = ReportCache(max_size=2)
    cache.get_or_compute("a", lambda: "A")
    cache.get_or_compute("a", lambda: "A")

    cache.clear()

    assert len(cache) == 0
    assert (cache.hits, cache.misses) == (0, 0)


def test_gate_discards_stale_results():
    gate: LatestRequestGate[str] = LatestRequestGate()

    first = gate.begin()
    second = gate.begin()

    assert not gate.is_current(first)
    assert gate.publish(second, "fresh")
    assert not gate.publish(first, "stale")
    assert gate.result == "fresh"


def test_gate_starts_empty():
    gate: LatestRequestGate[str] = LatestRequestGate()

    assert gate.result is None
    token = gate.begin()
    assert gate.is_current(token)
