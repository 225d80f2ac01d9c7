import pytest

from safeway.errors import ScoringUnavailable, StoreUnavailable
from safeway.models.types import Coordinate, ScoreResult
from safeway.services.scoring_service import ProximityPolicy, load_streetlights, score_route

from conftest import CITY_HALL_PATH, MemoryStore

FAR_AWAY = Coordinate(37.5768, 126.9790)  # ~1.1 km north


def test_single_camera_near_every_point():
    result = ProximityPolicy().score(CITY_HALL_PATH, [CITY_HALL_PATH[0]], [])
    # 3 points * 1 camera * 5 / (3 * 7) = 71.4
    assert result == ScoreResult(score=71, cctv_count=1, light_count=0)


def test_single_light_rounds_half_up():
    result = ProximityPolicy().score(CITY_HALL_PATH, [], [CITY_HALL_PATH[2]])
    # 3 * 2 / 21 = 28.57
    assert result == ScoreResult(score=29, cctv_count=0, light_count=1)


def test_score_is_capped_at_100():
    cams = [CITY_HALL_PATH[1]] * 3
    result = ProximityPolicy().score(CITY_HALL_PATH, cams, [])
    assert result.score == 100
    assert result.cctv_count == 3


def test_far_infrastructure_is_ignored():
    result = ProximityPolicy().score(CITY_HALL_PATH, [FAR_AWAY], [FAR_AWAY])
    assert result == ScoreResult(0, 0, 0)


def test_radius_is_configurable():
    result = ProximityPolicy(radius_m=2000).score(CITY_HALL_PATH, [FAR_AWAY], [])
    assert result.cctv_count == 1


def test_score_route_reads_streetlights_from_store():
    store = MemoryStore()
    store.add("streetlights", {"lat": CITY_HALL_PATH[2].lat, "lng": CITY_HALL_PATH[2].lng})
    store.add("streetlights", {"name": "broken row"})
    result = score_route(CITY_HALL_PATH, store, cctv_source=lambda: [CITY_HALL_PATH[0]])
    # (15 + 6) / 21
    assert result == ScoreResult(score=100, cctv_count=1, light_count=1)


def test_score_route_needs_two_points():
    with pytest.raises(ValueError):
        score_route(CITY_HALL_PATH[:1], MemoryStore(), cctv_source=lambda: [])


def test_unreachable_cctv_api_propagates():
    def broken():
        raise ScoringUnavailable("down")

    with pytest.raises(ScoringUnavailable):
        score_route(CITY_HALL_PATH, MemoryStore(), cctv_source=broken)


def test_unreachable_store_becomes_scoring_unavailable():
    class DownStore(MemoryStore):
        def list(self, *args, **kwargs):
            raise StoreUnavailable("firestore down")

    with pytest.raises(ScoringUnavailable):
        load_streetlights(DownStore())
