import pytest

from safeway.errors import LocationNotFound
from safeway.models.types import Coordinate
from safeway.config import KAKAO_ADDRESS_URL, KAKAO_KEYWORD_URL
from safeway.services.route_search import DEFAULT_PATH, build_path
from safeway.utils import geocode as geo


@pytest.fixture(autouse=True)
def clear_cache():
    geo._top_document.cache_clear()
    yield
    geo._top_document.cache_clear()


def fake_kakao(monkeypatch, responses):
    calls = []

    def _get(url, params):
        calls.append((url, params["query"]))
        result = responses.get(url)
        if isinstance(result, Exception):
            raise result
        return {"documents": result or []}

    monkeypatch.setattr(geo, "_get", _get)
    return calls


def test_keyword_match_wins(monkeypatch):
    calls = fake_kakao(monkeypatch, {KAKAO_KEYWORD_URL: [{"x": "126.978", "y": "37.5665"}]})
    assert geo.geocode("서울시청") == Coordinate(37.5665, 126.978)
    assert [u for u, _ in calls] == [KAKAO_KEYWORD_URL]


def test_falls_back_to_address_search(monkeypatch):
    calls = fake_kakao(monkeypatch, {KAKAO_ADDRESS_URL: [{"x": "127.0276", "y": "37.4979"}]})
    assert geo.geocode("서울 강남구 강남대로 396") == Coordinate(37.4979, 127.0276)
    assert [u for u, _ in calls] == [KAKAO_KEYWORD_URL, KAKAO_ADDRESS_URL]


def test_transport_failure_moves_to_next_search(monkeypatch):
    fake_kakao(monkeypatch, {
        KAKAO_KEYWORD_URL: geo.LookupFailed("timeout"),
        KAKAO_ADDRESS_URL: [{"x": "127.0", "y": "37.5"}],
    })
    assert geo.geocode("어딘가") == Coordinate(37.5, 127.0)


def test_no_match_raises_with_query(monkeypatch):
    fake_kakao(monkeypatch, {})
    with pytest.raises(LocationNotFound) as exc:
        geo.geocode("없는 장소")
    assert exc.value.query == "없는 장소"


def test_blank_query_makes_no_calls(monkeypatch):
    calls = fake_kakao(monkeypatch, {})
    with pytest.raises(LocationNotFound):
        geo.geocode("   ")
    assert calls == []


def test_reverse_geocode(monkeypatch):
    monkeypatch.setattr(geo, "_get", lambda url, params: {"documents": [
        {"road_address": {"address_name": "서울 중구 세종대로 110"}, "address": {"address_name": "서울 중구 태평로1가 31"}},
    ]})
    assert geo.reverse_geocode(Coordinate(37.5665, 126.978)) == "서울 중구 세종대로 110"

    def down(url, params):
        raise geo.LookupFailed("down")

    monkeypatch.setattr(geo, "_get", down)
    assert geo.reverse_geocode(Coordinate(37.5665, 126.978)) is None


def test_build_path_uses_midpoint():
    known = {"a": Coordinate(37.0, 127.0), "b": Coordinate(38.0, 128.0)}
    path, used_default = build_path("a", "b", geocoder=known.__getitem__)
    assert not used_default
    assert path == [known["a"], Coordinate(37.5, 127.5), known["b"]]


def test_build_path_falls_back_to_default_path():
    def nothing(query):
        raise LocationNotFound(query)

    path, used_default = build_path("nowhere", "nothing", geocoder=nothing)
    assert used_default
    assert path == list(DEFAULT_PATH)
