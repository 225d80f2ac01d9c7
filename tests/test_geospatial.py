import numpy as np
import pytest

from safeway.models.types import Coordinate, parse_path
from safeway.services.geospatial import (
    estimate_minutes, format_distance, haversine_m, haversine_matrix_m, midpoint, path_length_m,
)

from conftest import CITY_HALL_PATH


def test_haversine_zero_and_known_distance():
    assert haversine_m(37.5668, 126.9790, 37.5668, 126.9790) == 0
    # one thousandth of a degree of latitude is about 111 m
    assert haversine_m(37.5668, 126.9790, 37.5678, 126.9790) == pytest.approx(111.2, abs=0.5)


def test_matrix_matches_scalar_haversine():
    lats, lngs = [37.5668, 37.5700], [126.9790, 126.9800]
    m = haversine_matrix_m(lats, lngs, [37.5670], [126.9792])
    assert m.shape == (2, 1)
    for i in range(2):
        assert m[i, 0] == pytest.approx(haversine_m(lats[i], lngs[i], 37.5670, 126.9792), rel=1e-9)


def test_matrix_with_no_targets():
    assert haversine_matrix_m([37.5], [127.0], [], []).shape == (1, 0)


def test_path_length_and_labels():
    meters = path_length_m(CITY_HALL_PATH)
    assert 25 < meters < 32
    assert format_distance(meters) == f"{int(round(meters))}m"
    assert format_distance(1830) == "1.8km"
    assert estimate_minutes(meters, 67) == 1
    assert estimate_minutes(0, 67) == 0
    assert path_length_m(CITY_HALL_PATH[:1]) == 0.0


def test_midpoint():
    m = midpoint(Coordinate(37.0, 127.0), Coordinate(38.0, 128.0))
    assert m == Coordinate(37.5, 127.5)


def test_coordinate_parse_variants():
    assert Coordinate.parse({"lat": "37.5", "lng": 127}) == Coordinate(37.5, 127.0)
    assert Coordinate.parse({"latitude": 37.5, "longitude": 127}) == Coordinate(37.5, 127.0)
    assert Coordinate.parse([37.5, 127]) == Coordinate(37.5, 127.0)
    with pytest.raises(ValueError):
        Coordinate.parse({"lat": 37.5})
    with pytest.raises(ValueError):
        Coordinate.parse({"lat": "north", "lng": 127})
    with pytest.raises(ValueError):
        Coordinate.parse({"lat": 137.5, "lng": 127})
    with pytest.raises(ValueError):
        parse_path("not a list")
