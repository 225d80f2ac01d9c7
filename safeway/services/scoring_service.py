# services/scoring_service.py
"""
Route safety scoring.

score_route(path) -> ScoreResult(score, cctv_count, light_count)

The formula is a pluggable policy. ProximityPolicy counts, for every path
point, the cameras and streetlights within `radius_m`, accumulates
`cctv * cctv_weight + lights * light_weight`, and normalizes by the best
achievable value of one camera and one light per point:

    score = min(100, round(total / (N * (cctv_weight + light_weight)) * 100))

cctv_count / light_count are the distinct cameras / lights within the radius
of any path point.
"""

import logging
import math

import numpy as np

from safeway.config import CCTV_WEIGHT, LIGHT_WEIGHT, SCORE_RADIUS_M
from safeway.errors import ScoringUnavailable, StoreUnavailable
from safeway.models.types import Coordinate, ScoreResult
from safeway.services.cctv_client import fetch_cctv_locations
from safeway.services.geospatial import haversine_matrix_m

logger = logging.getLogger(__name__)

STREETLIGHT_COLLECTION = "streetlights"


def _round_half_up(x):
    return int(math.floor(x + 0.5))


def _within(path, points, radius_m):
    """Boolean matrix (len(path), len(points)) of points inside the radius."""
    if not points:
        return np.zeros((len(path), 0), dtype=bool)
    d = haversine_matrix_m(
        [p.lat for p in path], [p.lng for p in path],
        [q.lat for q in points], [q.lng for q in points],
    )
    return d <= radius_m


class ScoringPolicy:
    def score(self, path, cctvs, lights):
        raise NotImplementedError


class ProximityPolicy(ScoringPolicy):
    def __init__(self, radius_m=SCORE_RADIUS_M, cctv_weight=CCTV_WEIGHT, light_weight=LIGHT_WEIGHT):
        self.radius_m = radius_m
        self.cctv_weight = cctv_weight
        self.light_weight = light_weight

    def score(self, path, cctvs, lights):
        near_cctv = _within(path, cctvs, self.radius_m)
        near_light = _within(path, lights, self.radius_m)
        total = float(
            near_cctv.sum(axis=1).sum() * self.cctv_weight
            + near_light.sum(axis=1).sum() * self.light_weight
        )
        best = len(path) * (self.cctv_weight + self.light_weight)
        score = min(100, _round_half_up(total / best * 100)) if best > 0 else 0
        return ScoreResult(
            score=max(0, score),
            cctv_count=int(near_cctv.any(axis=0).sum()),
            light_count=int(near_light.any(axis=0).sum()),
        )


def load_streetlights(store):
    try:
        docs = store.list(STREETLIGHT_COLLECTION)
    except StoreUnavailable as e:
        raise ScoringUnavailable(str(e)) from e
    lights = []
    for d in docs:
        try:
            lights.append(Coordinate.parse(d))
        except ValueError:
            logger.debug("skipping streetlight without coordinates: %s", d.get("id"))
    return lights


def score_route(path, store, cctv_source=fetch_cctv_locations, policy=None):
    """Score a path of >= 2 Coordinates. Raises ScoringUnavailable."""
    if not path or len(path) < 2:
        raise ValueError("a path needs at least two points")
    policy = policy or ProximityPolicy()
    lights = load_streetlights(store)
    cctvs = cctv_source()
    result = policy.score(path, cctvs, lights)
    logger.debug("scored %d points against %d cctv / %d lights -> %s",
                 len(path), len(cctvs), len(lights), result)
    return result
