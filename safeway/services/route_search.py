# services/route_search.py

import logging

from safeway.errors import LocationNotFound
from safeway.models.types import Coordinate
from safeway.services.comparison_service import compare_variants
from safeway.services.geospatial import midpoint
from safeway.utils.geocode import geocode

logger = logging.getLogger(__name__)

# Seoul City Hall; used when a place name cannot be resolved
DEFAULT_PATH = (
    Coordinate(37.5668, 126.9790),
    Coordinate(37.5670, 126.9792),
    Coordinate(37.5672, 126.9794),
)


def build_path(start_name, end_name, geocoder=geocode):
    """
    Geocode both ends and return (path, used_default). The path is
    start -> midpoint -> end; on LocationNotFound the default path is used.
    """
    try:
        start = geocoder(start_name)
        end = geocoder(end_name)
    except LocationNotFound as e:
        logger.warning("falling back to default path: %s", e)
        return list(DEFAULT_PATH), True
    return [start, midpoint(start, end), end], False


def search_route(start_name, end_name, scorer, geocoder=geocode, report_counter=None):
    """
    Full search flow: geocode, score once, derive the three variants.

    scorer: callable(path) -> ScoreResult (may raise ScoringUnavailable)
    report_counter: callable(path) -> number of reports near the path
    """
    path, used_default = build_path(start_name, end_name, geocoder=geocoder)
    result = scorer(path)
    report_count = report_counter(path) if report_counter else 0
    return {
        "start": start_name,
        "end": end_name,
        "usedDefaultPath": used_default,
        "pathPoints": [p.to_dict() for p in path],
        "score": result.to_dict(),
        "variants": [m.to_dict() for m in compare_variants(path, result, report_count=report_count)],
    }
