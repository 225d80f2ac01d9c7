import logging
from functools import lru_cache

import requests

from safeway.config import (
    HTTP_TIMEOUT, KAKAO_ADDRESS_URL, KAKAO_COORD2ADDRESS_URL, KAKAO_KEYWORD_URL, KAKAO_REST_API_KEY,
)
from safeway.errors import LocationNotFound
from safeway.models.types import Coordinate

logger = logging.getLogger(__name__)


class LookupFailed(Exception):
    """Transport-level failure talking to the geocoder (never cached)."""


def _headers():
    return {"Authorization": f"KakaoAK {KAKAO_REST_API_KEY}"}


def _get(url, params):
    try:
        resp = requests.get(url, params=params, headers=_headers(), timeout=HTTP_TIMEOUT)
        resp.raise_for_status()
        return resp.json()
    except (requests.RequestException, ValueError) as e:
        raise LookupFailed(str(e)) from e


@lru_cache(maxsize=1024)
def _top_document(url, query):
    data = _get(url, {"query": query, "size": 1})
    docs = data.get("documents") or []
    if not docs:
        return None
    # Kakao returns x = longitude, y = latitude
    return Coordinate(float(docs[0]["y"]), float(docs[0]["x"]))


def keyword_search(query):
    return _top_document(KAKAO_KEYWORD_URL, query)


def address_search(query):
    return _top_document(KAKAO_ADDRESS_URL, query)


def geocode(query, searches=None):
    """
    Resolve a place name: keyword search first, then structured address
    search. Raises LocationNotFound(query) when neither matches.
    """
    if not query or not str(query).strip():
        raise LocationNotFound(query)
    query = str(query).strip()
    for search in searches or (keyword_search, address_search):
        try:
            coord = search(query)
        except LookupFailed as e:
            logger.warning("geocoder %s failed for %r: %s", search.__name__, query, e)
            continue
        if coord is not None:
            return coord
    raise LocationNotFound(query)


def reverse_geocode(coord):
    """Return a human readable address for a Coordinate, or None."""
    try:
        data = _get(KAKAO_COORD2ADDRESS_URL, {"x": coord.lng, "y": coord.lat})
    except LookupFailed as e:
        logger.warning("reverse geocoding failed for %s: %s", coord, e)
        return None
    docs = data.get("documents") or []
    if not docs:
        return None
    road = docs[0].get("road_address") or {}
    addr = docs[0].get("address") or {}
    return road.get("address_name") or addr.get("address_name")
