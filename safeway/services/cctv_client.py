# services/cctv_client.py
"""Seoul open-data CCTV lookup (service `safeOpenCCTV`)."""

import logging

import requests

from safeway.config import (
    CCTV_API_SERVICE, CCTV_FETCH_LIMIT, HTTP_TIMEOUT, SEOUL_CCTV_BASE_URL, SEOUL_CCTV_KEY,
)
from safeway.errors import ScoringUnavailable
from safeway.models.types import Coordinate

logger = logging.getLogger(__name__)


def cctv_url(key=SEOUL_CCTV_KEY, limit=CCTV_FETCH_LIMIT):
    base = SEOUL_CCTV_BASE_URL.rstrip("/")
    return f"{base}/{key}/json/{CCTV_API_SERVICE}/1/{limit}/"


def fetch_cctv_rows(timeout=HTTP_TIMEOUT):
    """Return the raw CCTV rows. Raises ScoringUnavailable when unreachable."""
    url = cctv_url()
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
        data = resp.json()
    except (requests.RequestException, ValueError) as e:
        logger.error("CCTV API request failed: %s", e)
        raise ScoringUnavailable(f"CCTV API unreachable: {e}") from e
    service = data.get(CCTV_API_SERVICE) or {}
    rows = service.get("row") or []
    if not rows:
        # the API reports errors (bad key, no data) in a RESULT block with 200 OK
        result = service.get("RESULT") or data.get("RESULT") or {}
        logger.warning("CCTV API returned no rows: %s", result.get("MESSAGE") or result)
    return rows


def cctv_locations(rows):
    """Map CCTV rows to Coordinates, skipping rows without usable WGS84 fields."""
    out = []
    for row in rows:
        try:
            out.append(Coordinate.parse({"lat": row.get("WGSXPT"), "lng": row.get("WGSYPT")}))
        except ValueError:
            continue
    return out


def fetch_cctv_locations():
    return cctv_locations(fetch_cctv_rows())
