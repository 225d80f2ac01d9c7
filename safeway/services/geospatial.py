import math

import numpy as np

from safeway.models.types import Coordinate

EARTH_RADIUS_M = 6371000.0


def haversine_m(lat1, lon1, lat2, lon2):
    """Great-circle distance in meters between two lat/lng pairs."""
    phi1 = math.radians(lat1); phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1); dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi/2)**2 + math.cos(phi1)*math.cos(phi2)*math.sin(dlambda/2)**2
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1-a))


def distance_m(a, b):
    return haversine_m(a.lat, a.lng, b.lat, b.lng)


def haversine_matrix_m(lats1, lngs1, lats2, lngs2):
    """Pairwise distances (meters) between two point sets, shape (len1, len2)."""
    phi1 = np.radians(np.asarray(lats1, dtype=float))[:, None]
    phi2 = np.radians(np.asarray(lats2, dtype=float))[None, :]
    lam1 = np.radians(np.asarray(lngs1, dtype=float))[:, None]
    lam2 = np.radians(np.asarray(lngs2, dtype=float))[None, :]
    a = np.sin((phi2 - phi1) / 2.0) ** 2 + np.cos(phi1) * np.cos(phi2) * np.sin((lam2 - lam1) / 2.0) ** 2
    return EARTH_RADIUS_M * 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))


def path_length_m(path):
    if not path or len(path) < 2:
        return 0.0
    return sum(distance_m(a, b) for a, b in zip(path[:-1], path[1:]))


def midpoint(a, b):
    # straight average is fine at city scale
    return Coordinate((a.lat + b.lat) / 2.0, (a.lng + b.lng) / 2.0)


def format_distance(meters):
    if meters < 1000:
        return f"{int(round(meters))}m"
    return f"{meters / 1000.0:.1f}km"


def estimate_minutes(meters, speed_m_per_min):
    if meters <= 0:
        return 0
    return max(1, int(math.ceil(meters / speed_m_per_min)))
