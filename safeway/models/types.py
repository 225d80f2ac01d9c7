# models/types.py
"""
Plain value types shared by the backend services and the client modules.

Coordinates travel over the wire as {"lat": .., "lng": ..}; the helpers here
are tolerant of the other spellings seen in the data sources
(latitude/longitude, lon, y/x).
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import List, Optional


@dataclass(frozen=True)
class Coordinate:
    lat: float
    lng: float

    def to_dict(self):
        return {"lat": self.lat, "lng": self.lng}

    @classmethod
    def parse(cls, raw):
        """Build a Coordinate from a dict, a [lat, lng] pair or a Coordinate.

        Raises ValueError when the value cannot be read as a coordinate.
        """
        if isinstance(raw, Coordinate):
            return raw
        if isinstance(raw, dict):
            lat = _first_present(raw, ("lat", "latitude", "y"))
            lng = _first_present(raw, ("lng", "lon", "longitude", "x"))
        elif isinstance(raw, (list, tuple)) and len(raw) == 2:
            lat, lng = raw
        else:
            raise ValueError(f"not a coordinate: {raw!r}")
        if lat is None or lng is None:
            raise ValueError(f"coordinate is missing lat/lng: {raw!r}")
        try:
            lat = float(lat)
            lng = float(lng)
        except (TypeError, ValueError):
            raise ValueError(f"coordinate must be numeric: {raw!r}")
        if not (-90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0):
            raise ValueError(f"coordinate out of range: {raw!r}")
        return cls(lat, lng)


def _first_present(d, keys):
    for k in keys:
        if d.get(k) not in (None, ""):
            return d[k]
    return None


def parse_path(raw_points) -> List[Coordinate]:
    if not isinstance(raw_points, (list, tuple)):
        raise ValueError("pathPoints must be a list")
    return [Coordinate.parse(p) for p in raw_points]


class RouteVariant(str, Enum):
    SAFETY = "safety"
    SHORTEST = "shortest"
    BALANCED = "balanced"


class ReportType(str, Enum):
    DANGER = "danger"
    WARNING = "warning"
    SAFE = "safe"


@dataclass(frozen=True)
class ScoreResult:
    score: int
    cctv_count: int
    light_count: int

    def to_dict(self):
        return {"safetyScore": self.score, "cctvCount": self.cctv_count, "lightCount": self.light_count}


@dataclass(frozen=True)
class RouteMetrics:
    variant: RouteVariant
    score: int
    distance_label: str
    time_label: str
    cctv_count: int
    light_count: int
    report_count: int = 0
    recommended: bool = False
    estimated_minutes: Optional[int] = None

    def to_dict(self):
        return {
            "variant": self.variant.value,
            "score": self.score,
            "distanceLabel": self.distance_label,
            "timeLabel": self.time_label,
            "cctvCount": self.cctv_count,
            "lightCount": self.light_count,
            "reportCount": self.report_count,
            "recommended": self.recommended,
            "estimatedMinutes": self.estimated_minutes,
        }


@dataclass(frozen=True)
class EmergencyContact:
    id: str
    name: str
    phone: str
    relation: Optional[str] = None
    createdAt: Optional[str] = None

    @classmethod
    def from_doc(cls, doc):
        return cls(
            id=doc.get("id"),
            name=doc.get("name", ""),
            phone=doc.get("phone") or doc.get("number") or "",
            relation=doc.get("relation"),
            createdAt=doc.get("createdAt"),
        )

    def to_dict(self):
        return asdict(self)
