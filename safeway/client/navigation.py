# client/navigation.py
"""
Live navigation tracking along a precomputed path.

    Idle --start()--> Tracking --(< 30 m from destination)--> Arrived
                          |
                          +--cancel() / persistent geolocation errors--> Cancelled

On every position update the closest path point is found (haversine,
left-to-right scan, ties keep the lowest index), the path is split into the
passed part path[0..i] and the remaining part [current] + path[i+1..], and
the remaining time is recomputed as ceil(estimate * (N - i) / N).

The geolocation subscription is cancelled on every way out: arrival,
cancel() and close().
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from safeway.config import ARRIVAL_THRESHOLD_M, MAX_CONSECUTIVE_GEO_ERRORS
from safeway.errors import ApiError, BackendUnreachable, GeolocationError
from safeway.models.types import Coordinate
from safeway.services.geospatial import distance_m

logger = logging.getLogger(__name__)

ARRIVING_SOON = "곧 도착"


class TrackerState(str, Enum):
    IDLE = "idle"
    TRACKING = "tracking"
    ARRIVED = "arrived"
    CANCELLED = "cancelled"


TERMINAL_STATES = (TrackerState.ARRIVED, TrackerState.CANCELLED)


@dataclass(frozen=True)
class Progress:
    index: int
    passed: List[Coordinate]
    remaining: List[Coordinate]
    remaining_minutes: int
    time_label: str
    distance_to_destination_m: float
    state: TrackerState


def nearest_index(path, position):
    best_i = 0
    best_d = None
    for i, point in enumerate(path):
        d = distance_m(position, point)
        if best_d is None or d < best_d:
            best_i, best_d = i, d
    return best_i


def split_path(path, index, position):
    passed = list(path[:index + 1])
    remaining = [position] + list(path[index + 1:])
    return passed, remaining


def remaining_minutes(total_minutes, index, n_points):
    if n_points <= 0:
        return 0
    return int(math.ceil(total_minutes * max(0.0, (n_points - index) / n_points)))


def remaining_time_label(minutes):
    return ARRIVING_SOON if minutes <= 0 else f"{minutes}분"


class NavigationTracker:
    """
    subscribe(on_position, on_error) starts the device location watch and
    returns a handle (an object with cancel() or a plain callable) that stops
    it. It raises GeolocationError when no watch can be established.
    """

    def __init__(self, path, estimated_minutes, subscribe, on_exit=None,
                 arrival_threshold_m=ARRIVAL_THRESHOLD_M,
                 max_consecutive_errors=MAX_CONSECUTIVE_GEO_ERRORS):
        path = [Coordinate.parse(p) for p in (path or [])]
        if len(path) < 2:
            raise ValueError("navigation needs a path with at least two points")
        self.path = path
        self.estimated_minutes = estimated_minutes
        self._subscribe = subscribe
        self._on_exit = on_exit
        self.arrival_threshold_m = arrival_threshold_m
        self.max_consecutive_errors = max_consecutive_errors
        self.state = TrackerState.IDLE
        self.current_pos = path[0]
        self.progress = None
        self._subscription = None
        self._errors = 0

    def start(self):
        if self.state is not TrackerState.IDLE:
            raise RuntimeError(f"cannot start a tracker in state {self.state.value}")
        try:
            self._subscription = self._subscribe(self.on_position, self.on_error)
        except GeolocationError as e:
            logger.warning("could not start location watch, staying idle: %s", e)
            return self.state
        self.state = TrackerState.TRACKING
        return self.state

    def on_position(self, position):
        if self.state is not TrackerState.TRACKING:
            return self.progress
        position = Coordinate.parse(position)
        self._errors = 0
        self.current_pos = position

        index = nearest_index(self.path, position)
        passed, remaining = split_path(self.path, index, position)
        minutes = remaining_minutes(self.estimated_minutes, index, len(self.path))
        to_dest = distance_m(position, self.path[-1])
        if to_dest < self.arrival_threshold_m:
            self._finish(TrackerState.ARRIVED)
        self.progress = Progress(index, passed, remaining, minutes,
                                 remaining_time_label(minutes), to_dest, self.state)
        return self.progress

    def on_error(self, error):
        if self.state is not TrackerState.TRACKING:
            return
        self._errors += 1
        logger.warning("geolocation error (%d in a row): %s", self._errors, error)
        if self.max_consecutive_errors and self._errors >= self.max_consecutive_errors:
            logger.warning("geolocation keeps failing, cancelling navigation")
            self.cancel()

    def cancel(self):
        """User pressed "arrived" / stop, or location reporting gave up."""
        if self.state in TERMINAL_STATES:
            return
        self._finish(TrackerState.CANCELLED)

    def close(self):
        """Leaving the screen: release the subscription whatever the state."""
        if self.state in TERMINAL_STATES:
            self._unsubscribe()
            return
        self._finish(TrackerState.CANCELLED)

    def _finish(self, state):
        self.state = state
        self._unsubscribe()
        logger.info("navigation %s", state.value)
        if self._on_exit is not None:
            self._on_exit(state)

    def _unsubscribe(self):
        sub, self._subscription = self._subscription, None
        if sub is None:
            return
        if hasattr(sub, "cancel"):
            sub.cancel()
        else:
            sub()


def begin_navigation(client, session, route, path, subscribe, on_exit=None):
    """
    Record the chosen route in the history store, then start tracking.

    route: dict with start, end, score, distanceLabel, timeLabel and
    estimatedMinutes. An invalid path raises ValueError before anything is
    recorded. A failed history write is logged and dropped.
    """
    tracker = NavigationTracker(path, route.get("estimatedMinutes") or 0, subscribe, on_exit=on_exit)
    try:
        client.add_history(session, route["start"], route["end"], score=route.get("score"),
                           distance=route.get("distanceLabel"), time=route.get("timeLabel"))
    except (ApiError, BackendUnreachable) as e:
        logger.warning("history entry not saved: %s", e)
    tracker.start()
    return tracker
