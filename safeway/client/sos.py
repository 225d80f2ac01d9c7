# client/sos.py
"""
SOS trigger: press and hold, then a cancellable countdown, then the device's
SMS composer opens with every emergency contact as recipient and a map link
to the last known location.

The caller feeds timestamps (press/tick/release) from its own timers, so the
object never sleeps or spawns threads.
"""

import logging
import math
import time
from enum import Enum
from urllib.parse import quote

from safeway.client.platform import Platform, sms_uri
from safeway.config import KAKAO_MAP_LINK_URL, SOS_COUNTDOWN_SECONDS, SOS_HOLD_SECONDS

logger = logging.getLogger(__name__)

NO_CONTACTS_MESSAGE = "긴급 연락처를 먼저 등록해주세요."
SOS_MESSAGE = "[SafeWay 긴급 알림] 현재 위험 상황입니다! 제 위치를 확인하고 도와주세요."


class SOSPhase(str, Enum):
    IDLE = "idle"
    HOLDING = "holding"
    COUNTDOWN = "countdown"
    SENT = "sent"
    ABORTED = "aborted"


def map_link(coord, label="내 위치"):
    return f"{KAKAO_MAP_LINK_URL}/{quote(label)},{coord.lat},{coord.lng}"


def compose_message(coord):
    if coord is None:
        return SOS_MESSAGE
    return f"{SOS_MESSAGE} 위치: {map_link(coord)}"


class SOSTrigger:
    """
    contacts: list of EmergencyContact (anything with a .phone)
    composer: callable(uri) opening the native SMS composer
    locate:   callable() -> Coordinate or None (last known fix)
    notify:   callable(message) for user-facing alerts
    """

    def __init__(self, contacts, composer, locate=lambda: None, notify=None,
                 platform=Platform.OTHER, hold_seconds=SOS_HOLD_SECONDS,
                 countdown_seconds=SOS_COUNTDOWN_SECONDS, clock=time.monotonic):
        self.contacts = list(contacts or [])
        self.composer = composer
        self.locate = locate
        self.notify = notify or (lambda msg: logger.info("SOS: %s", msg))
        self.platform = platform
        self.hold_seconds = hold_seconds
        self.countdown_seconds = countdown_seconds
        self.clock = clock
        self._reset()

    def _reset(self):
        self.phase = SOSPhase.IDLE
        self.progress = 0.0
        self.countdown = self.countdown_seconds
        self._pressed_at = None
        self._countdown_started = None

    def press(self, now=None):
        if not self.contacts:
            self.phase = SOSPhase.ABORTED
            self.notify(NO_CONTACTS_MESSAGE)
            return False
        if self.phase not in (SOSPhase.IDLE, SOSPhase.SENT, SOSPhase.ABORTED):
            return False
        self._reset()
        self.phase = SOSPhase.HOLDING
        self._pressed_at = self.clock() if now is None else now
        return True

    def release(self, now=None):
        # letting go only matters before the countdown starts
        if self.phase is SOSPhase.HOLDING:
            self.tick(now)
            if self.phase is SOSPhase.HOLDING:
                self._reset()

    def tick(self, now=None):
        now = self.clock() if now is None else now
        if self.phase is SOSPhase.HOLDING:
            held = now - self._pressed_at
            self.progress = 1.0 if self.hold_seconds <= 0 else min(1.0, held / self.hold_seconds)
            if self.progress >= 1.0:
                self.phase = SOSPhase.COUNTDOWN
                self._countdown_started = self._pressed_at + self.hold_seconds
        if self.phase is SOSPhase.COUNTDOWN:
            elapsed = now - self._countdown_started
            self.countdown = max(0, self.countdown_seconds - int(math.floor(elapsed)))
            if self.countdown == 0:
                self._send()
        return self.phase

    def cancel(self):
        if self.phase is SOSPhase.COUNTDOWN:
            logger.info("SOS cancelled during countdown")
            self._reset()

    def _send(self):
        numbers = [c.phone for c in self.contacts if getattr(c, "phone", None)]
        uri = sms_uri(self.platform, numbers, compose_message(self.locate()))
        self.composer(uri)
        self.phase = SOSPhase.SENT
        self.progress = 0.0
        logger.info("SOS message composed for %d contact(s)", len(numbers))
        return uri
