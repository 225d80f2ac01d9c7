# client/platform.py
"""Device capability detection, resolved once at startup."""

import re
from enum import Enum
from urllib.parse import quote


class Platform(str, Enum):
    IOS = "ios"
    ANDROID = "android"
    OTHER = "other"


_IOS_RE = re.compile(r"iPhone|iPad|iPod", re.IGNORECASE)
_ANDROID_RE = re.compile(r"Android", re.IGNORECASE)


def detect_platform(user_agent):
    if not user_agent:
        return Platform.OTHER
    if _IOS_RE.search(user_agent):
        return Platform.IOS
    if _ANDROID_RE.search(user_agent):
        return Platform.ANDROID
    return Platform.OTHER


def sms_uri(platform, numbers, body):
    """Build the SMS deep link the device's composer understands."""
    recipients = ",".join(n.strip() for n in numbers if n and n.strip())
    encoded = quote(body, safe="")
    if platform is Platform.IOS:
        return f"sms:/open?addresses={recipients}&body={encoded}"
    return f"sms:{recipients}?body={encoded}"
