# client/local_store.py
"""
Versioned key-value store for client-side state (favorites, recent
destinations, notification toggles), persisted as one JSON document:

    {"version": 1, "namespace": "safeway", "data": {<key>: <value>, ...}}

Unversioned blobs written by older builds (flat dicts keyed "favorites",
"recentDestinations", ...) are treated as version 0 and migrated on load.
"""

import json
import logging
import os

from safeway.config import LOCAL_STORE_PATH, RECENT_DESTINATIONS_MAX

logger = logging.getLogger(__name__)

NAMESPACE = "safeway"
SCHEMA_VERSION = 1

FAVORITES = "favorites"
RECENT_DESTINATIONS = "recent_destinations"
NOTIFICATION_SETTINGS = "notification_settings"

DEFAULT_NOTIFICATION_SETTINGS = {"push": True, "sms": True, "sound": True, "marketing": False}

SCHEMA = {
    FAVORITES: list,
    RECENT_DESTINATIONS: list,
    NOTIFICATION_SETTINGS: dict,
}


def _migrate_v0(blob):
    data = {
        FAVORITES: blob.get("favorites") or [],
        RECENT_DESTINATIONS: blob.get("recentDestinations") or blob.get("recent_destinations") or [],
    }
    settings = blob.get("notificationSettings")
    if isinstance(settings, dict):
        data[NOTIFICATION_SETTINGS] = settings
    return {"version": 1, "namespace": NAMESPACE, "data": data}


# from-version -> migration producing the next version
MIGRATIONS = {0: _migrate_v0}


def migrate(blob):
    if not isinstance(blob, dict):
        blob = {}
    version = blob.get("version", 0) if "data" in blob else 0
    while version < SCHEMA_VERSION:
        blob = MIGRATIONS[version](blob)
        version = blob["version"]
        logger.info("local store migrated to schema v%d", version)
    if version > SCHEMA_VERSION:
        raise ValueError(f"local store schema v{version} is newer than supported v{SCHEMA_VERSION}")
    return blob


class LocalStore:
    def __init__(self, path=LOCAL_STORE_PATH):
        self.path = path
        self._doc = self._load()

    def _load(self):
        if not os.path.exists(self.path):
            return {"version": SCHEMA_VERSION, "namespace": NAMESPACE, "data": {}}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("local store %s unreadable, starting empty: %s", self.path, e)
            raw = {"version": SCHEMA_VERSION, "data": {}}
        doc = migrate(raw)
        if doc is not raw:
            self._write(doc)
        return doc

    def _write(self, doc):
        tmp = self.path + ".tmp"
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(doc, f, ensure_ascii=False, indent=2)
        os.replace(tmp, self.path)

    @property
    def version(self):
        return self._doc["version"]

    def get(self, key, default=None):
        if key not in SCHEMA:
            raise KeyError(f"unknown key {key!r}")
        return self._doc["data"].get(key, default)

    def set(self, key, value):
        expected = SCHEMA.get(key)
        if expected is None:
            raise KeyError(f"unknown key {key!r}")
        if not isinstance(value, expected):
            raise TypeError(f"{key} must be a {expected.__name__}")
        self._doc["data"][key] = value
        self._write(self._doc)

    # favorites
    def favorites(self):
        return list(self.get(FAVORITES, []))

    def add_favorite(self, place):
        favs = self.favorites()
        if place not in favs:
            favs.append(place)
            self.set(FAVORITES, favs)
        return favs

    def remove_favorite(self, place):
        favs = [f for f in self.favorites() if f != place]
        self.set(FAVORITES, favs)
        return favs

    # recent destinations: most recent first, no duplicates, capped
    def recent_destinations(self):
        return list(self.get(RECENT_DESTINATIONS, []))

    def push_recent_destination(self, place, limit=RECENT_DESTINATIONS_MAX):
        recents = [place] + [p for p in self.recent_destinations() if p != place]
        self.set(RECENT_DESTINATIONS, recents[:limit])
        return self.recent_destinations()

    # notification toggles
    def notification_settings(self):
        return {**DEFAULT_NOTIFICATION_SETTINGS, **self.get(NOTIFICATION_SETTINGS, {})}

    def toggle_notification(self, name):
        if name not in DEFAULT_NOTIFICATION_SETTINGS:
            raise KeyError(f"unknown notification setting {name!r}")
        settings = self.notification_settings()
        settings[name] = not settings[name]
        self.set(NOTIFICATION_SETTINGS, settings)
        return settings
