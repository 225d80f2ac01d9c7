import json

import pytest

from safeway.client.local_store import (
    FAVORITES, NOTIFICATION_SETTINGS, RECENT_DESTINATIONS, SCHEMA_VERSION, LocalStore, migrate,
)
from safeway.client.platform import Platform, detect_platform, sms_uri
from safeway.client.session import ANONYMOUS, Session


def test_session_transitions_are_pure():
    start = Session()
    logged_in = start.login("uid-1", token="tok")
    assert start == ANONYMOUS
    assert logged_in.logged_in and logged_in.uid == "uid-1" and logged_in.token == "tok"
    assert logged_in.logout() == ANONYMOUS
    assert logged_in.uid == "uid-1"
    with pytest.raises(ValueError):
        start.login("")


def test_detect_platform():
    assert detect_platform("Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X)") is Platform.IOS
    assert detect_platform("Mozilla/5.0 (Linux; Android 14; SM-S918N)") is Platform.ANDROID
    assert detect_platform("Mozilla/5.0 (Windows NT 10.0)") is Platform.OTHER
    assert detect_platform(None) is Platform.OTHER


def test_sms_uri_skips_blank_numbers():
    assert sms_uri(Platform.ANDROID, ["010-1", " ", ""], "hi there") == "sms:010-1?body=hi%20there"


def test_fresh_store_round_trips_to_disk(tmp_path):
    path = str(tmp_path / "local.json")
    store = LocalStore(path)
    assert store.version == SCHEMA_VERSION
    store.add_favorite("우리집")
    store.add_favorite("우리집")
    assert LocalStore(path).favorites() == ["우리집"]
    assert store.remove_favorite("우리집") == []


def test_recent_destinations_dedupe_and_cap(tmp_path):
    store = LocalStore(str(tmp_path / "local.json"))
    for place in ["회사", "우리집", "지하철역", "회사"]:
        store.push_recent_destination(place, limit=3)
    assert store.recent_destinations() == ["회사", "지하철역", "우리집"]
    store.push_recent_destination("강남역", limit=3)
    assert store.recent_destinations() == ["강남역", "회사", "지하철역"]


def test_unversioned_blob_is_migrated(tmp_path):
    path = tmp_path / "local.json"
    path.write_text(json.dumps({"favorites": ["우리집"], "recentDestinations": ["회사"]}), encoding="utf-8")
    store = LocalStore(str(path))
    assert store.version == 1
    assert store.favorites() == ["우리집"]
    assert store.recent_destinations() == ["회사"]
    on_disk = json.loads(path.read_text(encoding="utf-8"))
    assert on_disk["version"] == 1
    assert on_disk["data"][FAVORITES] == ["우리집"]


def test_newer_schema_is_refused():
    with pytest.raises(ValueError):
        migrate({"version": SCHEMA_VERSION + 1, "data": {}})


def test_schema_is_enforced(tmp_path):
    store = LocalStore(str(tmp_path / "local.json"))
    with pytest.raises(KeyError):
        store.set("theme", "dark")
    with pytest.raises(TypeError):
        store.set(RECENT_DESTINATIONS, "회사")


def test_notification_toggles(tmp_path):
    store = LocalStore(str(tmp_path / "local.json"))
    assert store.notification_settings()["marketing"] is False
    assert store.toggle_notification("marketing")["marketing"] is True
    assert store.get(NOTIFICATION_SETTINGS)["marketing"] is True
    with pytest.raises(KeyError):
        store.toggle_notification("vibration")


def test_corrupt_file_starts_empty(tmp_path):
    path = tmp_path / "local.json"
    path.write_text("{not json", encoding="utf-8")
    assert LocalStore(str(path)).favorites() == []
