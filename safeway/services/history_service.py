# services/history_service.py
"""Return-home history: one entry appended per navigation start."""

import logging

from safeway.errors import Forbidden, NotFound, ValidationFailed

logger = logging.getLogger(__name__)

HISTORY_COLLECTION = "history"


def add_entry(store, uid, start, end, score=None, distance=None, time=None):
    if not start or not end:
        raise ValidationFailed("start and end are required")
    entry = {
        "uid": uid,
        "start": start,
        "end": end,
        "score": score,
        "distance": distance,
        "time": time,
    }
    return store.add(HISTORY_COLLECTION, entry)


def list_entries(store, uid):
    return store.list(HISTORY_COLLECTION, where=[("uid", "==", uid)],
                      order_by="createdAt", descending=True)


def delete_entry(store, uid, entry_id):
    entry = store.get(HISTORY_COLLECTION, entry_id)
    if entry is None:
        raise NotFound(f"history entry {entry_id} not found")
    if entry.get("uid") != uid:
        raise Forbidden("not your history entry")
    store.delete(HISTORY_COLLECTION, entry_id)


def clear_entries(store, uid):
    count = store.delete_where(HISTORY_COLLECTION, "uid", uid)
    logger.info("cleared %d history entries for %s", count, uid)
    return count
