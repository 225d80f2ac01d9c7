# services/reports_service.py
"""
Community report board: reports, likes and comments.

reports/<id>            {uid, title, type, content, location, lat?, lng?,
                         likes, commentCount, createdAt}
reports/<id>/comments   {uid, author, content, createdAt}
"""

import logging

from safeway.errors import Forbidden, NotFound, ValidationFailed
from safeway.models.types import Coordinate, ReportType
from safeway.services.geospatial import haversine_m

logger = logging.getLogger(__name__)

REPORTS_COLLECTION = "reports"
REQUIRED_FIELDS = ("title", "type", "content", "location")


def comments_collection(report_id):
    return f"{REPORTS_COLLECTION}/{report_id}/comments"


def _validate(data, partial=False):
    clean = {}
    for field in REQUIRED_FIELDS:
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            if partial:
                continue
            raise ValidationFailed(f"{field} is required")
        clean[field] = value.strip() if isinstance(value, str) else value
    if "type" in clean:
        try:
            clean["type"] = ReportType(clean["type"]).value
        except ValueError:
            raise ValidationFailed("type must be one of danger, warning, safe")
    if data.get("lat") is not None or data.get("lng") is not None:
        try:
            coord = Coordinate.parse({"lat": data.get("lat"), "lng": data.get("lng")})
        except ValueError as e:
            raise ValidationFailed(str(e))
        clean["lat"], clean["lng"] = coord.lat, coord.lng
    return clean


def create_report(store, uid, data):
    report = _validate(data)
    report.update({"uid": uid, "likes": 0, "commentCount": 0})
    report_id = store.add(REPORTS_COLLECTION, report)
    logger.info("report %s created by %s", report_id, uid)
    return report_id


def list_reports(store, uid=None):
    where = [("uid", "==", uid)] if uid else None
    return store.list(REPORTS_COLLECTION, where=where, order_by="createdAt", descending=True)


def get_report(store, report_id):
    report = store.get(REPORTS_COLLECTION, report_id)
    if report is None:
        raise NotFound(f"report {report_id} not found")
    return report


def _owned_report(store, uid, report_id):
    report = get_report(store, report_id)
    if report.get("uid") != uid:
        raise Forbidden("only the author can change this report")
    return report


def update_report(store, uid, report_id, data):
    _owned_report(store, uid, report_id)
    changes = _validate(data, partial=True)
    if changes:
        store.update(REPORTS_COLLECTION, report_id, changes)
    return get_report(store, report_id)


def delete_report(store, uid, report_id):
    _owned_report(store, uid, report_id)
    for comment in store.list(comments_collection(report_id)):
        store.delete(comments_collection(report_id), comment["id"])
    store.delete(REPORTS_COLLECTION, report_id)
    logger.info("report %s deleted by %s", report_id, uid)


def like_report(store, report_id):
    get_report(store, report_id)
    store.increment(REPORTS_COLLECTION, report_id, "likes", 1)
    return get_report(store, report_id).get("likes", 0)


def add_comment(store, uid, report_id, content, author=None):
    content = (content or "").strip()
    if not content:
        raise ValidationFailed("content is required")
    get_report(store, report_id)
    comment_id = store.add(comments_collection(report_id), {
        "uid": uid,
        "author": author,
        "content": content,
    })
    store.increment(REPORTS_COLLECTION, report_id, "commentCount", 1)
    return comment_id


def list_comments(store, report_id):
    get_report(store, report_id)
    return store.list(comments_collection(report_id), order_by="createdAt")


def count_reports_near(store, path, radius_m):
    """Danger/warning reports with coordinates within radius_m of any path point."""
    count = 0
    for r in store.list(REPORTS_COLLECTION):
        if r.get("type") == ReportType.SAFE.value or r.get("lat") is None or r.get("lng") is None:
            continue
        if any(haversine_m(p.lat, p.lng, r["lat"], r["lng"]) <= radius_m for p in path):
            count += 1
    return count
