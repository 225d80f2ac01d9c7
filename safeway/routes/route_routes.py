# route_routes.py
"""
Route safety API.

  POST /api/route/safety   { pathPoints: [{lat,lng}, ...] }
                           -> { safetyScore, cctvCount, lightCount, message }
  POST /api/route/compare  { pathPoints } -> { variants: [safety, shortest, balanced] }
  POST /api/route/search   { start: "place", end: "place" }
                           -> geocoded path, score and the three variants
  GET  /api/route/address?lat=..&lng=..  -> { lat, lng, address }
"""

import logging

from flask import Blueprint, jsonify, request

from safeway.config import SCORE_RADIUS_M
from safeway.errors import ValidationFailed
from safeway.models.types import Coordinate, parse_path
from safeway.routes.common import api_errors, get_collaborator, get_store, json_body
from safeway.services.comparison_service import compare_variants
from safeway.services.reports_service import count_reports_near
from safeway.services.route_search import search_route
from safeway.services.scoring_service import score_route

route_bp = Blueprint("route_bp", __name__, url_prefix="/api/route")

logger = logging.getLogger(__name__)


def _path_from_body(body):
    raw = body.get("pathPoints")
    if not raw or not isinstance(raw, list) or len(raw) < 2:
        raise ValidationFailed("좌표 필요")
    try:
        return parse_path(raw)
    except ValueError as e:
        raise ValidationFailed(str(e))


def _scorer():
    store = get_store()
    cctv_source = get_collaborator("cctv_source")
    policy = get_collaborator("scoring_policy")
    return lambda path: score_route(path, store, cctv_source=cctv_source, policy=policy)


@route_bp.route("/safety", methods=["POST"])
@api_errors
def route_safety():
    path = _path_from_body(json_body())
    result = _scorer()(path)
    return jsonify({**result.to_dict(), "message": "계산 완료"}), 200


@route_bp.route("/compare", methods=["POST"])
@api_errors
def route_compare():
    path = _path_from_body(json_body())
    result = _scorer()(path)
    reports = count_reports_near(get_store(), path, SCORE_RADIUS_M)
    variants = compare_variants(path, result, report_count=reports)
    return jsonify({
        "score": result.to_dict(),
        "variants": [m.to_dict() for m in variants],
    }), 200


@route_bp.route("/search", methods=["POST"])
@api_errors
def route_search():
    body = json_body()
    start, end = body.get("start"), body.get("end")
    if not start or not end:
        raise ValidationFailed("provide start and end place names")
    store = get_store()
    out = search_route(start, end, scorer=_scorer(), geocoder=get_collaborator("geocoder"),
                       report_counter=lambda path: count_reports_near(store, path, SCORE_RADIUS_M))
    return jsonify(out), 200


@route_bp.route("/address", methods=["GET"])
@api_errors
def route_address():
    try:
        coord = Coordinate.parse({"lat": request.args.get("lat"), "lng": request.args.get("lng")})
    except ValueError as e:
        raise ValidationFailed(str(e))
    address = get_collaborator("reverse_geocoder")(coord)
    return jsonify({**coord.to_dict(), "address": address}), 200
