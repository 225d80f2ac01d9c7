# routes/history_routes.py
from flask import Blueprint, g, jsonify

from safeway.routes.common import api_errors, get_store, json_body
from safeway.services.auth_helpers import require_auth
from safeway.services import history_service

history_bp = Blueprint("history_bp", __name__, url_prefix="/api/history")


@history_bp.route("/<uid>", methods=["GET"])
@require_auth
@api_errors
def list_history(uid):
    if g.uid != uid:
        return jsonify({"error": "cannot read another user's history"}), 403
    return jsonify(history_service.list_entries(get_store(), uid)), 200


@history_bp.route("", methods=["POST"])
@require_auth
@api_errors
def add_history():
    body = json_body()
    entry_id = history_service.add_entry(
        get_store(), g.uid, body.get("start"), body.get("end"),
        score=body.get("score"), distance=body.get("distance"), time=body.get("time"),
    )
    return jsonify({"message": "saved", "id": entry_id}), 201


@history_bp.route("/<entry_id>", methods=["DELETE"])
@require_auth
@api_errors
def delete_history(entry_id):
    history_service.delete_entry(get_store(), g.uid, entry_id)
    return jsonify({"message": "deleted"}), 200


@history_bp.route("", methods=["DELETE"])
@require_auth
@api_errors
def clear_history():
    count = history_service.clear_entries(get_store(), g.uid)
    return jsonify({"message": "deleted", "count": count}), 200
