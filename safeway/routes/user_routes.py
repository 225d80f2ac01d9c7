# routes/user_routes.py
from flask import Blueprint, g, jsonify

from safeway.routes.common import api_errors, get_store, json_body
from safeway.services.auth_helpers import require_auth
from safeway.services.users_service import get_profile, update_profile

users_bp = Blueprint("users_bp", __name__, url_prefix="/api/users")


@users_bp.route("/<uid>", methods=["GET"])
@api_errors
def get_user(uid):
    return jsonify(get_profile(get_store(), uid)), 200


@users_bp.route("/<uid>", methods=["PUT"])
@require_auth
@api_errors
def put_user(uid):
    if g.uid != uid:
        return jsonify({"error": "cannot edit another user's profile"}), 403
    return jsonify(update_profile(get_store(), uid, json_body())), 200
