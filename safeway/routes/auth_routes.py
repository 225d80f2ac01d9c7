# routes/auth_routes.py
import logging

from firebase_admin import auth
from flask import Blueprint, jsonify

from safeway.errors import AuthenticationFailed
from safeway.routes.common import api_errors, get_store, json_body
from safeway.services import auth_service

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth_bp", __name__, url_prefix="/api/auth")


@auth_bp.route("/register", methods=["POST"])
@api_errors
def register():
    body = json_body()
    try:
        uid = auth_service.register_user(get_store(), body.get("email"), body.get("password"), body.get("name"))
    except (auth.EmailAlreadyExistsError, ValueError) as e:
        return jsonify({"error": "회원가입 실패", "details": str(e)}), 400
    return jsonify({"message": "회원가입 성공", "uid": uid}), 201


@auth_bp.route("/login", methods=["POST"])
@api_errors
def login():
    body = json_body()
    try:
        uid, token, token_type = auth_service.login_user(body.get("email"), body.get("password"))
    except AuthenticationFailed as e:
        return jsonify({"error": "로그인 실패", "details": e.message}), 401
    return jsonify({"message": "로그인 성공", "uid": uid, "token": token, "tokenType": token_type}), 200


@auth_bp.route("/social", methods=["POST"])
@api_errors
def social():
    body = json_body()
    created = auth_service.social_login(get_store(), body.get("uid"), body.get("email"), body.get("name"))
    return jsonify({"message": "소셜 로그인 동기화 완료", "uid": body.get("uid"), "created": created}), 200
