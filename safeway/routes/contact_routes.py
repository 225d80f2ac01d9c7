# routes/contact_routes.py
from flask import Blueprint, g, jsonify

from safeway.routes.common import api_errors, get_store, json_body
from safeway.services.auth_helpers import require_auth
from safeway.services.contacts_service import add_contact, delete_contact, list_contacts

contacts_bp = Blueprint("contacts_bp", __name__, url_prefix="/api/contacts")


@contacts_bp.route("", methods=["POST"])
@require_auth
@api_errors
def create_contact():
    body = json_body()
    contact_id = add_contact(get_store(), g.uid, body.get("name"),
                             body.get("phone") or body.get("number"), body.get("relation"))
    return jsonify({"message": "등록 성공", "id": contact_id}), 201


@contacts_bp.route("/<uid>", methods=["GET"])
@require_auth
@api_errors
def get_contacts(uid):
    if g.uid != uid:
        return jsonify({"error": "cannot read another user's contacts"}), 403
    return jsonify([c.to_dict() for c in list_contacts(get_store(), uid)]), 200


@contacts_bp.route("/delete", methods=["POST"])
@contacts_bp.route("", methods=["DELETE"])
@require_auth
@api_errors
def remove_contact():
    body = json_body()
    delete_contact(get_store(), g.uid, body.get("contactId"))
    return jsonify({"message": "삭제 성공"}), 200
