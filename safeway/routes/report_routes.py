# routes/report_routes.py
from flask import Blueprint, g, jsonify, request

from safeway.routes.common import api_errors, get_store, json_body
from safeway.services.auth_helpers import require_auth
from safeway.services import reports_service

reports_bp = Blueprint("reports_bp", __name__, url_prefix="/api/reports")


@reports_bp.route("", methods=["GET"])
@api_errors
def list_reports():
    return jsonify(reports_service.list_reports(get_store(), uid=request.args.get("uid"))), 200


@reports_bp.route("", methods=["POST"])
@require_auth
@api_errors
def create_report():
    report_id = reports_service.create_report(get_store(), g.uid, json_body())
    return jsonify({"message": "신고가 등록되었습니다.", "id": report_id}), 201


@reports_bp.route("/<report_id>", methods=["GET"])
@api_errors
def get_report(report_id):
    return jsonify(reports_service.get_report(get_store(), report_id)), 200


@reports_bp.route("/<report_id>", methods=["PUT"])
@require_auth
@api_errors
def update_report(report_id):
    return jsonify(reports_service.update_report(get_store(), g.uid, report_id, json_body())), 200


@reports_bp.route("/<report_id>", methods=["DELETE"])
@require_auth
@api_errors
def delete_report(report_id):
    reports_service.delete_report(get_store(), g.uid, report_id)
    return jsonify({"message": "deleted"}), 200


@reports_bp.route("/<report_id>/like", methods=["POST"])
@api_errors
def like_report(report_id):
    likes = reports_service.like_report(get_store(), report_id)
    return jsonify({"likes": likes}), 200


@reports_bp.route("/<report_id>/comments", methods=["GET"])
@api_errors
def get_comments(report_id):
    return jsonify(reports_service.list_comments(get_store(), report_id)), 200


@reports_bp.route("/<report_id>/comments", methods=["POST"])
@require_auth
@api_errors
def post_comment(report_id):
    body = json_body()
    comment_id = reports_service.add_comment(get_store(), g.uid, report_id,
                                             body.get("content"), author=body.get("author"))
    return jsonify({"message": "saved", "id": comment_id}), 201
