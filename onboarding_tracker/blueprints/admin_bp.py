"""
Admin Blueprint — super admin panel API.

  GET    /api/v1/admin/stats          — customer counters, percentages, user counts
  GET    /api/v1/admin/users          — list users
  POST   /api/v1/admin/users          — add user {email, name, role?}
  DELETE /api/v1/admin/users/<id>     — delete user
  DELETE /api/v1/admin/customers      — delete ALL customer data
"""

from flask import Blueprint, jsonify, request

from onboarding_tracker.auth import current_subject
from onboarding_tracker.services import customer_service, user_service
from onboarding_tracker.services.record_store import get_store

admin_bp = Blueprint("admin", __name__, url_prefix="/api/v1/admin")


@admin_bp.route("/stats", methods=["GET"])
def admin_stats():
    return jsonify(user_service.admin_stats(get_store(), current_subject())), 200


@admin_bp.route("/users", methods=["GET"])
def list_users():
    users = user_service.list_users(get_store(), current_subject())
    return jsonify({"items": [u.to_dict() for u in users], "total": len(users)}), 200


@admin_bp.route("/users", methods=["POST"])
def create_user():
    data = request.get_json(silent=True) or {}
    user = user_service.create_user(get_store(), current_subject(), data)
    return jsonify(user.to_dict()), 201


@admin_bp.route("/users/<user_id>", methods=["DELETE"])
def delete_user(user_id):
    user_service.delete_user(get_store(), current_subject(), user_id)
    return jsonify({"message": "Deleted", "id": user_id}), 200


@admin_bp.route("/customers", methods=["DELETE"])
def delete_all_customers():
    removed = customer_service.delete_all_customers(get_store(), current_subject())
    return jsonify({"deleted": removed}), 200
