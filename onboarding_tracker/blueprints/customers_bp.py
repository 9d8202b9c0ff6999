"""
Customers Blueprint — onboarding dashboard API.

  GET    /api/v1/customers                → filtered list (?q=, ?status=)
  POST   /api/v1/customers                → add customer
  GET    /api/v1/customers/stats          → status counters
  GET    /api/v1/customers/form-fields    → form layout for ?status=
  GET    /api/v1/customers/<id>           → customer detail
  PUT    /api/v1/customers/<id>           → replace customer (super admin)
  DELETE /api/v1/customers/<id>           → delete customer (super admin)

Service layer owns validation, authorization and commits.
"""

from flask import Blueprint, jsonify, request

from onboarding_tracker.auth import current_subject
from onboarding_tracker.services import customer_service as svc
from onboarding_tracker.services.record_store import get_store

customers_bp = Blueprint("customers", __name__, url_prefix="/api/v1/customers")


@customers_bp.route("", methods=["GET"])
def list_customers():
    """Query params: q (search term), status ("all" or an onboarding status)."""
    result = svc.list_customers(
        get_store(),
        current_subject(),
        search_term=request.args.get("q", ""),
        status_filter=request.args.get("status"),
    )
    return jsonify(result), 200


@customers_bp.route("", methods=["POST"])
def create_customer():
    data = request.get_json(silent=True) or {}
    record = svc.create_customer(get_store(), current_subject(), data)
    return jsonify(record.to_dict()), 201


@customers_bp.route("/stats", methods=["GET"])
def customer_stats():
    return jsonify(svc.customer_stats(get_store(), current_subject())), 200


@customers_bp.route("/form-fields", methods=["GET"])
def form_fields():
    return jsonify(svc.form_fields(request.args.get("status"))), 200


@customers_bp.route("/<customer_id>", methods=["GET"])
def get_customer(customer_id):
    record = svc.get_customer(get_store(), current_subject(), customer_id)
    return jsonify(record.to_dict()), 200


@customers_bp.route("/<customer_id>", methods=["PUT"])
def update_customer(customer_id):
    """Full replace: fields missing from the body reset to their defaults."""
    data = request.get_json(silent=True) or {}
    record = svc.update_customer(get_store(), current_subject(), customer_id, data)
    return jsonify(record.to_dict()), 200


@customers_bp.route("/<customer_id>", methods=["DELETE"])
def delete_customer(customer_id):
    svc.delete_customer(get_store(), current_subject(), customer_id)
    return jsonify({"message": "Deleted", "id": customer_id}), 200
