"""
Auth Blueprint — login gate and session lifecycle.

  POST /api/v1/auth/login    → check credentials, cache subject in session
  POST /api/v1/auth/logout   → clear cached subject
  GET  /api/v1/auth/me       → current subject
"""

import logging

from flask import Blueprint, current_app, jsonify, request, session

from onboarding_tracker.auth import current_subject
from onboarding_tracker.services.record_store import get_store
from onboarding_tracker.services.session_gate import (
    authenticate,
    forget_subject,
    remember_subject,
)
from onboarding_tracker.utils.errors import E, api_error

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix="/api/v1/auth")

INVALID_CREDENTIALS_MESSAGE = (
    "Invalid credentials. Use admin@matildacloud.com or "
    'user@matildacloud.com with password "password"'
)


@auth_bp.route("/login", methods=["POST"])
def login():
    """Body: {email, password}. Returns the authenticated user."""
    data = request.get_json(silent=True) or {}
    email = data.get("email")
    password = data.get("password")
    if email in (None, "") or password in (None, ""):
        return api_error(E.VALIDATION_REQUIRED, "email and password are required")
    if not isinstance(email, str) or not isinstance(password, str):
        return api_error(E.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE)

    user = authenticate(
        get_store().list_users(),
        email,
        password,
        shared_password=current_app.config["TRACKER_SHARED_PASSWORD"],
    )
    if user is None:
        return api_error(E.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE)

    remember_subject(session, user, current_app.config["SESSION_SUBJECT_KEY"])
    return jsonify({"user": user.to_dict()}), 200


@auth_bp.route("/logout", methods=["POST"])
def logout():
    subject = current_subject()
    forget_subject(session, current_app.config["SESSION_SUBJECT_KEY"])
    if subject:
        logger.info("User %s logged out", subject.email, extra={"user_id": subject.id})
    return jsonify({"message": "Logged out"}), 200


@auth_bp.route("/me", methods=["GET"])
def me():
    return jsonify({"user": current_subject().to_dict()}), 200
