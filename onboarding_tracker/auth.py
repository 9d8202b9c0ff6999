"""
Customer Onboarding Tracker
Session authentication middleware.

Provides:
    - Subject restore from the signed session cookie on every API request
    - Login-required guard for /api/v1/* (except health and login)
    - CSRF mitigation for state-changing requests (JSON content type)

Security model:
    - The subject cached at login is trusted on read; it is not re-checked
      against the user collection.
    - Authorization (who may do what) is decided by the service layer via
      ``services.permission``, not here.
"""

import logging

from flask import current_app, g, request, session

from onboarding_tracker.core.records import UserRecord
from onboarding_tracker.services.session_gate import restore_subject
from onboarding_tracker.utils.errors import E, api_error

logger = logging.getLogger(__name__)

# Routes reachable without a session subject
_PUBLIC_PATHS = frozenset({
    "/api/v1/health",
    "/api/v1/auth/login",
    "/api/v1/auth/logout",
})


def current_subject() -> UserRecord | None:
    """The subject restored for the current request, if any."""
    return getattr(g, "current_user", None)


def _check_content_type():
    """
    For state-changing requests (POST/PUT/PATCH/DELETE) with a body, require
    Content-Type: application/json. HTML forms cannot send that type.
    """
    if request.method in ("POST", "PUT", "PATCH", "DELETE"):
        ct = request.content_type or ""
        if "application/json" not in ct and request.content_length and request.content_length > 0:
            return api_error(
                E.VALIDATION_REQUIRED,
                "Content-Type must be application/json for state-changing requests",
                status=415,
            )
    return None


def init_auth(app):
    """
    Install authentication middleware on the Flask app.

    - Restores g.current_user from the session on API routes
    - Rejects unauthenticated calls to non-public API routes with 401
    """
    @app.before_request
    def _before_request_auth():
        if not request.path.startswith("/api/v1/"):
            return None
        # OPTIONS pre-flight requests don't need auth
        if request.method == "OPTIONS":
            return None

        csrf_error = _check_content_type()
        if csrf_error:
            return csrf_error

        g.current_user = restore_subject(
            session, current_app.config["SESSION_SUBJECT_KEY"],
        )
        if request.path in _PUBLIC_PATHS:
            return None
        if g.current_user is None:
            return api_error(E.UNAUTHENTICATED, "Authentication required. Please log in.")
        return None

    logger.debug("Session auth middleware installed")
