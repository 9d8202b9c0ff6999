"""
Customer Onboarding Tracker
Blueprint registry and shared error handlers.
"""

import logging

from flask import request

from onboarding_tracker.core.exceptions import (
    AuthenticationRequired,
    NotFoundError,
    PermissionDenied,
    ValidationError,
)
from onboarding_tracker.utils.errors import E, api_error

logger = logging.getLogger(__name__)


def register_blueprints(app):
    from onboarding_tracker.blueprints.admin_bp import admin_bp
    from onboarding_tracker.blueprints.auth_bp import auth_bp
    from onboarding_tracker.blueprints.customers_bp import customers_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(customers_bp)
    app.register_blueprint(admin_bp)


def register_error_handlers(app):
    """Map the core exception types onto JSON error responses."""

    @app.errorhandler(NotFoundError)
    def _handle_not_found(error: NotFoundError):
        return api_error(E.NOT_FOUND, str(error))

    @app.errorhandler(ValidationError)
    def _handle_validation(error: ValidationError):
        return api_error(E.VALIDATION_INVALID, str(error), details=error.details)

    @app.errorhandler(AuthenticationRequired)
    def _handle_unauthenticated(error: AuthenticationRequired):
        return api_error(E.UNAUTHENTICATED, str(error))

    @app.errorhandler(PermissionDenied)
    def _handle_forbidden(error: PermissionDenied):
        return api_error(E.FORBIDDEN, "Permission denied", details={"required": error.capability})

    @app.errorhandler(404)
    def _not_found(e):
        return {"error": "Not found", "path": request.path}, 404

    @app.errorhandler(405)
    def _method_not_allowed(e):
        return {"error": "Method not allowed"}, 405

    @app.errorhandler(500)
    def _server_error(e):
        logger.error("500 error on %s: %s", request.path, e, exc_info=True)
        return api_error(E.INTERNAL, "Internal server error")
