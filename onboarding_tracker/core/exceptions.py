"""
Tracker-wide exception hierarchy.

Services raise these; blueprints register handlers against them once and
map them to consistent HTTP status codes.

Usage:
    from onboarding_tracker.core.exceptions import NotFoundError, ValidationError

    raise NotFoundError(resource="Customer", resource_id="42")
    raise ValidationError("customer is required", details={"customer": "required"})
"""


class NotFoundError(Exception):
    """Raised when an update, delete or lookup targets an unknown id.

    Maps to HTTP 404.

    Args:
        resource: Human-readable entity name (e.g. "Customer", "User").
        resource_id: The id that was looked up.
    """

    def __init__(self, resource: str, resource_id: str | None = None) -> None:
        self.resource = resource
        self.resource_id = resource_id
        msg = f"{resource}"
        if resource_id is not None:
            msg += f" id={resource_id}"
        msg += " not found"
        super().__init__(msg)


class ValidationError(Exception):
    """Raised when a well-formed payload violates a field rule.

    Maps to HTTP 422.

    Args:
        message: Human-readable explanation of what failed.
        details: Optional field-level breakdown; keys are field names.
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message)


class AuthenticationRequired(Exception):
    """Raised when an endpoint needs a session subject and none is present.

    Maps to HTTP 401.
    """

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class PermissionDenied(Exception):
    """Raised when the subject's role lacks the capability for an action.

    Maps to HTTP 403.
    """

    def __init__(self, user_id: str, capability: str) -> None:
        super().__init__(f"User {user_id} does not have permission for '{capability}'")
        self.user_id = user_id
        self.capability = capability
