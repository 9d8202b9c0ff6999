"""
Role-based capability checks.

Two roles exist. Super admins may do everything; normal users may view
customers and add new ones but not edit, delete or administer.

Usage:
    from onboarding_tracker.services.permission import check_capability

    # Raises PermissionDenied if not allowed
    check_capability(subject, "customers.update")

    # Boolean check
    if has_capability(subject, "admin.view"):
        ...
"""

import logging

from onboarding_tracker.core.exceptions import AuthenticationRequired, PermissionDenied
from onboarding_tracker.core.records import Role, UserRecord

logger = logging.getLogger(__name__)

CUSTOMERS_VIEW = "customers.view"
CUSTOMERS_CREATE = "customers.create"
CUSTOMERS_UPDATE = "customers.update"
CUSTOMERS_DELETE = "customers.delete"
CUSTOMERS_DELETE_ALL = "customers.delete_all"
USERS_MANAGE = "users.manage"
ADMIN_VIEW = "admin.view"

PERMISSION_MATRIX: dict[Role, frozenset[str]] = {
    Role.SUPER_ADMIN: frozenset({
        CUSTOMERS_VIEW,
        CUSTOMERS_CREATE,
        CUSTOMERS_UPDATE,
        CUSTOMERS_DELETE,
        CUSTOMERS_DELETE_ALL,
        USERS_MANAGE,
        ADMIN_VIEW,
    }),
    Role.NORMAL_USER: frozenset({
        CUSTOMERS_VIEW,
        CUSTOMERS_CREATE,
    }),
}


def capabilities_for(role: Role) -> frozenset[str]:
    return PERMISSION_MATRIX.get(role, frozenset())


def has_capability(subject: UserRecord | None, capability: str) -> bool:
    if subject is None:
        return False
    return capability in capabilities_for(subject.role)


def check_capability(subject: UserRecord | None, capability: str) -> None:
    """
    Assert the subject holds ``capability``.

    Raises:
        AuthenticationRequired: If there is no subject at all.
        PermissionDenied: If the subject's role lacks the capability.
    """
    if subject is None:
        raise AuthenticationRequired()
    if not has_capability(subject, capability):
        logger.warning(
            "User %s denied: role '%s' lacks '%s'",
            subject.id, subject.role.value, capability,
            extra={"user_id": subject.id},
        )
        raise PermissionDenied(subject.id, capability)
