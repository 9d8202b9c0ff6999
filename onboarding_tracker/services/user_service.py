"""User administration — super admin only.

Users are created and deleted, never edited. Email uniqueness is not
enforced; the login gate resolves the first user with a given email.
"""
import logging
from typing import Any

from onboarding_tracker.core.exceptions import ValidationError
from onboarding_tracker.core.records import Role, UserDraft, UserRecord
from onboarding_tracker.services import permission
from onboarding_tracker.services.query_engine import status_percentages, summarize_statuses
from onboarding_tracker.services.record_store import RecordStore

logger = logging.getLogger(__name__)


def user_draft_from_payload(data: dict[str, Any]) -> UserDraft:
    errors: dict[str, str] = {}
    email = data.get("email")
    name = data.get("name")
    if not isinstance(email, str) or not email.strip():
        errors["email"] = "Required"
    elif "@" not in email or len(email) > 255:
        errors["email"] = "Invalid email address"
    if not isinstance(name, str) or not name.strip():
        errors["name"] = "Required"

    role = Role.NORMAL_USER
    if data.get("role"):
        try:
            role = Role(data["role"])
        except ValueError:
            errors["role"] = f"Allowed: {[r.value for r in Role]}"

    if errors:
        raise ValidationError("Invalid user data", details=errors)
    return UserDraft(email=email.strip(), name=name.strip(), role=role)


def list_users(store: RecordStore, subject: UserRecord | None) -> list[UserRecord]:
    permission.check_capability(subject, permission.USERS_MANAGE)
    return store.list_users()


def create_user(store: RecordStore, subject: UserRecord | None, data: dict[str, Any]) -> UserRecord:
    permission.check_capability(subject, permission.USERS_MANAGE)
    user = store.create_user(user_draft_from_payload(data))
    logger.info("User %s created user %s", subject.id, user.id, extra={"user_id": subject.id})
    return user


def delete_user(store: RecordStore, subject: UserRecord | None, user_id: str) -> None:
    permission.check_capability(subject, permission.USERS_MANAGE)
    store.delete_user(user_id)


def admin_stats(store: RecordStore, subject: UserRecord | None) -> dict:
    """Status counters with percentages, plus user counts per role."""
    permission.check_capability(subject, permission.ADMIN_VIEW)
    summary = summarize_statuses(store.list())
    users = store.list_users()
    return {
        "customers": summary,
        "percentages": status_percentages(summary),
        "users": {
            "total": len(users),
            Role.SUPER_ADMIN.value: sum(1 for u in users if u.role is Role.SUPER_ADMIN),
            Role.NORMAL_USER.value: sum(1 for u in users if u.role is Role.NORMAL_USER),
        },
    }
