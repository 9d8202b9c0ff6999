"""
Session gate — resolves a submitted credential pair to a subject.

Every demo account shares one passphrase (``TRACKER_SHARED_PASSWORD``,
"password" by default). A rejected login gives no hint whether the email
or the password was wrong.

The subject of a successful login is cached in the signed session cookie
under ``SESSION_SUBJECT_KEY`` and trusted as-is on every later request;
it is not re-checked against the user collection, so a deleted user's
cached session keeps working until logout.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, MutableMapping

from onboarding_tracker.config import DEFAULT_SESSION_KEY, DEFAULT_SHARED_PASSWORD
from onboarding_tracker.core.records import UserRecord

logger = logging.getLogger(__name__)

SESSION_SUBJECT_KEY = DEFAULT_SESSION_KEY


def authenticate(
    users: Iterable[UserRecord],
    email: str,
    password: str,
    shared_password: str = DEFAULT_SHARED_PASSWORD,
) -> UserRecord | None:
    """Return the first user with this exact email if the password matches.

    Returns None (rejected) for an unknown email or a wrong password.
    """
    user = next((u for u in users if u.email == email), None)
    if user is None or password != shared_password:
        logger.warning("Rejected login attempt for %s", email)
        return None
    logger.info("User %s logged in (role=%s)", user.email, user.role.value,
                extra={"user_id": user.id})
    return user


# ── Session cache ────────────────────────────────────────────────────────


def remember_subject(
    session: MutableMapping, user: UserRecord, key: str = SESSION_SUBJECT_KEY,
) -> None:
    session[key] = user.to_dict()


def restore_subject(
    session: MutableMapping, key: str = SESSION_SUBJECT_KEY,
) -> UserRecord | None:
    """Rebuild the cached subject; a corrupt payload is dropped and yields None."""
    payload = session.get(key)
    if not payload:
        return None
    try:
        return UserRecord.from_dict(payload)
    except (KeyError, TypeError, ValueError):
        logger.warning("Discarding malformed session subject")
        session.pop(key, None)
        return None


def forget_subject(session: MutableMapping, key: str = SESSION_SUBJECT_KEY) -> None:
    session.pop(key, None)
