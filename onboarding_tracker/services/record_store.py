"""Record store: exclusive owner of the customer and user collections.

Transaction policy: every mutating method commits before returning, so the
next read always sees the change. Reads return detached frozen records,
never live ORM rows, so a caller holding an earlier ``list()`` result does
not observe later mutations.

Unknown ids on get/update/delete raise ``NotFoundError`` and leave the
collection untouched.

Usage:
    from onboarding_tracker.services.record_store import get_store

    store = get_store()
    record = store.create(CustomerDraft(customer="Acme", partner="Partner A"))
    store.update(record.id, replace(record.draft(), notes="kick-off done"))
"""
from __future__ import annotations

import logging

from flask import current_app

from onboarding_tracker.core.exceptions import NotFoundError
from onboarding_tracker.core.records import (
    CustomerDraft,
    CustomerRecord,
    UserDraft,
    UserRecord,
)
from onboarding_tracker.models import db
from onboarding_tracker.models.customer import Customer
from onboarding_tracker.models.user import User

logger = logging.getLogger(__name__)

EXTENSION_KEY = "record_store"


def _parse_id(record_id) -> int | None:
    """Ids are opaque strings on the outside and integers in the table."""
    try:
        return int(str(record_id))
    except (TypeError, ValueError):
        return None


class RecordStore:
    """Ordered customer and user collections backed by the SQLAlchemy session."""

    def __init__(self, database=db):
        self.db = database

    def _commit(self) -> None:
        """Commit the session; on failure roll back and re-raise."""
        try:
            self.db.session.commit()
        except Exception:
            self.db.session.rollback()
            logger.exception("Record store commit failed, session rolled back")
            raise

    # ── Customers ────────────────────────────────────────────────────────

    def list(self) -> list[CustomerRecord]:
        """All customers in insertion order."""
        rows = Customer.query.order_by(Customer.id).all()
        return [row.to_record() for row in rows]

    def count(self) -> int:
        return Customer.query.count()

    def _get_row(self, record_id) -> Customer:
        pk = _parse_id(record_id)
        row = self.db.session.get(Customer, pk) if pk is not None else None
        if row is None:
            raise NotFoundError(resource="Customer", resource_id=str(record_id))
        return row

    def get(self, record_id) -> CustomerRecord:
        return self._get_row(record_id).to_record()

    def create(self, draft: CustomerDraft) -> CustomerRecord:
        row = Customer()
        row.apply_draft(draft)
        self.db.session.add(row)
        self._commit()
        logger.info("Created customer %s (id=%d)", row.customer, row.id,
                    extra={"customer_id": row.id})
        return row.to_record()

    def update(self, record_id, draft: CustomerDraft) -> CustomerRecord:
        """Replace every field of the customer; id and position are kept."""
        row = self._get_row(record_id)
        row.apply_draft(draft)
        self._commit()
        logger.info("Updated customer %s (id=%d)", row.customer, row.id,
                    extra={"customer_id": row.id})
        return row.to_record()

    def delete(self, record_id) -> None:
        row = self._get_row(record_id)
        self.db.session.delete(row)
        self._commit()
        logger.info("Deleted customer id=%s", record_id, extra={"customer_id": record_id})

    def delete_all(self) -> int:
        """Empty the customer collection; returns the number of removed rows."""
        removed = Customer.query.delete()
        self._commit()
        logger.warning("Deleted all customers (%d rows)", removed)
        return removed

    # ── Users ────────────────────────────────────────────────────────────

    def list_users(self) -> list[UserRecord]:
        rows = User.query.order_by(User.id).all()
        return [row.to_record() for row in rows]

    def create_user(self, draft: UserDraft) -> UserRecord:
        row = User(email=draft.email, name=draft.name, role=draft.role.value)
        self.db.session.add(row)
        self._commit()
        logger.info("Created user %s (id=%d, role=%s)", row.email, row.id, row.role,
                    extra={"user_id": row.id})
        return row.to_record()

    def delete_user(self, user_id) -> None:
        pk = _parse_id(user_id)
        row = self.db.session.get(User, pk) if pk is not None else None
        if row is None:
            raise NotFoundError(resource="User", resource_id=str(user_id))
        self.db.session.delete(row)
        self._commit()
        logger.info("Deleted user %s (id=%s)", row.email, user_id, extra={"user_id": user_id})


def init_store(app) -> RecordStore:
    """Create the app's record store and register it as an extension."""
    store = RecordStore(db)
    app.extensions[EXTENSION_KEY] = store
    return store


def get_store() -> RecordStore:
    """Return the record store of the current application."""
    return current_app.extensions[EXTENSION_KEY]
