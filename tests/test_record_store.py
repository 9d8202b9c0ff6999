"""
Record store tests — ordering, full replace, unknown ids, snapshots.

Runs against the in-memory SQLite database of the testing config; tables
are recreated after every test so ids start at "1".
"""

from dataclasses import FrozenInstanceError, replace
from datetime import date

import pytest
from sqlalchemy.exc import SQLAlchemyError

from onboarding_tracker.core.exceptions import NotFoundError
from onboarding_tracker.core.records import (
    CustomerDraft,
    Environment,
    JobStatus,
    OnboardingStatus,
    Role,
    UserDraft,
)


def _draft(name, **overrides):
    return CustomerDraft(customer=name, partner=f"{name} Partner", **overrides)


class TestCreateAndList:
    def test_empty_store(self, store):
        assert store.list() == []
        assert store.count() == 0

    def test_create_assigns_string_id_and_appends(self, store):
        first = store.create(_draft("Acme"))
        second = store.create(_draft("Globex"))
        assert first.id == "1"
        assert second.id == "2"
        assert [r.customer for r in store.list()] == ["Acme", "Globex"]

    def test_create_round_trips_all_fields(self, store):
        draft = _draft(
            "Epharma",
            onboarding_status=OnboardingStatus.COMPLETED,
            initial_requester="Fabio",
            deep_discovery=True,
            accounts_count=12,
            source_cloud="GCP",
            onboarded_date=date(2025, 7, 11),
            ml_jobs=JobStatus.BLOCKED,
            notes="multi\nline",
            onboarded_environment=Environment.MATILDA_OPTIMIZE,
        )
        record = store.create(draft)
        assert record.draft() == draft
        assert store.get(record.id) == record

    def test_ids_are_not_reused(self, store):
        store.create(_draft("A"))
        last = store.create(_draft("B"))
        store.delete(last.id)
        assert store.create(_draft("C")).id == "3"

    def test_list_returns_frozen_snapshots(self, store):
        store.create(_draft("Acme"))
        snapshot = store.list()
        with pytest.raises(FrozenInstanceError):
            snapshot[0].customer = "Changed"
        store.update("1", _draft("Renamed"))
        assert snapshot[0].customer == "Acme"
        assert store.list()[0].customer == "Renamed"

    def test_failed_commit_rolls_back(self, store):
        store.create(_draft("Acme"))
        with pytest.raises((OverflowError, SQLAlchemyError)):
            store.create(_draft("Huge", accounts_count=10**20))
        # session is usable again and nothing partial was kept
        assert [r.customer for r in store.list()] == ["Acme"]
        assert store.create(_draft("Globex")).customer == "Globex"

    def test_failed_update_keeps_previous_values(self, store):
        record = store.create(_draft("Acme", accounts_count=3))
        with pytest.raises((OverflowError, SQLAlchemyError)):
            store.update(record.id, _draft("Acme", accounts_count=10**20))
        assert store.get(record.id).accounts_count == 3


class TestUpdate:
    def test_update_keeps_id_and_position(self, seeded):
        before = seeded.list()
        target = before[2]
        updated = seeded.update(target.id, replace(target.draft(), notes="cleared"))
        after = seeded.list()
        assert updated.id == target.id
        assert [r.id for r in after] == [r.id for r in before]
        assert after[2].notes == "cleared"
        assert after[1] == before[1]

    def test_update_is_full_replace(self, seeded):
        seeded.update("2", _draft("Epharma"))
        record = seeded.get("2")
        assert record.initial_requester == ""
        assert record.onboarding_status is OnboardingStatus.IN_PROGRESS
        assert record.onboarded_environment is None

    @pytest.mark.parametrize("bad_id", ["999", "abc", "", None])
    def test_update_unknown_id_raises_and_changes_nothing(self, seeded, bad_id):
        before = seeded.list()
        with pytest.raises(NotFoundError):
            seeded.update(bad_id, _draft("Ghost"))
        assert seeded.list() == before


class TestDelete:
    def test_delete_removes_only_target(self, seeded):
        seeded.delete("3")
        names = [r.customer for r in seeded.list()]
        assert "BCDR AerieHub" not in names
        assert len(names) == 5

    def test_delete_unknown_id_raises_and_changes_nothing(self, seeded):
        with pytest.raises(NotFoundError) as exc_info:
            seeded.delete("42")
        assert "id=42" in str(exc_info.value)
        assert seeded.count() == 6

    def test_get_unknown_id(self, store):
        with pytest.raises(NotFoundError):
            store.get("1")

    def test_delete_all(self, seeded):
        assert seeded.delete_all() == 6
        assert seeded.list() == []
        # users are untouched
        assert len(seeded.list_users()) == 2

    def test_delete_all_on_empty_store(self, store):
        assert store.delete_all() == 0


class TestUsers:
    def test_create_and_list_users(self, store):
        user = store.create_user(UserDraft(email="a@x.com", name="A"))
        assert user.id == "1"
        assert user.role is Role.NORMAL_USER
        assert store.list_users() == [user]

    def test_duplicate_emails_are_allowed(self, store):
        store.create_user(UserDraft(email="a@x.com", name="First"))
        store.create_user(UserDraft(email="a@x.com", name="Second"))
        assert [u.name for u in store.list_users()] == ["First", "Second"]

    def test_delete_user(self, seeded):
        seeded.delete_user("2")
        assert [u.email for u in seeded.list_users()] == ["admin@matildacloud.com"]

    def test_delete_unknown_user(self, seeded):
        with pytest.raises(NotFoundError):
            seeded.delete_user("7")
