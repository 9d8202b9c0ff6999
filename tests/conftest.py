"""
Shared pytest fixtures for the Customer Onboarding Tracker test suite.

Provides:
    - app: Flask application (session-scoped)
    - _setup_db: Table creation/teardown (session-scoped)
    - session: Per-test app context + table recreate (autouse)
    - client: Flask test client (function-scoped)
    - store: The app's RecordStore
    - seeded: Store pre-loaded with the demo customers and users
    - seed_records: Demo customers as detached records (no store involved)
    - admin_client / user_client: Test clients logged in per role
"""

import pytest

from onboarding_tracker import create_app
from onboarding_tracker.core.records import CustomerRecord
from onboarding_tracker.models import db as _db
from onboarding_tracker.services.record_store import get_store
from onboarding_tracker.services.seed import DEMO_CUSTOMERS, seed_demo_data

ADMIN_EMAIL = "admin@matildacloud.com"
USER_EMAIL = "user@matildacloud.com"
SHARED_PASSWORD = "password"


def login(client, email=ADMIN_EMAIL, password=SHARED_PASSWORD):
    """Log ``client`` in and return the user payload."""
    res = client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert res.status_code == 200, res.get_json()
    return res.get_json()["user"]


# ── App & DB fixtures ────────────────────────────────────────────────────


@pytest.fixture(scope="session")
def app():
    """Create the Flask application once per test session."""
    return create_app("testing")


@pytest.fixture(scope="session")
def _setup_db(app):
    """Create all tables at session start, drop at end."""
    with app.app_context():
        _db.create_all()
    yield
    with app.app_context():
        _db.drop_all()


@pytest.fixture(autouse=True)
def session(app, _setup_db):
    """Per-test: open app context, recreate tables afterwards (ids restart at 1)."""
    with app.app_context():
        yield
        _db.session.rollback()
        _db.drop_all()
        _db.create_all()


@pytest.fixture()
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture()
def store():
    return get_store()


@pytest.fixture()
def seeded(store):
    seed_demo_data(store)
    return store


@pytest.fixture()
def seed_records():
    return [CustomerRecord.from_draft(str(i), d) for i, d in enumerate(DEMO_CUSTOMERS, start=1)]


# ── Logged-in clients ────────────────────────────────────────────────────


@pytest.fixture()
def admin_client(app, seeded):
    c = app.test_client()
    login(c, ADMIN_EMAIL)
    return c


@pytest.fixture()
def user_client(app, seeded):
    c = app.test_client()
    login(c, USER_EMAIL)
    return c


@pytest.fixture()
def login_as():
    """Return the ``login(client, email, password)`` helper."""
    return login
