"""
Customer Onboarding Tracker
Flask Application Factory.

Usage:
    from onboarding_tracker import create_app
    app = create_app()           # defaults to "development"
    app = create_app("testing")  # explicit config
"""

import logging
import os

import click
from flask import Flask, abort, request
from flask_cors import CORS

from onboarding_tracker.auth import init_auth
from onboarding_tracker.blueprints import register_blueprints, register_error_handlers
from onboarding_tracker.config import config
from onboarding_tracker.middleware.logging_config import configure_logging
from onboarding_tracker.middleware.timing import init_request_timing
from onboarding_tracker.models import db
from onboarding_tracker.services.record_store import init_store

logger = logging.getLogger(__name__)


def create_app(config_name=None):
    """
    Create and configure the Flask application.

    Args:
        config_name: Configuration environment name.
                     One of: "development", "testing", "production".
                     Defaults to APP_ENV env var, or "development" if unset.

    Returns:
        Configured Flask application instance.
    """
    if config_name is None:
        config_name = os.getenv("APP_ENV", "development")

    app = Flask(__name__)
    app.config.from_object(config[config_name]())

    # ── Structured logging (must be first) ───────────────────────────────
    configure_logging(app)

    # ── Extensions ───────────────────────────────────────────────────────
    db.init_app(app)
    cors_origins = app.config.get("CORS_ORIGINS", "*")
    if cors_origins and cors_origins != "*":
        CORS(app, origins=[o.strip() for o in cors_origins.split(",") if o.strip()],
             supports_credentials=True)
    else:
        CORS(app)

    # ── Request timing, then session auth ────────────────────────────────
    init_request_timing(app)
    init_auth(app)

    @app.before_request
    def _guard_request():
        max_len = app.config.get("MAX_CONTENT_LENGTH")
        if max_len and request.content_length and request.content_length > max_len:
            abort(413, description="Request body too large")

    # ── Record store (tables + optional demo data) ───────────────────────
    from onboarding_tracker.models import customer as _customer_models  # noqa: F401
    from onboarding_tracker.models import user as _user_models          # noqa: F401

    store = init_store(app)
    with app.app_context():
        db.create_all()
        if app.config.get("SEED_DEMO_DATA"):
            from onboarding_tracker.services.seed import seed_demo_data
            seed_demo_data(store)

    # ── Blueprints & error handlers ──────────────────────────────────────
    register_blueprints(app)
    register_error_handlers(app)

    @app.route("/api/v1/health")
    def health():
        return {"status": "ok", "app": "Customer Onboarding Tracker"}

    # ── CLI commands ─────────────────────────────────────────────────────
    @app.cli.command("seed-demo")
    @click.option("--reset", is_flag=True, help="Delete all customers before seeding.")
    def seed_demo_cmd(reset):
        """Load the six demo customers and the two demo accounts."""
        from onboarding_tracker.services.seed import seed_demo_data
        added = seed_demo_data(store, reset=reset)
        click.echo(f"Seeded {added['customers']} customers and {added['users']} users.")

    return app
