"""
Customer Onboarding Tracker
Configuration classes for Flask App Factory.

Usage:
    config_name = os.getenv("APP_ENV", "development")
    app.config.from_object(config[config_name])
"""

import os
import secrets

# The record store lives for the lifetime of the process
_SQLITE_MEMORY = "sqlite:///:memory:"

# Generate a random key for development; production MUST use a stable env var
_DEV_SECRET = secrets.token_hex(32)

# Demo passphrase shared by every account, and the session key of the cached subject
DEFAULT_SHARED_PASSWORD = "password"
DEFAULT_SESSION_KEY = "currentUser"


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() not in ("false", "0", "no", "off")


class Config:
    """Base configuration shared across all environments."""

    SECRET_KEY = os.getenv("SECRET_KEY", _DEV_SECRET)
    DEBUG = False
    TESTING = False

    # SQLAlchemy
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", _SQLITE_MEMORY)

    # CORS
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")

    # Request guards
    MAX_CONTENT_LENGTH = 1 * 1024 * 1024  # 1 MB

    # Login gate: one shared demo passphrase for every account
    TRACKER_SHARED_PASSWORD = os.getenv("TRACKER_SHARED_PASSWORD", DEFAULT_SHARED_PASSWORD)
    # Session cookie key holding the serialized subject
    SESSION_SUBJECT_KEY = DEFAULT_SESSION_KEY

    # Load the six demo customers and two demo users into an empty store
    SEED_DEMO_DATA = _env_flag("SEED_DEMO_DATA", "true")


class DevelopmentConfig(Config):
    """Development environment configuration."""

    DEBUG = True


class TestingConfig(Config):
    """Testing environment configuration."""

    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", _SQLITE_MEMORY)
    SEED_DEMO_DATA = False
    SECRET_KEY = "testing-secret"


class ProductionConfig(Config):
    """Production environment configuration."""

    DEBUG = False
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "")  # Must be set explicitly in production
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True

    def __init__(self):
        if not os.getenv("SECRET_KEY"):
            raise RuntimeError("SECRET_KEY environment variable must be set in production")


# Configuration mapping: environment name -> config class
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}
