"""
WSGI entry point.

Usage:
    gunicorn wsgi:app
    flask --app wsgi seed-demo --reset
"""

from onboarding_tracker import create_app

app = create_app()
