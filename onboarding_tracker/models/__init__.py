"""
Customer Onboarding Tracker
SQLAlchemy models backing the record store.
"""

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
