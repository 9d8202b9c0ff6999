"""
Tracker user model.

Email is not unique; the login gate resolves the first
matching row in insertion order.
"""

from datetime import datetime, timezone

from onboarding_tracker.core.records import Role, UserRecord
from onboarding_tracker.models import db


class User(db.Model):
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), nullable=False, index=True)
    name = db.Column(db.String(200), default="")
    role = db.Column(
        db.String(30),
        nullable=False,
        default=Role.NORMAL_USER.value,
        comment="super_admin | normal_user",
    )
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))

    def to_record(self) -> UserRecord:
        return UserRecord(
            id=str(self.id),
            email=self.email,
            name=self.name or "",
            role=Role(self.role),
        )

    def __repr__(self):
        return f"<User {self.id}: {self.email} ({self.role})>"
