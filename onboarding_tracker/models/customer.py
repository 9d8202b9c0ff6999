"""
Customer onboarding model.

One row per tracked customer. Rows are ordered by their autoincrement id,
which is also the insertion order the dashboard lists them in.
"""

from datetime import datetime, timezone

from onboarding_tracker.core.records import (
    CustomerDraft,
    CustomerRecord,
    Environment,
    JobStatus,
    OnboardingStatus,
)
from onboarding_tracker.models import db


class Customer(db.Model):
    __tablename__ = "customers"
    # Ids are never reused, even after the highest row is deleted
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    customer = db.Column(db.String(200), nullable=False, default="")
    partner = db.Column(db.String(200), nullable=False, default="")
    onboarding_status = db.Column(
        db.String(30),
        nullable=False,
        default=OnboardingStatus.IN_PROGRESS.value,
        comment="In Progress | Completed | Blocked",
    )
    initial_requester = db.Column(db.String(200), default="")
    handed_over_to = db.Column(db.String(200), default="")
    opportunity = db.Column(db.String(100), default="")
    deep_discovery = db.Column(db.Boolean, default=False)
    accounts_count = db.Column(db.Integer, default=0)
    source_cloud = db.Column(db.String(50), default="AWS")
    target_cloud = db.Column(db.String(50), default="AWS")
    onboarded_date = db.Column(db.Date, nullable=True)
    discovery_completed_date = db.Column(db.Date, nullable=True)

    # Job statuses: Not Started | In Progress | Completed | Blocked
    cost_jobs = db.Column(db.String(30), default=JobStatus.NOT_STARTED.value)
    metrics_jobs = db.Column(db.String(30), default=JobStatus.NOT_STARTED.value)
    ml_jobs = db.Column(db.String(30), default=JobStatus.NOT_STARTED.value)
    recommendations_jobs = db.Column(db.String(30), default=JobStatus.NOT_STARTED.value)

    notes = db.Column(db.Text, default="")
    onboarded_environment = db.Column(
        db.String(50),
        nullable=True,
        comment="matilda-optimize | rapid-assessments | matilda-optimize.au",
    )

    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(
        db.DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def apply_draft(self, draft: CustomerDraft) -> None:
        """Overwrite every draft-backed column from ``draft``."""
        for name, value in draft.field_values().items():
            if isinstance(value, (OnboardingStatus, JobStatus, Environment)):
                value = value.value
            setattr(self, name, value)

    def to_record(self) -> CustomerRecord:
        """Detached, immutable snapshot of this row."""
        env = self.onboarded_environment
        return CustomerRecord(
            id=str(self.id),
            customer=self.customer or "",
            partner=self.partner or "",
            onboarding_status=OnboardingStatus(self.onboarding_status),
            initial_requester=self.initial_requester or "",
            handed_over_to=self.handed_over_to or "",
            opportunity=self.opportunity or "",
            deep_discovery=bool(self.deep_discovery),
            accounts_count=self.accounts_count or 0,
            source_cloud=self.source_cloud or "",
            target_cloud=self.target_cloud or "",
            onboarded_date=self.onboarded_date,
            discovery_completed_date=self.discovery_completed_date,
            cost_jobs=JobStatus(self.cost_jobs),
            metrics_jobs=JobStatus(self.metrics_jobs),
            ml_jobs=JobStatus(self.ml_jobs),
            recommendations_jobs=JobStatus(self.recommendations_jobs),
            notes=self.notes or "",
            onboarded_environment=Environment(env) if env else None,
        )

    def __repr__(self):
        return f"<Customer {self.id}: {self.customer} [{self.onboarding_status}]>"
