"""
Core record types shared by the store, the query engine and the policies.

Enums carry their wire values (the strings the dashboard shows), so
``OnboardingStatus("Completed")`` parses request input directly and
``status.value`` serializes it back.

Usage:
    from onboarding_tracker.core.records import CustomerDraft, OnboardingStatus

    draft = CustomerDraft(customer="Epharma", partner="CloudTech Solutions")
    draft.onboarding_status        # OnboardingStatus.IN_PROGRESS
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import date
from enum import Enum

STATUS_FILTER_ALL = "all"


# ═════════════════════════════════════════════════════════════════════════════
# Enums
# ═════════════════════════════════════════════════════════════════════════════

class OnboardingStatus(str, Enum):
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    BLOCKED = "Blocked"


class JobStatus(str, Enum):
    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    BLOCKED = "Blocked"


class Environment(str, Enum):
    """Environment a completed customer was onboarded into."""
    MATILDA_OPTIMIZE = "matilda-optimize"
    RAPID_ASSESSMENTS = "rapid-assessments"
    MATILDA_OPTIMIZE_AU = "matilda-optimize.au"

    @property
    def label(self) -> str:
        return ENVIRONMENT_LABELS[self]


ENVIRONMENT_LABELS = {
    Environment.MATILDA_OPTIMIZE: "Matilda Optimize",
    Environment.RAPID_ASSESSMENTS: "Rapid Assessments",
    Environment.MATILDA_OPTIMIZE_AU: "Matilda Optimize AU",
}


class Role(str, Enum):
    SUPER_ADMIN = "super_admin"
    NORMAL_USER = "normal_user"

    @property
    def label(self) -> str:
        return "Super Admin" if self is Role.SUPER_ADMIN else "Normal User"


# ═════════════════════════════════════════════════════════════════════════════
# Customers
# ═════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class CustomerDraft:
    """Full field set of a customer prior to id assignment.

    Used as the input of both create and update; update replaces every
    field, so a draft always carries a value (or its default) for each one.
    """
    customer: str = ""
    partner: str = ""
    onboarding_status: OnboardingStatus = OnboardingStatus.IN_PROGRESS
    initial_requester: str = ""
    handed_over_to: str = ""
    opportunity: str = ""
    deep_discovery: bool = False
    accounts_count: int = 0
    source_cloud: str = "AWS"
    target_cloud: str = "AWS"
    onboarded_date: date | None = None
    discovery_completed_date: date | None = None
    cost_jobs: JobStatus = JobStatus.NOT_STARTED
    metrics_jobs: JobStatus = JobStatus.NOT_STARTED
    ml_jobs: JobStatus = JobStatus.NOT_STARTED
    recommendations_jobs: JobStatus = JobStatus.NOT_STARTED
    notes: str = ""
    onboarded_environment: Environment | None = None

    def field_values(self) -> dict:
        """Shallow name -> value mapping of the draft fields only."""
        return {f.name: getattr(self, f.name) for f in fields(CustomerDraft)}

    def to_dict(self) -> dict:
        env = self.onboarded_environment
        return {
            "customer": self.customer,
            "partner": self.partner,
            "onboarding_status": self.onboarding_status.value,
            "initial_requester": self.initial_requester,
            "handed_over_to": self.handed_over_to,
            "opportunity": self.opportunity,
            "deep_discovery": self.deep_discovery,
            "accounts_count": self.accounts_count,
            "source_cloud": self.source_cloud,
            "target_cloud": self.target_cloud,
            "onboarded_date": self.onboarded_date.isoformat() if self.onboarded_date else None,
            "discovery_completed_date": (
                self.discovery_completed_date.isoformat()
                if self.discovery_completed_date else None
            ),
            "cost_jobs": self.cost_jobs.value,
            "metrics_jobs": self.metrics_jobs.value,
            "ml_jobs": self.ml_jobs.value,
            "recommendations_jobs": self.recommendations_jobs.value,
            "notes": self.notes,
            "onboarded_environment": env.value if env else None,
            "onboarded_environment_label": env.label if env else None,
        }


@dataclass(frozen=True, kw_only=True)
class CustomerRecord(CustomerDraft):
    """A stored customer: the draft fields plus the store-assigned id."""
    id: str

    @classmethod
    def from_draft(cls, record_id: str, draft: CustomerDraft) -> CustomerRecord:
        return cls(id=record_id, **draft.field_values())

    def draft(self) -> CustomerDraft:
        return CustomerDraft(**self.field_values())

    def to_dict(self) -> dict:
        return {"id": self.id, **super().to_dict()}


# ═════════════════════════════════════════════════════════════════════════════
# Users
# ═════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class UserDraft:
    email: str
    name: str
    role: Role = Role.NORMAL_USER


@dataclass(frozen=True)
class UserRecord:
    id: str
    email: str
    name: str
    role: Role

    @property
    def is_super_admin(self) -> bool:
        return self.role is Role.SUPER_ADMIN

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "role": self.role.value,
            "role_label": self.role.label,
        }

    @classmethod
    def from_dict(cls, data: dict) -> UserRecord:
        """Rebuild a user from its ``to_dict`` form (session cache payload)."""
        return cls(
            id=str(data["id"]),
            email=data["email"],
            name=data.get("name", ""),
            role=Role(data["role"]),
        )
