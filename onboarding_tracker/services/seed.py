"""
Demo data: six customers in mixed onboarding states and two accounts.

Loaded into an empty store at startup when ``SEED_DEMO_DATA`` is on, and
by ``flask seed-demo``.
"""

import logging
from datetime import date

from onboarding_tracker.core.records import (
    CustomerDraft,
    Environment,
    JobStatus,
    OnboardingStatus,
    Role,
    UserDraft,
)
from onboarding_tracker.services.record_store import RecordStore

logger = logging.getLogger(__name__)

_IP = OnboardingStatus.IN_PROGRESS
_DONE = OnboardingStatus.COMPLETED
_BLOCKED = OnboardingStatus.BLOCKED

DEMO_CUSTOMERS = [
    CustomerDraft(
        customer="Academy of General Dentistry",
        partner="TechPartner A",
        onboarding_status=_IP,
        initial_requester="John Smith",
        handed_over_to="Sarah Johnson",
        opportunity="OPP-2024-001",
        deep_discovery=True,
        accounts_count=5,
        source_cloud="AWS",
        target_cloud="Azure",
        discovery_completed_date=date(2024, 1, 15),
        cost_jobs=JobStatus.IN_PROGRESS,
        metrics_jobs=JobStatus.COMPLETED,
        notes="Initial setup in progress",
    ),
    CustomerDraft(
        customer="Epharma",
        partner="CloudTech Solutions",
        onboarding_status=_DONE,
        initial_requester="Fabio",
        handed_over_to="Chida",
        opportunity="OPP-2024-002",
        deep_discovery=True,
        accounts_count=12,
        source_cloud="GCP",
        target_cloud="AWS",
        onboarded_date=date(2025, 7, 11),
        discovery_completed_date=date(2024, 2, 20),
        cost_jobs=JobStatus.COMPLETED,
        metrics_jobs=JobStatus.COMPLETED,
        ml_jobs=JobStatus.COMPLETED,
        recommendations_jobs=JobStatus.IN_PROGRESS,
        notes="Informed Chida for final handover",
        onboarded_environment=Environment.MATILDA_OPTIMIZE,
    ),
    CustomerDraft(
        customer="BCDR AerieHub",
        partner="DataFlow Inc",
        onboarding_status=_BLOCKED,
        initial_requester="Mike Wilson",
        handed_over_to="Alex Chen",
        opportunity="OPP-2024-003",
        deep_discovery=False,
        accounts_count=3,
        source_cloud="Azure",
        target_cloud="GCP",
        cost_jobs=JobStatus.BLOCKED,
        notes="Waiting for security clearance",
    ),
    CustomerDraft(
        customer="Cogna",
        partner="InnovateTech",
        onboarding_status=_DONE,
        initial_requester="Lisa Brown",
        handed_over_to="David Kim",
        opportunity="OPP-2024-004",
        deep_discovery=True,
        accounts_count=8,
        source_cloud="AWS",
        target_cloud="Azure",
        onboarded_date=date(2024, 12, 15),
        discovery_completed_date=date(2024, 3, 10),
        cost_jobs=JobStatus.COMPLETED,
        metrics_jobs=JobStatus.COMPLETED,
        ml_jobs=JobStatus.COMPLETED,
        recommendations_jobs=JobStatus.COMPLETED,
        notes="Migration completed successfully",
        onboarded_environment=Environment.RAPID_ASSESSMENTS,
    ),
    CustomerDraft(
        customer="Global Finance Corp",
        partner="FinTech Solutions",
        onboarding_status=_IP,
        initial_requester="Michael Chen",
        handed_over_to="Emma Wilson",
        opportunity="OPP-2024-005",
        deep_discovery=True,
        accounts_count=15,
        source_cloud="AWS",
        target_cloud="Azure",
        discovery_completed_date=date(2024, 3, 25),
        cost_jobs=JobStatus.IN_PROGRESS,
        metrics_jobs=JobStatus.IN_PROGRESS,
        notes="Large enterprise migration in progress",
    ),
    CustomerDraft(
        customer="Healthcare Plus",
        partner="MedTech Partners",
        onboarding_status=_DONE,
        initial_requester="Dr. Sarah Lee",
        handed_over_to="James Rodriguez",
        opportunity="OPP-2024-006",
        deep_discovery=True,
        accounts_count=7,
        source_cloud="GCP",
        target_cloud="AWS",
        onboarded_date=date(2024, 11, 20),
        discovery_completed_date=date(2024, 2, 10),
        cost_jobs=JobStatus.COMPLETED,
        metrics_jobs=JobStatus.COMPLETED,
        ml_jobs=JobStatus.COMPLETED,
        recommendations_jobs=JobStatus.COMPLETED,
        notes="Healthcare compliance requirements met",
        onboarded_environment=Environment.MATILDA_OPTIMIZE_AU,
    ),
]

DEMO_USERS = [
    UserDraft(email="admin@matildacloud.com", name="Super Admin", role=Role.SUPER_ADMIN),
    UserDraft(email="user@matildacloud.com", name="Normal User", role=Role.NORMAL_USER),
]


def seed_demo_data(store: RecordStore, reset: bool = False) -> dict:
    """Load the demo customers and users.

    Each collection is only filled when empty, unless ``reset`` wipes the
    customers first. Returns how many rows of each kind were added.
    """
    if reset:
        store.delete_all()

    added = {"customers": 0, "users": 0}
    if store.count() == 0:
        for draft in DEMO_CUSTOMERS:
            store.create(draft)
        added["customers"] = len(DEMO_CUSTOMERS)
    if not store.list_users():
        for draft in DEMO_USERS:
            store.create_user(draft)
        added["users"] = len(DEMO_USERS)

    logger.info("Seeded demo data: %d customers, %d users",
                added["customers"], added["users"])
    return added
