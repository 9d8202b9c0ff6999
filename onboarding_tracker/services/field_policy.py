"""
Field visibility policy for the customer form.

The onboarded-environment field only applies once onboarding is
Completed. Any other status hides the field, and a draft saved in such a
status has its environment cleared before it reaches the store.
"""

from dataclasses import replace

from onboarding_tracker.core.records import CustomerDraft, Environment, OnboardingStatus

ENVIRONMENT_FIELD = "onboarded_environment"

# Form fields in display order, always shown
BASE_FORM_FIELDS = [
    "customer",
    "partner",
    "onboarding_status",
    "opportunity",
    "initial_requester",
    "handed_over_to",
    "accounts_count",
    "deep_discovery",
    "source_cloud",
    "target_cloud",
    "onboarded_date",
    "discovery_completed_date",
    "cost_jobs",
    "metrics_jobs",
    "ml_jobs",
    "recommendations_jobs",
    "notes",
]

REQUIRED_FORM_FIELDS = ("customer", "partner")


def requires_environment(status: OnboardingStatus) -> bool:
    return status is OnboardingStatus.COMPLETED


def visible_fields(status: OnboardingStatus) -> list[str]:
    """Form fields shown for a customer in ``status``."""
    if requires_environment(status):
        return BASE_FORM_FIELDS + [ENVIRONMENT_FIELD]
    return list(BASE_FORM_FIELDS)


def apply_field_policy(draft: CustomerDraft) -> CustomerDraft:
    """Clear the environment of a draft whose status does not allow it."""
    if requires_environment(draft.onboarding_status) or draft.onboarded_environment is None:
        return draft
    return replace(draft, onboarded_environment=None)


def environment_options() -> list[dict]:
    return [{"value": env.value, "label": env.label} for env in Environment]
