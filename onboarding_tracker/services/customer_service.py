"""Customer service layer — business logic between the blueprints and the store.

Every public function takes the acting subject, checks its capability,
builds a complete draft from the request payload, applies the field
visibility policy and only then touches the store.

Provides:
- Payload → CustomerDraft parsing with field-level validation
- Customer list (search + status filter), detail, create, update, delete
- Delete-all for administrators
- Dashboard status counters
"""
import logging
from typing import Any

from onboarding_tracker.core.exceptions import ValidationError
from onboarding_tracker.core.records import (
    STATUS_FILTER_ALL,
    CustomerDraft,
    CustomerRecord,
    Environment,
    JobStatus,
    OnboardingStatus,
    UserRecord,
)
from onboarding_tracker.services import permission
from onboarding_tracker.services.field_policy import (
    REQUIRED_FORM_FIELDS,
    apply_field_policy,
    environment_options,
    requires_environment,
    visible_fields,
)
from onboarding_tracker.services.query_engine import filter_customers, summarize_statuses
from onboarding_tracker.services.record_store import RecordStore
from onboarding_tracker.utils.helpers import parse_date_input, parse_non_negative_int

logger = logging.getLogger(__name__)

# ── Field length limits (matching DB column definitions) ─────────────────

_FIELD_LIMITS: dict[str, int] = {
    "customer": 200,
    "partner": 200,
    "initial_requester": 200,
    "handed_over_to": 200,
    "opportunity": 100,
    "source_cloud": 50,
    "target_cloud": 50,
}

_TEXT_FIELDS = (
    "customer",
    "partner",
    "initial_requester",
    "handed_over_to",
    "opportunity",
    "source_cloud",
    "target_cloud",
    "notes",
)
_JOB_FIELDS = ("cost_jobs", "metrics_jobs", "ml_jobs", "recommendations_jobs")
_DATE_FIELDS = ("onboarded_date", "discovery_completed_date")

_DEFAULTS = CustomerDraft()


def _parse_enum(enum_cls, value, default):
    """Map a wire value onto ``enum_cls``; None/"" yields ``default``."""
    if value is None or value == "":
        return default
    try:
        return enum_cls(value)
    except ValueError:
        allowed = [member.value for member in enum_cls]
        raise ValueError(f"Invalid value '{value}'. Allowed: {allowed}") from None


def parse_status_filter(value: str | None) -> str:
    """Validate a ``status`` query value: "all" or one onboarding status."""
    if not value:
        return STATUS_FILTER_ALL
    if value == STATUS_FILTER_ALL:
        return value
    try:
        return OnboardingStatus(value).value
    except ValueError:
        allowed = [STATUS_FILTER_ALL] + [s.value for s in OnboardingStatus]
        raise ValidationError(
            f"Invalid status filter: '{value}'",
            details={"status": f"Allowed: {allowed}"},
        ) from None


def draft_from_payload(data: dict[str, Any]) -> CustomerDraft:
    """Build a complete draft from a JSON payload.

    Missing fields take the form defaults. All field errors are collected
    and reported together.

    Raises:
        ValidationError: With a ``details`` entry per offending field.
    """
    errors: dict[str, str] = {}
    values: dict[str, Any] = {}

    for name in _TEXT_FIELDS:
        raw = data.get(name)
        if raw is None:
            values[name] = getattr(_DEFAULTS, name)
            continue
        if not isinstance(raw, str):
            errors[name] = "Must be a string"
            continue
        value = raw if name == "notes" else raw.strip()
        limit = _FIELD_LIMITS.get(name)
        if limit and len(value) > limit:
            errors[name] = f"Exceeds maximum length of {limit} characters"
            continue
        values[name] = value

    for name in REQUIRED_FORM_FIELDS:
        if name not in errors and not values.get(name):
            errors[name] = "Required"

    try:
        values["onboarding_status"] = _parse_enum(
            OnboardingStatus, data.get("onboarding_status"), _DEFAULTS.onboarding_status,
        )
    except ValueError as exc:
        errors["onboarding_status"] = str(exc)

    for name in _JOB_FIELDS:
        try:
            values[name] = _parse_enum(JobStatus, data.get(name), getattr(_DEFAULTS, name))
        except ValueError as exc:
            errors[name] = str(exc)

    try:
        values["onboarded_environment"] = _parse_enum(
            Environment, data.get("onboarded_environment"), None,
        )
    except ValueError as exc:
        errors["onboarded_environment"] = str(exc)

    deep_discovery = data.get("deep_discovery", _DEFAULTS.deep_discovery)
    if isinstance(deep_discovery, bool):
        values["deep_discovery"] = deep_discovery
    else:
        errors["deep_discovery"] = "Must be true or false"

    try:
        values["accounts_count"] = parse_non_negative_int(data.get("accounts_count"))
    except ValueError as exc:
        errors["accounts_count"] = str(exc)

    for name in _DATE_FIELDS:
        try:
            values[name] = parse_date_input(data.get(name))
        except ValueError as exc:
            errors[name] = str(exc)

    if errors:
        raise ValidationError("Invalid customer data", details=errors)
    return CustomerDraft(**values)


def _prepare_draft(data: dict[str, Any]) -> CustomerDraft:
    return apply_field_policy(draft_from_payload(data))


# ── Queries ──────────────────────────────────────────────────────────────


def list_customers(
    store: RecordStore,
    subject: UserRecord | None,
    search_term: str = "",
    status_filter: str | None = None,
) -> dict:
    """Filtered customer list plus the "showing N of M" counters."""
    permission.check_capability(subject, permission.CUSTOMERS_VIEW)
    status_filter = parse_status_filter(status_filter)
    records = store.list()
    visible = filter_customers(records, search_term or "", status_filter)
    return {
        "items": [r.to_dict() for r in visible],
        "total": len(records),
        "showing": len(visible),
    }


def get_customer(store: RecordStore, subject: UserRecord | None, customer_id: str) -> CustomerRecord:
    permission.check_capability(subject, permission.CUSTOMERS_VIEW)
    return store.get(customer_id)


def customer_stats(store: RecordStore, subject: UserRecord | None) -> dict:
    permission.check_capability(subject, permission.CUSTOMERS_VIEW)
    return summarize_statuses(store.list())


def form_fields(status_value: str | None) -> dict:
    """Describe the customer form for a given onboarding status."""
    try:
        status = _parse_enum(OnboardingStatus, status_value, OnboardingStatus.IN_PROGRESS)
    except ValueError as exc:
        raise ValidationError(str(exc), details={"status": str(exc)}) from None
    return {
        "status": status.value,
        "fields": visible_fields(status),
        "required": list(REQUIRED_FORM_FIELDS),
        "requires_environment": requires_environment(status),
        "environments": environment_options() if requires_environment(status) else [],
    }


# ── Mutations ────────────────────────────────────────────────────────────


def create_customer(store: RecordStore, subject: UserRecord | None, data: dict[str, Any]) -> CustomerRecord:
    permission.check_capability(subject, permission.CUSTOMERS_CREATE)
    record = store.create(_prepare_draft(data))
    logger.info("User %s added customer %s", subject.id, record.id,
                extra={"user_id": subject.id, "customer_id": record.id})
    return record


def update_customer(
    store: RecordStore,
    subject: UserRecord | None,
    customer_id: str,
    data: dict[str, Any],
) -> CustomerRecord:
    """Replace every field of an existing customer."""
    permission.check_capability(subject, permission.CUSTOMERS_UPDATE)
    return store.update(customer_id, _prepare_draft(data))


def delete_customer(store: RecordStore, subject: UserRecord | None, customer_id: str) -> None:
    permission.check_capability(subject, permission.CUSTOMERS_DELETE)
    store.delete(customer_id)


def delete_all_customers(store: RecordStore, subject: UserRecord | None) -> int:
    permission.check_capability(subject, permission.CUSTOMERS_DELETE_ALL)
    return store.delete_all()
