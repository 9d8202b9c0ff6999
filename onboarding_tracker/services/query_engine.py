"""
Query engine — search and status filtering over customer snapshots.

Pure functions: they read the records they are given, never the store,
and never mutate their input. Output keeps the input order.

Usage:
    from onboarding_tracker.services.query_engine import filter_customers

    visible = filter_customers(store.list(), "epharma", "all")
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from onboarding_tracker.core.records import (
    STATUS_FILTER_ALL,
    CustomerRecord,
    OnboardingStatus,
)

# Fields the free-text search looks at
SEARCH_FIELDS = ("customer", "partner", "initial_requester")


def matches_search(record: CustomerRecord, search_term: str) -> bool:
    """Case-insensitive substring match on any of the search fields."""
    if not search_term:
        return True
    needle = search_term.lower()
    return any(needle in (getattr(record, name) or "").lower() for name in SEARCH_FIELDS)


def matches_status(record: CustomerRecord, status_filter: str) -> bool:
    if status_filter == STATUS_FILTER_ALL:
        return True
    return record.onboarding_status.value == status_filter


def filter_customers(
    records: Iterable[CustomerRecord],
    search_term: str = "",
    status_filter: str = STATUS_FILTER_ALL,
) -> list[CustomerRecord]:
    """Return the records matching both the search term and the status filter."""
    return [
        r for r in records
        if matches_search(r, search_term) and matches_status(r, status_filter)
    ]


def summarize_statuses(records: Sequence[CustomerRecord]) -> dict:
    """Dashboard counters: total plus one count per onboarding status."""
    counts = {status: 0 for status in OnboardingStatus}
    for r in records:
        counts[r.onboarding_status] += 1
    return {
        "total": len(records),
        "completed": counts[OnboardingStatus.COMPLETED],
        "in_progress": counts[OnboardingStatus.IN_PROGRESS],
        "blocked": counts[OnboardingStatus.BLOCKED],
    }


def status_percentages(summary: dict) -> dict:
    """Share of the total per status, rounded half up to whole percent (0 when empty)."""
    total = summary["total"]
    return {
        key: math.floor(summary[key] / total * 100 + 0.5) if total else 0
        for key in ("completed", "in_progress", "blocked")
    }
