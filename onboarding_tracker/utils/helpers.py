"""Shared parsing helpers for request payloads."""
from datetime import date, datetime

# Largest value an INTEGER column holds
MAX_INT_VALUE = 2**63 - 1


def parse_date_input(value):
    """Parse a date string, raising ValueError on bad input.

    Empty input yields None. Supports: YYYY-MM-DD, YYYY-MM-DDTHH:MM:SS,
    DD.MM.YYYY and date objects.
    """
    if not value:
        return None
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError("Invalid date format. Use YYYY-MM-DD or DD.MM.YYYY.")
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        pass
    try:
        return datetime.strptime(value, "%d.%m.%Y").date()
    except ValueError as exc:
        raise ValueError(
            "Invalid date format. Use YYYY-MM-DD or DD.MM.YYYY."
        ) from exc


def parse_non_negative_int(value):
    """Parse a count from JSON (int or digit string); empty input yields 0."""
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        raise ValueError("Expected a whole number")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if not isinstance(value, int):
        raise ValueError("Expected a whole number")
    if value < 0:
        raise ValueError("Must not be negative")
    if value > MAX_INT_VALUE:
        raise ValueError(f"Exceeds maximum of {MAX_INT_VALUE}")
    return value
