"""
Utility functions for AgentSpace Backend

Common helpers used across selectors, services and views.
"""
import calendar
from datetime import date


def format_full_name(first_name: str | None, last_name: str | None) -> str:
    """
    Format first and last name into a full name string.

    Args:
        first_name: The first name (can be None)
        last_name: The last name (can be None)

    Returns:
        Formatted full name with whitespace trimmed
    """
    return f"{first_name or ''} {last_name or ''}".strip()


def add_months(value: date, months: int) -> date:
    """
    Shift a date by a whole number of months.

    The day is clamped to the last day of the target month, matching
    PostgreSQL's `date + interval 'n month'` (Jan 31 + 1 month = Feb 28/29).
    Negative values move backwards.
    """
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    _, days_in_month = calendar.monthrange(year, month)
    return date(year, month, min(value.day, days_in_month))
