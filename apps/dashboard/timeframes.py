"""
Scoreboard date ranges.

Resolves the reporting window from explicit query dates or a named
timeframe preset. Weeks run Sunday to Saturday.
"""
import calendar
from collections.abc import Mapping
from datetime import date, datetime, timedelta

from apps.core.exceptions import ValidationError
from apps.core.utils import add_months

DATE_FORMAT = '%Y-%m-%d'

DEFAULT_TIMEFRAME = 'this_week'

# Trailing windows ending today, by length in days
TRAILING_DAYS = {
    'past_7_days': 7,
    'past_14_days': 14,
    'past_30_days': 30,
    'past_90_days': 90,
    'past_180_days': 180,
}

TIMEFRAMES = (
    'this_week',
    'last_week',
    *TRAILING_DAYS,
    'this_month',
    'last_month',
    'past_12_months',
    'ytd',
)


def parse_date(date_str: str | None) -> date | None:
    """Parse date string in YYYY-MM-DD format."""
    if not date_str:
        return None
    try:
        return datetime.strptime(date_str, DATE_FORMAT).date()
    except ValueError:
        return None


def week_bounds(today: date) -> tuple[date, date]:
    """
    Sunday..Saturday week containing `today`.

    The scoreboard API defaults to Sunday-start weeks, and this_week /
    last_week follow the same rule so the default and the preset agree.
    The web scoreboard's own week toggle computes Monday..Sunday on the
    client and always sends explicit dates, so it is unaffected. Keep
    Sunday here.
    """
    days_since_sunday = (today.weekday() + 1) % 7
    start = today - timedelta(days=days_since_sunday)
    return start, start + timedelta(days=6)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    _, days_in_month = calendar.monthrange(year, month)
    return date(year, month, 1), date(year, month, days_in_month)


def timeframe_range(timeframe: str, today: date) -> tuple[date, date]:
    """
    Resolve a named timeframe relative to `today`.

    Raises:
        ValidationError: If the timeframe is unknown
    """
    if timeframe == 'this_week':
        return week_bounds(today)

    if timeframe == 'last_week':
        this_week_start, _ = week_bounds(today)
        return this_week_start - timedelta(days=7), this_week_start - timedelta(days=1)

    if timeframe in TRAILING_DAYS:
        return today - timedelta(days=TRAILING_DAYS[timeframe] - 1), today

    if timeframe == 'this_month':
        return month_bounds(today.year, today.month)

    if timeframe == 'last_month':
        previous = add_months(today.replace(day=1), -1)
        return month_bounds(previous.year, previous.month)

    if timeframe == 'past_12_months':
        return add_months(today, -12), today

    if timeframe == 'ytd':
        return date(today.year, 1, 1), today

    raise ValidationError(
        f'Invalid timeframe. Use one of: {", ".join(TIMEFRAMES)}'
    )


def resolve_date_range(params: Mapping, today: date) -> tuple[date, date]:
    """
    Resolve the reporting window from request query params.

    Accepts start_date/end_date (or startDate/endDate). When both are
    omitted, the `timeframe` preset is used, defaulting to the current
    Sunday..Saturday week.

    Raises:
        ValidationError: On a missing bound, bad format, unknown
            timeframe, or start after end
    """
    start_str = params.get('start_date') or params.get('startDate')
    end_str = params.get('end_date') or params.get('endDate')

    if not start_str and not end_str:
        return timeframe_range(params.get('timeframe') or DEFAULT_TIMEFRAME, today)

    if not start_str or not end_str:
        raise ValidationError('start_date and end_date must be provided together')

    start_date = parse_date(start_str)
    end_date = parse_date(end_str)

    if not start_date or not end_date:
        raise ValidationError('Invalid date format. Use YYYY-MM-DD')

    if start_date > end_date:
        raise ValidationError('start_date must be on or before end_date')

    return start_date, end_date
