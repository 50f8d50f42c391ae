"""
Dashboard Selectors

Read-only queries backing the production scoreboard:
- Scoreboard roster (active, non-client agents of an agency)
- Deals for a set of agents within the lookback window
- Status mapping impacts for the deals' (carrier, status) pairs
- Agency scoreboard settings

Every read failure is logged and re-raised as DataStoreError so the
caller can abort the whole request.
"""
import logging
from collections.abc import Iterable
from datetime import date
from uuid import UUID

from django.db.models.functions import Coalesce

from apps.core.exceptions import DataStoreError
from apps.core.models import Agency, Deal, StatusMapping, User
from apps.core.utils import add_months, format_full_name

logger = logging.getLogger(__name__)

# Recurring schedules are only expanded for deals effective within this many
# months before the window start.
DEAL_LOOKBACK_MONTHS = 12


def get_scoreboard_agents(
    agency_id: UUID,
    agent_ids: Iterable[UUID] | None = None,
) -> list[dict]:
    """
    Get the agents eligible to appear on the scoreboard.

    Args:
        agency_id: Agency to read from
        agent_ids: Optional restriction (self + downline for non-admins)

    Returns:
        List of {'agent_id', 'name'} dicts ordered by name, then id
    """
    try:
        qs = (
            User.objects
            .filter(agency_id=agency_id, is_active=True)
            .exclude(role='client')
        )
        if agent_ids is not None:
            qs = qs.filter(id__in=list(agent_ids))

        rows = qs.order_by('first_name', 'last_name', 'id').values('id', 'first_name', 'last_name')
        return [
            {
                'agent_id': row['id'],
                'name': format_full_name(row['first_name'], row['last_name']),
            }
            for row in rows
        ]
    except Exception as e:
        logger.error(f'Error reading scoreboard agents for agency {agency_id}: {e}')
        raise DataStoreError('Failed to read agents') from e


def get_deals_for_agents(
    agency_id: UUID,
    agent_ids: Iterable[UUID],
    start_date: date,
    end_date: date,
) -> list[dict]:
    """
    Get deals whose effective date falls in [start_date - 1 year, end_date].

    The effective date is policy_effective_date, falling back to
    submission_date when the policy has not been placed yet.

    Returns:
        List of deal dicts with agent_id, carrier_id, status,
        annual_premium, billing_cycle and effective_date
    """
    agent_ids = list(agent_ids)
    if not agent_ids:
        return []

    lookback_date = add_months(start_date, -DEAL_LOOKBACK_MONTHS)

    try:
        rows = (
            Deal.objects
            .filter(
                agency_id=agency_id,
                agent_id__in=agent_ids,
                annual_premium__isnull=False,
                annual_premium__gt=0,
            )
            .annotate(effective_date=Coalesce('policy_effective_date', 'submission_date'))
            .filter(
                effective_date__isnull=False,
                effective_date__gte=lookback_date,
                effective_date__lte=end_date,
            )
            .order_by('effective_date', 'id')
            .values(
                'id',
                'agent_id',
                'carrier_id',
                'status',
                'annual_premium',
                'billing_cycle',
                'effective_date',
            )
        )
        return list(rows)
    except Exception as e:
        logger.error(f'Error reading deals for scoreboard: {e}')
        raise DataStoreError('Failed to read deals') from e


def get_status_impacts(deals: Iterable[dict]) -> dict[tuple, str]:
    """
    Look up status mapping impacts for the deals' (carrier_id, status) pairs.

    Deals missing either field are not looked up.

    Returns:
        Dict keyed by (carrier_id, raw_status) with the mapping's impact
    """
    pairs = {
        (deal['carrier_id'], deal['status'])
        for deal in deals
        if deal.get('carrier_id') and deal.get('status')
    }
    if not pairs:
        return {}

    carrier_ids = {carrier_id for carrier_id, _ in pairs}
    statuses = {raw_status for _, raw_status in pairs}

    try:
        rows = (
            StatusMapping.objects
            .filter(carrier_id__in=carrier_ids, raw_status__in=statuses)
            .values_list('carrier_id', 'raw_status', 'impact')
        )
        return {
            (carrier_id, raw_status): impact
            for carrier_id, raw_status, impact in rows
            if (carrier_id, raw_status) in pairs
        }
    except Exception as e:
        logger.error(f'Error reading status mappings: {e}')
        raise DataStoreError('Failed to read status mappings') from e


def get_agency_scoreboard_settings(agency_id: UUID) -> dict | None:
    """
    Get an agency's scoreboard settings.

    Returns:
        {'default_scoreboard_start_date', 'scoreboard_agent_visibility'}
        or None if the agency does not exist
    """
    try:
        row = (
            Agency.objects
            .filter(id=agency_id)
            .values('default_scoreboard_start_date', 'scoreboard_agent_visibility')
            .first()
        )
    except Exception as e:
        logger.error(f'Error reading scoreboard settings for agency {agency_id}: {e}')
        raise DataStoreError('Failed to read agency settings') from e

    if row is None:
        return None

    return {
        'default_scoreboard_start_date': row['default_scoreboard_start_date'],
        'scoreboard_agent_visibility': bool(row['scoreboard_agent_visibility']),
    }
