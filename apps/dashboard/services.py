"""
Dashboard Services

Contains the business logic for the production scoreboard:
- Caller context lookup (admin vs. agent, agency association)
- Scope resolution (whole agency vs. self + downline)
- Production accrual: recurring payments expanded by billing cycle and
  intersected with the reporting window
- Leaderboard ranking and aggregate stats
"""
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from uuid import UUID

from apps.core.exceptions import DataStoreError
from apps.core.utils import add_months
from services.hierarchy_service import HierarchyService

from . import selectors

logger = logging.getLogger(__name__)

SCOPE_AGENCY = 'agency'
SCOPE_DOWNLINE = 'downline'
SCOPES = (SCOPE_AGENCY, SCOPE_DOWNLINE)

DEFAULT_BILLING_CYCLE = 'monthly'

# billing_cycle -> (payments per year, months between payments)
BILLING_CYCLES = {
    'monthly': (12, 1),
    'quarterly': (4, 3),
    'semi-annually': (2, 6),
    'annually': (1, 12),
}

# Upper bound on recurring payments generated for a single deal
MAX_PAYMENTS_PER_DEAL = 12

POSITIVE_IMPACT = 'positive'

CENT = Decimal('0.01')


@dataclass
class UserContext:
    """User context derived from authenticated request."""
    internal_user_id: UUID
    auth_user_id: UUID
    agency_id: UUID | None
    email: str
    is_admin: bool


def get_user_context_from_auth_id(auth_user_id: UUID) -> UserContext | None:
    """
    Get user context from auth_user_id.

    Args:
        auth_user_id: The Supabase auth user ID (from JWT sub claim)

    Returns:
        UserContext if found, None otherwise

    Raises:
        DataStoreError: If the users table cannot be read
    """
    from apps.core.models import User

    try:
        user = User.objects.filter(auth_user_id=auth_user_id).first()
    except Exception as e:
        logger.error(f'Error getting user context: {e}')
        raise DataStoreError('Failed to read user profile') from e

    if not user:
        return None

    return UserContext(
        internal_user_id=user.id,
        auth_user_id=user.auth_user_id,
        agency_id=user.agency_id,
        email=user.email or '',
        is_admin=user.is_administrator,
    )


# =============================================================================
# Production Accrual
# =============================================================================

def to_money(value) -> Decimal | None:
    """Parse a premium into a finite Decimal, or None if it is unusable."""
    if value is None:
        return None
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError, TypeError):
        return None
    if not amount.is_finite():
        return None
    return amount


def round_money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def get_payment_terms(annual_premium: Decimal, billing_cycle: str | None) -> tuple[Decimal, int]:
    """
    Get (payment amount, months between payments) for a billing cycle.

    Unrecognized or missing cycles are billed monthly.
    """
    cycle = (billing_cycle or DEFAULT_BILLING_CYCLE).strip().lower()
    payments_per_year, months_interval = BILLING_CYCLES.get(
        cycle, BILLING_CYCLES[DEFAULT_BILLING_CYCLE]
    )
    return annual_premium / payments_per_year, months_interval


def iter_payment_dates(
    effective_date: date,
    months_interval: int,
    start_date: date,
    end_date: date,
) -> Iterator[date]:
    """
    Yield the deal's scheduled payment dates that fall in [start_date, end_date].

    Candidates are effective_date + i * months_interval months for
    i = 0..MAX_PAYMENTS_PER_DEAL-1; generation stops at the first candidate
    past end_date.
    """
    for i in range(MAX_PAYMENTS_PER_DEAL):
        payment_date = add_months(effective_date, i * months_interval)
        if payment_date > end_date:
            break
        if payment_date >= start_date:
            yield payment_date


def is_in_force(deal: dict, status_impacts: dict[tuple, str]) -> bool:
    """A deal counts only if its (carrier, status) maps to a positive impact."""
    carrier_id = deal.get('carrier_id')
    raw_status = deal.get('status')
    if not carrier_id or not raw_status:
        return False
    return status_impacts.get((carrier_id, raw_status)) == POSITIVE_IMPACT


@dataclass
class AgentAccrual:
    """Recognized revenue for one agent within the reporting window."""
    agent_id: UUID | str
    name: str
    deal_count: int = 0
    daily_breakdown: dict[str, Decimal] = field(default_factory=dict)

    def add_payment(self, payment_date: date, amount: Decimal) -> None:
        day = payment_date.isoformat()
        self.daily_breakdown[day] = self.daily_breakdown.get(day, Decimal('0')) + amount

    @property
    def rounded_breakdown(self) -> dict[str, Decimal]:
        return {
            day: round_money(amount)
            for day, amount in sorted(self.daily_breakdown.items())
        }

    @property
    def total(self) -> Decimal:
        # Sum of the rounded daily values, so the two always agree
        return sum(self.rounded_breakdown.values(), Decimal('0.00'))

    def to_dict(self, rank: int) -> dict:
        return {
            'rank': rank,
            'agent_id': str(self.agent_id),
            'name': self.name,
            'total': self.total,
            'dailyBreakdown': self.rounded_breakdown,
            'dealCount': self.deal_count,
        }


def accrue_deal(
    accrual: AgentAccrual,
    deal: dict,
    start_date: date,
    end_date: date,
) -> bool:
    """
    Add a deal's in-window payments to an agent's accrual.

    Returns:
        True if the deal contributed at least one payment
    """
    annual_premium = to_money(deal.get('annual_premium'))
    if annual_premium is None or annual_premium <= 0:
        return False

    effective_date = deal.get('effective_date') or deal.get('policy_effective_date') or deal.get('submission_date')
    if effective_date is None:
        return False

    payment_amount, months_interval = get_payment_terms(annual_premium, deal.get('billing_cycle'))

    contributed = False
    for payment_date in iter_payment_dates(effective_date, months_interval, start_date, end_date):
        accrual.add_payment(payment_date, payment_amount)
        contributed = True

    if contributed:
        accrual.deal_count += 1
    return contributed


def compute_agent_accruals(
    agents: Iterable[dict],
    deals: Iterable[dict],
    status_impacts: dict[tuple, str],
    start_date: date,
    end_date: date,
    today: date,
) -> list[AgentAccrual]:
    """
    Compute each agent's recognized revenue for [start_date, end_date].

    Payments dated after `today` are never recognized, even when the window
    extends into the future.

    Args:
        agents: Roster rows ({'agent_id', 'name'}); deals of other agents are ignored
        deals: Deal rows (agent_id, carrier_id, status, annual_premium,
            billing_cycle, effective_date)
        status_impacts: (carrier_id, raw_status) -> impact
        start_date: Window start (inclusive)
        end_date: Window end (inclusive)
        today: Reference date capping the window

    Returns:
        Accruals with at least one contributing deal, sorted by total
        descending. The sort is stable, so ties keep roster order.
    """
    accruals = {
        agent['agent_id']: AgentAccrual(agent_id=agent['agent_id'], name=agent['name'])
        for agent in agents
    }

    capped_end = min(end_date, today)
    if start_date > capped_end:
        return []

    for deal in deals:
        accrual = accruals.get(deal.get('agent_id'))
        if accrual is None:
            continue
        if not is_in_force(deal, status_impacts):
            continue
        accrue_deal(accrual, deal, start_date, capped_end)

    contributing = [accrual for accrual in accruals.values() if accrual.deal_count > 0]
    return sorted(contributing, key=lambda accrual: accrual.total, reverse=True)


def build_scoreboard(
    accruals: list[AgentAccrual],
    start_date: date,
    end_date: date,
) -> dict:
    """
    Rank accruals and wrap them in the scoreboard response envelope.

    Returns:
        {
            'success': True,
            'data': {
                'leaderboard': [...],
                'stats': { totalProduction, totalDeals, activeAgents },
                'dateRange': { startDate, endDate }
            }
        }
    """
    leaderboard = [accrual.to_dict(rank) for rank, accrual in enumerate(accruals, start=1)]

    return {
        'success': True,
        'data': {
            'leaderboard': leaderboard,
            'stats': {
                'totalProduction': sum((row['total'] for row in leaderboard), Decimal('0.00')),
                'totalDeals': sum(row['dealCount'] for row in leaderboard),
                'activeAgents': len(leaderboard),
            },
            'dateRange': {
                'startDate': start_date.isoformat(),
                'endDate': end_date.isoformat(),
            },
        },
    }


# =============================================================================
# Scoreboard
# =============================================================================

def resolve_scope(user_ctx: UserContext, requested_scope: str | None) -> str:
    """
    Decide which agents the caller may see.

    Admins default to the whole agency and may narrow to their downline.
    Everyone else defaults to self + downline; asking for the agency scope
    is honored only when the agency enables scoreboard_agent_visibility.
    """
    if user_ctx.is_admin:
        return requested_scope or SCOPE_AGENCY

    if requested_scope != SCOPE_AGENCY:
        return SCOPE_DOWNLINE

    settings = selectors.get_agency_scoreboard_settings(user_ctx.agency_id)
    if settings and settings['scoreboard_agent_visibility']:
        return SCOPE_AGENCY

    logger.debug(f'Downgrading agency scope to downline for user {user_ctx.internal_user_id}')
    return SCOPE_DOWNLINE


def get_scoreboard_with_billing_cycle(
    user_ctx: UserContext,
    start_date: date,
    end_date: date,
    today: date,
    scope: str | None = None,
) -> dict:
    """
    Get scoreboard data with billing cycle payment calculation.

    For each in-force deal, payment dates are generated from the effective
    date based on billing_cycle:
    - monthly: every 1 month (annual / 12)
    - quarterly: every 3 months (annual / 4)
    - semi-annually: every 6 months (annual / 2)
    - annually: every 12 months (annual)

    Only payments falling within the date range (and not after `today`)
    are counted.

    Args:
        user_ctx: Caller context
        start_date: Start of the reporting window (inclusive)
        end_date: End of the reporting window (inclusive)
        today: Reference date for the future-payment cap
        scope: 'agency', 'downline' or None for the caller's default

    Raises:
        DataStoreError: If any read fails; no partial result is returned
    """
    resolved_scope = resolve_scope(user_ctx, scope)

    agent_ids = None
    if resolved_scope == SCOPE_DOWNLINE:
        try:
            agent_ids = HierarchyService.get_downline(
                user_ctx.internal_user_id,
                user_ctx.agency_id,
                include_self=True,
            )
        except Exception as e:
            logger.error(f'Error resolving downline for {user_ctx.internal_user_id}: {e}')
            raise DataStoreError('Failed to read agent hierarchy') from e

    agents = selectors.get_scoreboard_agents(user_ctx.agency_id, agent_ids)
    deals = selectors.get_deals_for_agents(
        user_ctx.agency_id,
        [agent['agent_id'] for agent in agents],
        start_date,
        end_date,
    )
    status_impacts = selectors.get_status_impacts(deals)

    accruals = compute_agent_accruals(agents, deals, status_impacts, start_date, end_date, today)

    logger.info(
        f'Scoreboard for agency {user_ctx.agency_id} ({resolved_scope}) '
        f'{start_date}..{end_date}: {len(deals)} deals, {len(accruals)} ranked agents'
    )

    return build_scoreboard(accruals, start_date, end_date)
