"""
Integration Test Fixtures

Provides real database fixtures using Factory Boy.
These fixtures create actual database records for true integration testing.

Hierarchy:
    admin_user
      └── agent_user
            └── downline_agent
    other_agent (no upline)
"""
from datetime import date
from decimal import Decimal

import pytest

from tests.factories import (
    AgencyFactory,
    CarrierFactory,
    DealFactory,
    StatusMappingFactory,
    UserFactory,
)

# Fixed "today" for every scoreboard request: Wednesday 2024-03-20.
# Its Sunday..Saturday week is 2024-03-17..2024-03-23.
TODAY = date(2024, 3, 20)


# =============================================================================
# Agency & User Fixtures
# =============================================================================


@pytest.fixture
def agency(db):
    """Create a test agency."""
    return AgencyFactory(name='Test Insurance Agency')


@pytest.fixture
def other_agency(db):
    """Create a second agency for isolation checks."""
    return AgencyFactory(name='Other Agency')


@pytest.fixture
def admin_user(agency):
    """Create an admin user for the agency."""
    return UserFactory(
        agency=agency,
        admin=True,
        first_name='Admin',
        last_name='User',
    )


@pytest.fixture
def agent_user(agency, admin_user):
    """Create a regular agent under the admin."""
    return UserFactory(
        agency=agency,
        upline=admin_user,
        first_name='Agent',
        last_name='Smith',
    )


@pytest.fixture
def downline_agent(agency, agent_user):
    """Create an agent who reports to agent_user (downline)."""
    return UserFactory(
        agency=agency,
        upline=agent_user,
        first_name='Downline',
        last_name='Jones',
    )


@pytest.fixture
def other_agent(agency):
    """Create an agent outside agent_user's downline."""
    return UserFactory(
        agency=agency,
        first_name='Other',
        last_name='Agent',
    )


@pytest.fixture
def unassigned_user(db):
    """Create a user with no agency."""
    return UserFactory(agency=None, first_name='No', last_name='Agency')


# =============================================================================
# Carrier & Status Mapping Fixtures
# =============================================================================


@pytest.fixture
def test_carrier(db):
    """Create a test carrier."""
    return CarrierFactory(name='Test Life Insurance', code='TLI')


@pytest.fixture
def status_mappings(test_carrier):
    """Active counts toward production; Lapsed and Pending do not."""
    return [
        StatusMappingFactory(carrier=test_carrier, raw_status='Active', impact='positive'),
        StatusMappingFactory(carrier=test_carrier, negative=True),
        StatusMappingFactory(carrier=test_carrier, neutral=True),
    ]


# =============================================================================
# Deal Helpers
# =============================================================================


@pytest.fixture
def make_deal(agency, test_carrier, status_mappings):
    """Build an in-force deal for an agent; override any field via kwargs."""
    def _make_deal(agent, annual_premium, effective_date, **kwargs):
        defaults = {
            'agency': agency,
            'agent': agent,
            'carrier': test_carrier,
            'status': 'Active',
            'billing_cycle': 'monthly',
            'annual_premium': Decimal(annual_premium),
            'policy_effective_date': effective_date,
            'submission_date': effective_date,
        }
        defaults.update(kwargs)
        return DealFactory(**defaults)
    return _make_deal
