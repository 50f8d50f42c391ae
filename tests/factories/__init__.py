"""
Factory Boy Factories for AgentSpace Models

Import all factories here for easy access in tests.
"""
from tests.factories.core import (
    AgencyFactory,
    CarrierFactory,
    UserFactory,
)
from tests.factories.deals import (
    DealFactory,
    StatusMappingFactory,
)

__all__ = [
    # Core
    'AgencyFactory',
    'UserFactory',
    'CarrierFactory',
    # Deals
    'DealFactory',
    'StatusMappingFactory',
]
