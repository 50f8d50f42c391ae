"""
Pytest Configuration for AgentSpace Scoreboard Tests

Key Features:
- Builds AuthenticatedUser instances and signed Supabase JWTs
- Provides API client fixtures
"""
import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest
from django.conf import settings
from rest_framework.test import APIClient, APIRequestFactory

from apps.core.authentication import AuthenticatedUser


# =============================================================================
# Authentication Helpers
# =============================================================================

def create_test_user(
    user_id=None,
    auth_user_id=None,
    agency_id=None,
    role='agent',
    is_admin=False,
    status='active',
    email='test@example.com',
    first_name='Test',
    last_name='User',
):
    """Create an AuthenticatedUser without touching the database."""
    return AuthenticatedUser(
        id=user_id or uuid.uuid4(),
        auth_user_id=auth_user_id or uuid.uuid4(),
        email=email,
        agency_id=agency_id if agency_id is not None else uuid.uuid4(),
        role=role,
        is_admin=is_admin,
        status=status,
        perm_level='admin' if is_admin else 'agent',
        first_name=first_name,
        last_name=last_name,
    )


def make_jwt(auth_user_id, expires_in: int = 3600, **claims) -> str:
    """Sign a Supabase-style access token for the given auth user."""
    now = datetime.now(timezone.utc)
    payload = {
        'sub': str(auth_user_id),
        'aud': 'authenticated',
        'iss': f'{settings.SUPABASE_URL}/auth/v1',
        'role': 'authenticated',
        'iat': now,
        'exp': now + timedelta(seconds=expires_in),
        **claims,
    }
    return jwt.encode(payload, settings.SUPABASE_JWT_SECRET, algorithm='HS256')


def bearer(auth_user_id, **kwargs) -> dict:
    """Authorization header kwargs for APIClient requests."""
    return {'HTTP_AUTHORIZATION': f'Bearer {make_jwt(auth_user_id, **kwargs)}'}


# =============================================================================
# API Client Fixtures
# =============================================================================

@pytest.fixture
def api_client():
    """Basic API client without authentication."""
    return APIClient()


@pytest.fixture
def api_factory():
    """Request factory for calling views directly."""
    return APIRequestFactory()

