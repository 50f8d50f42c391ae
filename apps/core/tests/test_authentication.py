"""
Tests for Supabase JWT authentication.
"""
import pytest
from django.db import DatabaseError
from rest_framework import exceptions
from rest_framework.test import APIRequestFactory

from apps.core.authentication import (
    AuthenticatedUser,
    SupabaseJWTAuthentication,
    get_user_context,
)
from apps.core.exceptions import DataStoreError
from apps.core.models import User
from tests.conftest import create_test_user, make_jwt
from tests.factories import UserFactory

factory = APIRequestFactory()


def request_with(header=None):
    extra = {'HTTP_AUTHORIZATION': header} if header is not None else {}
    return factory.get('/api/dashboard/scoreboard', **extra)


class TestSupabaseJWTAuthentication:

    def test_no_header_returns_none(self):
        assert SupabaseJWTAuthentication().authenticate(request_with()) is None

    def test_non_bearer_header_returns_none(self):
        assert SupabaseJWTAuthentication().authenticate(request_with('Basic abc')) is None

    @pytest.mark.django_db
    def test_valid_token(self):
        user = UserFactory(admin=True, first_name='Ada')
        token = make_jwt(user.auth_user_id)

        authenticated, raw = SupabaseJWTAuthentication().authenticate(request_with(f'Bearer {token}'))

        assert raw == token
        assert isinstance(authenticated, AuthenticatedUser)
        assert authenticated.id == user.id
        assert authenticated.agency_id == user.agency_id
        assert authenticated.is_administrator is True
        assert authenticated.first_name == 'Ada'

    @pytest.mark.django_db
    def test_unknown_user_gets_token_only_identity(self):
        auth_user_id = '00000000-0000-0000-0000-000000000000'
        token = make_jwt(auth_user_id, email='new@example.com')

        authenticated, _ = SupabaseJWTAuthentication().authenticate(request_with(f'Bearer {token}'))

        assert authenticated.has_profile is False
        assert authenticated.id is None
        assert authenticated.agency_id is None
        assert str(authenticated.auth_user_id) == auth_user_id
        assert authenticated.email == 'new@example.com'

    def test_user_lookup_failure_raises(self, mocker):
        mocker.patch.object(User.objects, 'filter', side_effect=DatabaseError('connection reset'))
        token = make_jwt('00000000-0000-0000-0000-000000000000')

        with pytest.raises(DataStoreError):
            SupabaseJWTAuthentication().authenticate(request_with(f'Bearer {token}'))

    @pytest.mark.parametrize('claims', [
        {'expires_in': -60},
        {'aud': 'anon'},
        {'iss': 'https://elsewhere.example.com/auth/v1'},
    ])
    def test_rejected_tokens(self, claims):
        token = make_jwt('00000000-0000-0000-0000-000000000000', **claims)

        with pytest.raises(exceptions.AuthenticationFailed):
            SupabaseJWTAuthentication().authenticate(request_with(f'Bearer {token}'))

    def test_non_uuid_subject_fails(self):
        token = make_jwt('service-account')

        with pytest.raises(exceptions.AuthenticationFailed):
            SupabaseJWTAuthentication().authenticate(request_with(f'Bearer {token}'))

    def test_wrong_secret(self, settings):
        token = make_jwt('00000000-0000-0000-0000-000000000000')
        settings.SUPABASE_JWT_SECRET = 'a-different-secret-used-for-this-test'

        with pytest.raises(exceptions.AuthenticationFailed):
            SupabaseJWTAuthentication().authenticate(request_with(f'Bearer {token}'))

    def test_authenticate_header(self):
        assert SupabaseJWTAuthentication().authenticate_header(request_with()) == 'Bearer realm="api"'


class TestAuthenticatedUser:

    @pytest.mark.parametrize('kwargs, expected', [
        ({'is_admin': True}, True),
        ({'role': 'admin'}, True),
        ({}, False),
    ])
    def test_is_administrator(self, kwargs, expected):
        assert create_test_user(**kwargs).is_administrator is expected

    def test_is_active(self):
        assert create_test_user().is_active is True
        assert create_test_user(status='inactive').is_active is False


def test_get_user_context():
    user = create_test_user()
    request = request_with()

    request.user = user
    assert get_user_context(request) is user

    request.user = None
    assert get_user_context(request) is None
