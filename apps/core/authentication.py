"""
Supabase JWT Authentication for Django REST Framework

Validates JWTs issued by Supabase Auth and attaches user context to requests.
"""
import logging
from dataclasses import dataclass
from uuid import UUID

import jwt
from django.conf import settings
from rest_framework import authentication, exceptions

from .exceptions import DataStoreError

logger = logging.getLogger(__name__)


@dataclass
class AuthenticatedUser:
    """
    Represents an authenticated user from Supabase.

    This is NOT a Django User model - it's a lightweight container
    for user context derived from the JWT and users table.
    """
    id: UUID | None               # users.id; None when the token has no profile row
    auth_user_id: UUID            # auth.users.id (Supabase auth user ID)
    email: str
    agency_id: UUID | None
    role: str                     # 'admin', 'agent', 'client'
    is_admin: bool
    status: str                   # 'pre-invite', 'invited', 'onboarding', 'active', 'inactive'
    perm_level: str | None     # Permission level within agency
    first_name: str | None = None
    last_name: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return True

    @property
    def has_profile(self) -> bool:
        return self.id is not None

    @property
    def is_active(self) -> bool:
        return self.status == 'active'

    @property
    def is_administrator(self) -> bool:
        """Check if user has administrator privileges."""
        return self.is_admin or self.role == 'admin' or self.perm_level == 'admin'


class SupabaseJWTAuthentication(authentication.BaseAuthentication):
    """
    Authenticates requests using Supabase JWTs.

    Flow:
    1. Extract Bearer token from Authorization header
    2. Decode and validate JWT using Supabase JWT secret
    3. Look up user in public.users by auth_user_id (sub claim)
    4. Return AuthenticatedUser with full context, or a token-only
       identity (id=None) when no profile row exists
    """

    def authenticate(self, request):
        """
        Authenticate the request and return (user, token) or None.

        Returns:
            tuple: (AuthenticatedUser, token) if authenticated
            None: If no authentication credentials provided

        Raises:
            AuthenticationFailed: If credentials are invalid
            DataStoreError: If the users table cannot be read
        """
        auth_header = request.META.get('HTTP_AUTHORIZATION', '')

        if not auth_header.startswith('Bearer '):
            return None

        token = auth_header[7:]  # Remove 'Bearer ' prefix

        if not token:
            return None

        payload = self._decode_jwt(token)
        if not payload:
            raise exceptions.AuthenticationFailed('Invalid or expired token')

        user = self._get_user_from_payload(payload)
        if not user:
            raise exceptions.AuthenticationFailed('Invalid token subject')

        return (user, token)

    def authenticate_header(self, request):
        """
        Return the WWW-Authenticate header value for 401 responses.
        """
        return 'Bearer realm="api"'

    def _decode_jwt(self, token: str) -> dict | None:
        """
        Decode and validate a Supabase JWT.

        Returns:
            dict: The decoded payload if valid
            None: If token is invalid or expired
        """
        jwt_secret = getattr(settings, 'SUPABASE_JWT_SECRET', None)

        if not jwt_secret:
            logger.error('SUPABASE_JWT_SECRET not configured')
            return None

        supabase_url = getattr(settings, 'SUPABASE_URL', '')
        expected_issuer = f'{supabase_url}/auth/v1' if supabase_url else None

        decode_kwargs = {
            'jwt': token,
            'key': jwt_secret,
            'algorithms': ['HS256'],
            'audience': 'authenticated',
            'options': {
                'verify_exp': True,
                'verify_aud': True,
                'verify_iss': bool(expected_issuer),
            },
        }
        if expected_issuer:
            decode_kwargs['issuer'] = expected_issuer

        try:
            return jwt.decode(**decode_kwargs)
        except jwt.ExpiredSignatureError:
            logger.debug('JWT has expired')
            return None
        except jwt.InvalidAudienceError:
            logger.debug('JWT has invalid audience')
            return None
        except jwt.InvalidTokenError as e:
            logger.debug(f'JWT validation failed: {e}')
            return None

    def _get_user_from_payload(self, payload: dict) -> AuthenticatedUser | None:
        """
        Look up user in public.users by auth_user_id from JWT sub claim.

        Returns None only when the token has no usable sub claim.
        """
        from apps.core.models import User

        auth_user_id = payload.get('sub')
        if not auth_user_id:
            logger.warning('JWT missing sub claim')
            return None

        try:
            auth_user_id = UUID(str(auth_user_id))
        except ValueError:
            logger.warning(f'JWT sub claim is not a UUID: {auth_user_id}')
            return None

        try:
            user = User.objects.filter(auth_user_id=auth_user_id).first()
        except Exception as e:
            logger.error(f'Database error looking up user: {e}')
            raise DataStoreError('Failed to read user profile') from e

        if not user:
            logger.warning(f'No user found for auth_user_id: {auth_user_id}')
            return AuthenticatedUser(
                id=None,
                auth_user_id=auth_user_id,
                email=payload.get('email') or '',
                agency_id=None,
                role='agent',
                is_admin=False,
                status='',
                perm_level=None,
            )

        return AuthenticatedUser(
            id=user.id,
            auth_user_id=user.auth_user_id,
            email=user.email or '',
            agency_id=user.agency_id,
            role=user.role or 'agent',
            is_admin=user.is_admin or False,
            status=user.status or 'active',
            perm_level=user.perm_level,
            first_name=user.first_name,
            last_name=user.last_name,
        )


def get_user_context(request) -> AuthenticatedUser | None:
    """
    Utility function to get authenticated user from request.

    Use this in views that need user context.

    Args:
        request: Django request object

    Returns:
        AuthenticatedUser if authenticated, None otherwise
    """
    user = getattr(request, 'user', None)
    if isinstance(user, AuthenticatedUser):
        return user
    return None
