"""
Authentication Middleware for AgentSpace Backend

Handles JWT authentication and attaches user context to requests.
"""
import logging
import re
from collections.abc import Callable

from django.http import JsonResponse
from rest_framework import exceptions

from .authentication import SupabaseJWTAuthentication
from .exceptions import APIException

logger = logging.getLogger(__name__)


class SupabaseAuthMiddleware:
    """
    Middleware that authenticates requests using Supabase JWTs.

    This middleware:
    1. Skips authentication for public routes
    2. Validates JWT for protected routes
    3. Attaches AuthenticatedUser to request.user
    4. Returns 401 for unauthenticated requests to protected routes
    5. Returns 500 when the users table cannot be read
    """

    # Routes that don't require authentication
    PUBLIC_ROUTES: list[str] = [
        r'^/api/health/?$',
    ]

    def __init__(self, get_response: Callable):
        self.get_response = get_response
        self.authenticator = SupabaseJWTAuthentication()
        self._public_patterns = [re.compile(pattern) for pattern in self.PUBLIC_ROUTES]

    def __call__(self, request):
        if self._is_public_route(request.path):
            request.user = None
            return self.get_response(request)

        try:
            auth_result = self.authenticator.authenticate(request)
        except exceptions.AuthenticationFailed as e:
            logger.warning(f'Authentication failed: {e.detail}')
            return JsonResponse(
                {'success': False, 'error': str(e.detail)},
                status=401
            )
        except APIException as e:
            logger.error(f'Authentication lookup failed: {e.message}')
            return JsonResponse(
                {'success': False, 'error': e.message},
                status=e.status_code
            )

        if auth_result is None:
            # No credentials provided
            return JsonResponse(
                {'success': False, 'error': 'Authentication required'},
                status=401
            )

        user, token = auth_result
        request.user = user
        request.auth_token = token

        logger.debug(
            f'Authenticated user {user.id} (agency: {user.agency_id}) '
            f'accessing {request.path}'
        )

        return self.get_response(request)

    def _is_public_route(self, path: str) -> bool:
        """Check if the given path matches any public route pattern."""
        return any(pattern.match(path) for pattern in self._public_patterns)

