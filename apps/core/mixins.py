"""
Core View Mixins

Provides standardized authentication and error responses
for the scoreboard API views.
"""
from uuid import UUID

from rest_framework.response import Response

from .authentication import AuthenticatedUser, get_user_context
from .exceptions import APIException as APIError
from .exceptions import AuthenticationError, ValidationError, error_response


class AuthenticatedAPIView:
    """
    Mixin providing standardized authentication and error handling.

    Usage:
        class MyView(AuthenticatedAPIView, APIView):
            def get(self, request):
                user = self.get_user(request)  # Raises if not authenticated
                # ... view logic
    """

    def get_user(self, request) -> AuthenticatedUser:
        """
        Get authenticated user or raise 401.

        Raises:
            AuthenticationError if not authenticated
        """
        user = get_user_context(request)
        if not user:
            raise AuthenticationError()
        return user

    def parse_uuid(self, value: str, field_name: str = "id") -> UUID:
        """
        Parse string to UUID or raise validation error.

        Raises:
            ValidationError if missing or invalid format
        """
        if not value:
            raise ValidationError(f"{field_name} is required")
        try:
            return UUID(value)
        except ValueError as err:
            raise ValidationError(f"Invalid {field_name} format") from err

    def error_response(self, error: APIError) -> Response:
        """Build standardized error response."""
        return error_response(error)
