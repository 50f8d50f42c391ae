"""
Custom Exception Handling for AgentSpace Backend

Provides consistent error response format across all API endpoints.
"""
import logging

from rest_framework import status
from rest_framework.response import Response

logger = logging.getLogger(__name__)


def custom_exception_handler(exc, context):
    """
    Custom exception handler that provides consistent error format.

    Error Response Format:
    {
        "success": false,
        "error": "Human-readable error message",
        "error_type": "ErrorType"
    }
    """
    if isinstance(exc, APIException):
        return error_response(exc)

    # Imported here: rest_framework.views loads DEFAULT_AUTHENTICATION_CLASSES,
    # which imports apps.core.authentication, which imports this module.
    from rest_framework.views import exception_handler

    # Call REST framework's default exception handler first
    response = exception_handler(exc, context)

    if response is not None:
        message = str(exc.detail) if hasattr(exc, 'detail') else str(exc)

        # Flatten DRF validation errors into one message
        if hasattr(exc, 'detail'):
            if isinstance(exc.detail, dict):
                messages = []
                for field, errors in exc.detail.items():
                    if isinstance(errors, list):
                        messages.append(f"{field}: {', '.join(str(e) for e in errors)}")
                    else:
                        messages.append(f"{field}: {errors}")
                message = '; '.join(messages)
            elif isinstance(exc.detail, list):
                message = ', '.join(str(e) for e in exc.detail)

        response.data = {
            'success': False,
            'error': message,
            'error_type': exc.__class__.__name__,
        }

    else:
        # Handle unexpected exceptions
        logger.exception(f'Unhandled exception: {exc}')

        response = Response(
            {
                'success': False,
                'error': 'An unexpected error occurred',
                'error_type': 'InternalServerError',
            },
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    return response


def error_response(exc: 'APIException') -> Response:
    """Render an APIException in the standard error envelope."""
    data = {
        'success': False,
        'error': exc.message,
        'error_type': exc.__class__.__name__,
    }
    if exc.details:
        data['details'] = exc.details
    return Response(data, status=exc.status_code)


class APIException(Exception):
    """
    Base exception class for API errors.

    Usage:
        raise APIException('Something went wrong', status_code=400)
    """
    def __init__(self, message: str, status_code: int = 400, details: dict | None = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class ValidationError(APIException):
    """Raised when request validation fails."""
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, status_code=400, details=details)


class AuthenticationError(APIException):
    """Raised when authentication fails."""
    def __init__(self, message: str = 'Authentication required'):
        super().__init__(message, status_code=401)


class PermissionDeniedError(APIException):
    """Raised when user lacks permission."""
    def __init__(self, message: str = 'Permission denied'):
        super().__init__(message, status_code=403)


class NotFoundError(APIException):
    """Raised when a resource is not found."""
    def __init__(self, message: str = 'Resource not found'):
        super().__init__(message, status_code=404)


class DataStoreError(APIException):
    """Raised when a read from the database fails."""
    def __init__(self, message: str = 'Failed to read from the data store'):
        super().__init__(message, status_code=500)
