"""
Agency Settings API Views

Endpoints:
- GET /api/agencies/{id}/scoreboard-settings - Get agency scoreboard settings
"""
import logging

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.exceptions import NotFoundError, PermissionDeniedError
from apps.core.mixins import AuthenticatedAPIView
from apps.dashboard.selectors import get_agency_scoreboard_settings

logger = logging.getLogger(__name__)


class AgencyScoreboardSettingsView(AuthenticatedAPIView, APIView):
    """
    GET /api/agencies/{agency_id}/scoreboard-settings - Get agency scoreboard settings

    Response (200):
        {
            "default_scoreboard_start_date": "2024-01-01" | null,
            "scoreboard_agent_visibility": false
        }
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, agency_id: str):
        user = self.get_user(request)
        if not user.has_profile:
            return self.error_response(NotFoundError('User not found'))

        agency_uuid = self.parse_uuid(agency_id, 'agency_id')

        # Verify user belongs to this agency
        if user.agency_id != agency_uuid:
            return self.error_response(
                PermissionDeniedError('You can only access your own agency settings')
            )

        try:
            settings = get_agency_scoreboard_settings(agency_uuid)
        except Exception as e:
            logger.error(f'Error getting agency scoreboard settings: {e}')
            return Response(
                {'success': False, 'error': 'Failed to get scoreboard settings'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        if settings is None:
            return self.error_response(NotFoundError('Agency not found'))

        start_date = settings['default_scoreboard_start_date']
        return Response({
            'default_scoreboard_start_date': start_date.isoformat() if start_date else None,
            'scoreboard_agent_visibility': settings['scoreboard_agent_visibility'],
        })
