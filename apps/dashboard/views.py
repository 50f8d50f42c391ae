"""
Dashboard API Views

Provides the production scoreboard endpoint:
- /api/dashboard/scoreboard -> billing-cycle accrual leaderboard
"""
import logging

from django.utils import timezone
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.authentication import get_user_context
from apps.core.exceptions import ValidationError
from apps.core.mixins import AuthenticatedAPIView

from .services import (
    SCOPES,
    get_scoreboard_with_billing_cycle,
    get_user_context_from_auth_id,
)
from .timeframes import resolve_date_range

logger = logging.getLogger(__name__)


class ScoreboardView(AuthenticatedAPIView, APIView):
    """
    GET /api/dashboard/scoreboard

    Get scoreboard data with billing cycle payment calculation.

    Recurring payments are generated from each in-force deal's billing_cycle
    (monthly, quarterly, etc.) and aggregated by payment date. Payments after
    today are never counted.

    Query params:
        start_date: Optional date (YYYY-MM-DD), alias startDate
        end_date: Optional date (YYYY-MM-DD), alias endDate
        timeframe: Optional preset used when no dates are given
            (default: this_week, Sunday to Saturday)
        scope: Optional 'agency' or 'downline'

    Response (200):
        {
            "success": true,
            "data": {
                "leaderboard": [
                    {
                        "rank": 1,
                        "agent_id": "uuid",
                        "name": "John Doe",
                        "total": 12345.67,
                        "dailyBreakdown": { "2024-01-15": 500.00 },
                        "dealCount": 5
                    }
                ],
                "stats": {
                    "totalProduction": 50000.00,
                    "totalDeals": 25,
                    "activeAgents": 10
                },
                "dateRange": {
                    "startDate": "2024-01-01",
                    "endDate": "2024-01-31"
                }
            }
        }
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        user = get_user_context(request)
        if not user:
            return Response(
                {'success': False, 'error': 'Authentication required'},
                status=status.HTTP_401_UNAUTHORIZED
            )

        try:
            user_ctx = get_user_context_from_auth_id(user.auth_user_id)
        except Exception as e:
            logger.error(f'Scoreboard user lookup failed: {e}')
            return Response(
                {'success': False, 'error': 'Failed to get scoreboard data'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        if not user_ctx:
            return Response(
                {'success': False, 'error': 'User not found'},
                status=status.HTTP_404_NOT_FOUND
            )

        if not user_ctx.agency_id:
            return Response(
                {'success': False, 'error': 'User not associated with an agency'},
                status=status.HTTP_400_BAD_REQUEST
            )

        today = timezone.localdate()

        try:
            start_date, end_date = resolve_date_range(request.query_params, today)
        except ValidationError as e:
            return self.error_response(e)

        scope = request.query_params.get('scope') or None
        if scope is not None and scope not in SCOPES:
            return Response(
                {'success': False, 'error': "scope must be 'agency' or 'downline'"},
                status=status.HTTP_400_BAD_REQUEST
            )

        try:
            data = get_scoreboard_with_billing_cycle(
                user_ctx,
                start_date,
                end_date,
                today=today,
                scope=scope,
            )
        except Exception as e:
            logger.error(f'Scoreboard failed: {e}')
            return Response(
                {'success': False, 'error': 'Failed to get scoreboard data'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        return Response(data)
