"""
Hierarchy Service

Provides methods for navigating the agent hierarchy.
Uses django-cte for recursive CTEs.
"""
import logging
from uuid import UUID

from django_cte import With

logger = logging.getLogger(__name__)


class HierarchyService:
    """
    Service for resolving agent hierarchy relationships.

    All methods operate within the context of a single agency for multi-tenancy.
    """

    @staticmethod
    def get_downline(
        user_id: UUID,
        agency_id: UUID,
        include_self: bool = False
    ) -> list[UUID]:
        """
        Get all agents in a user's downline (recursive).

        The recursive member uses UNION (not UNION ALL), so a cycle in
        upline_id terminates instead of recursing forever.

        Args:
            user_id: The root user ID to start traversal from
            agency_id: Agency ID for multi-tenancy filtering
            include_self: Whether to include the user themselves in the result

        Returns:
            List of user IDs in the downline
        """
        from apps.core.models import User

        def make_cte(cte):
            base = (
                User.objects
                .filter(upline_id=user_id, agency_id=agency_id)
                .values('id')
            )
            recursive = (
                cte.join(User, upline_id=cte.col.id)
                .filter(agency_id=agency_id)
                .values('id')
            )
            return base.union(recursive)

        cte = With.recursive(make_cte)
        downline = list(
            cte.join(User, id=cte.col.id)
            .with_cte(cte)
            .order_by('id')
            .values_list('id', flat=True)
        )

        result = [agent_id for agent_id in downline if agent_id != user_id]
        if include_self:
            result.insert(0, user_id)

        logger.debug(f'Resolved {len(result)} agents in downline of {user_id}')
        return result
