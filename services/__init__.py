"""
Django Service Layer

Service classes shared across apps.

Service Organization:
- HierarchyService: Downline traversal for agent visibility scoping
"""

from .hierarchy_service import HierarchyService

__all__ = [
    'HierarchyService',
]
