# shared/common/permissions.py
"""
Custom Permission Classes for Role-Based Access Control (RBAC)
"""

from typing import List
from rest_framework import permissions
from rest_framework.request import Request
from rest_framework.views import APIView
import logging

from .constants import UserRole, is_administrative

logger = logging.getLogger(__name__)


class BasePermission(permissions.BasePermission):
    """Base permission class with utility methods"""

    def get_user_role(self, request: Request):
        """Get role from user object or JWT payload"""
        if hasattr(request.user, 'role'):
            return request.user.role
        if hasattr(request, 'auth') and isinstance(request.auth, dict):
            return request.auth.get('role')
        return None

    def is_authenticated(self, request: Request) -> bool:
        return bool(
            request.user and
            getattr(request.user, 'is_authenticated', False)
        )


class HasRole(BasePermission):
    """Check if user has one of the required roles"""

    required_roles: List[str] = []

    def has_permission(self, request: Request, view: APIView) -> bool:
        if not self.is_authenticated(request):
            return False
        return self.get_user_role(request) in self.required_roles


class IsAdministrative(BasePermission):
    """ADMIN or SUPER_ADMIN"""

    message = 'Access denied'

    def has_permission(self, request: Request, view: APIView) -> bool:
        if not self.is_authenticated(request):
            return False
        return is_administrative(self.get_user_role(request))


class IsSuperAdmin(HasRole):
    """Super administrators only"""
    required_roles = [UserRole.SUPER_ADMIN.value]


class IsOwnerOrAdmin(BasePermission):
    """
    Object access for the owner of the resource or any administrative user.
    """

    owner_field: str = 'user_id'

    def has_permission(self, request: Request, view: APIView) -> bool:
        return self.is_authenticated(request)

    def has_object_permission(self, request: Request, view: APIView, obj) -> bool:
        if is_administrative(self.get_user_role(request)):
            return True

        owner_field = getattr(view, 'owner_field', self.owner_field)
        owner_id = getattr(obj, owner_field, None)
        return str(request.user.id) == str(owner_id)


class IsAdminOrReadOnly(BasePermission):
    """
    Full access for admins, read-only for everyone else (including anonymous).
    """

    def has_permission(self, request: Request, view: APIView) -> bool:
        if request.method in permissions.SAFE_METHODS:
            return True
        return self.is_authenticated(request) and is_administrative(self.get_user_role(request))
