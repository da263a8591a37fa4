# services/booking-service/src/apps/api/permissions.py
"""
API Permissions

Role checks that consult the stored user rather than the token claim.
"""

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework.request import Request
from rest_framework.views import APIView

from apps.core.models import User
from shared.common.constants import is_administrative
from shared.common.permissions import IsAdministrative
from shared.common.validators import validate_uuid

logger = logging.getLogger(__name__)


class IsCurrentAdministrator(IsAdministrative):
    """
    The token must carry an administrative role and the live user row must
    still hold one, so a demoted administrator loses access immediately.
    """

    def has_permission(self, request: Request, view: APIView) -> bool:
        if not super().has_permission(request, view):
            return False

        try:
            user_id = validate_uuid(request.user.id)
        except DjangoValidationError:
            return False

        role = User.objects.only_active().filter(pk=user_id).values_list('role', flat=True).first()
        if not is_administrative(role):
            logger.warning(f"Administrative token for non-administrator {user_id}")
            return False
        return True
