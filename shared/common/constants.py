"""
Shared Constants Module.

Enums and settings defaults shared by the booking platform services.
"""
from enum import Enum
from typing import Union


# =============================================================================
# PAGINATION
# =============================================================================

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


# =============================================================================
# USER & AUTHENTICATION
# =============================================================================

class UserRole(str, Enum):
    """User roles in the system."""
    USER = "USER"
    ADMIN = "ADMIN"
    SUPER_ADMIN = "SUPER_ADMIN"

    @classmethod
    def choices(cls):
        return [(role.value, role.name.replace('_', ' ').title()) for role in cls]


ADMINISTRATIVE_ROLES = frozenset({UserRole.ADMIN, UserRole.SUPER_ADMIN})


def is_administrative(role: Union[UserRole, str, None]) -> bool:
    """Whether a role may approve, reject, price or delete bookings."""
    if role is None:
        return False
    try:
        return UserRole(role) in ADMINISTRATIVE_ROLES
    except ValueError:
        return False


# JWT Token Settings
JWT_ACCESS_TOKEN_LIFETIME_MINUTES = 60
JWT_ALGORITHM = "HS256"
JWT_ISSUER = "booking-platform"

# Token blacklist cache keys
TOKEN_BLACKLIST_PREFIX = "bl_"


# =============================================================================
# PAYMENTS
# =============================================================================

# Paystack
PAYSTACK_BASE_URL = "https://api.paystack.co"
PAYSTACK_SIGNATURE_HEADER = "X-Paystack-Signature"
PAYSTACK_CHARGE_SUCCESS_EVENT = "charge.success"
