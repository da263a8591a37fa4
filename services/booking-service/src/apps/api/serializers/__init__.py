# services/booking-service/src/apps/api/serializers/__init__.py
"""
Booking API Serializers
"""

from .booking_serializers import (
    BookingSerializer,
    BookingCreateSerializer,
    BookingDecisionSerializer,
)

from .payment_serializers import (
    PaymentSerializer,
    PaymentInitializeSerializer,
    PaymentConfirmSerializer,
)

from .user_serializers import (
    UserSerializer,
    RegisterSerializer,
    LoginSerializer,
    UserUpdateSerializer,
    UserRoleSerializer,
)

from .catalog_serializers import ServiceSerializer

from .feedback_serializers import (
    FeedbackSerializer,
    NotificationSerializer,
)

__all__ = [
    'BookingSerializer',
    'BookingCreateSerializer',
    'BookingDecisionSerializer',
    'PaymentSerializer',
    'PaymentInitializeSerializer',
    'PaymentConfirmSerializer',
    'UserSerializer',
    'RegisterSerializer',
    'LoginSerializer',
    'UserUpdateSerializer',
    'UserRoleSerializer',
    'ServiceSerializer',
    'FeedbackSerializer',
    'NotificationSerializer',
]
