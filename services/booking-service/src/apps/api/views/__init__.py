# services/booking-service/src/apps/api/views/__init__.py
"""
Booking API Views
"""

from .booking_views import BookingViewSet
from .payment_views import PaymentViewSet
from .user_views import UserViewSet
from .catalog_views import ServiceViewSet
from .feedback_views import FeedbackViewSet, NotificationViewSet


__all__ = [
    'BookingViewSet',
    'PaymentViewSet',
    'UserViewSet',
    'ServiceViewSet',
    'FeedbackViewSet',
    'NotificationViewSet',
]
