# services/booking-service/src/apps/core/services/__init__.py
"""
Booking Service Business Logic
"""

from .booking_service import BookingService
from .payment_service import PaymentService
from .notification_service import NotificationService, NotificationEvent
from .user_service import AuthService, UserService
from .catalog_service import CatalogService
from .feedback_service import FeedbackService


__all__ = [
    'BookingService',
    'PaymentService',
    'NotificationService',
    'NotificationEvent',
    'AuthService',
    'UserService',
    'CatalogService',
    'FeedbackService',
]
