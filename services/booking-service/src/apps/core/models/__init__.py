# services/booking-service/src/apps/core/models/__init__.py
"""
Booking Service Models
"""

from .user import User
from .catalog import Service
from .booking import Booking
from .payment import Payment
from .feedback import Feedback
from .notification import Notification

__all__ = [
    'User',
    'Service',
    'Booking',
    'Payment',
    'Feedback',
    'Notification',
]
