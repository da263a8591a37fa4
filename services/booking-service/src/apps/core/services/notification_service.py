"""
Notification Service.

Records in-app notifications for booking and payment events. Event
notifications are scheduled after the surrounding transaction commits and
any failure is logged, never raised to the caller.
"""
import logging
from enum import Enum
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from ..exceptions import NotificationNotFound
from ..models import Notification, User
from .lookups import get_or_raise

logger = logging.getLogger(__name__)


class NotificationEvent(str, Enum):
    BOOKING_CREATED = 'BOOKING_CREATED'
    BOOKING_APPROVED = 'BOOKING_APPROVED'
    BOOKING_REJECTED = 'BOOKING_REJECTED'
    PAYMENT_SUCCESS = 'PAYMENT_SUCCESS'


BOOKING_TITLE = 'Booking Update'
PAYMENT_TITLE = 'Payment Update'

EVENT_TEMPLATES = {
    NotificationEvent.BOOKING_CREATED: (
        BOOKING_TITLE,
        'Your booking has been created and is pending approval',
        Notification.Type.BOOKING,
    ),
    NotificationEvent.BOOKING_APPROVED: (
        BOOKING_TITLE,
        'Your booking has been approved',
        Notification.Type.BOOKING,
    ),
    NotificationEvent.BOOKING_REJECTED: (
        BOOKING_TITLE,
        'Your booking has been rejected',
        Notification.Type.BOOKING,
    ),
    NotificationEvent.PAYMENT_SUCCESS: (
        PAYMENT_TITLE,
        'Your payment has been processed successfully',
        Notification.Type.PAYMENT,
    ),
}


class NotificationService:
    """Service for managing notifications."""

    # ==========================================================================
    # Event notifications
    # ==========================================================================

    @staticmethod
    def dispatch_event(user_id: UUID, event: NotificationEvent) -> None:
        """
        Schedule an event notification once the current transaction commits.
        """
        user_id = str(user_id)
        event = NotificationEvent(event)

        def _enqueue():
            from ..tasks import create_event_notification

            try:
                create_event_notification.delay(user_id, event.value)
            except Exception as e:
                logger.error(
                    f"Failed to enqueue {event.value} notification",
                    extra={'user_id': user_id, 'event': event.value, 'error': str(e)}
                )

        transaction.on_commit(_enqueue)

    @staticmethod
    def notify(user_id: UUID, event: NotificationEvent) -> Notification:
        """Create the templated notification for an event."""
        title, message, notification_type = EVENT_TEMPLATES[NotificationEvent(event)]
        return NotificationService.create_notification(
            user_id=user_id,
            title=title,
            message=message,
            notification_type=notification_type,
        )

    @staticmethod
    def create_notification(
        user_id: UUID,
        title: str,
        message: str,
        notification_type: str = Notification.Type.GENERAL,
    ) -> Notification:
        user = User.objects.only_active().get(pk=user_id)
        notification = Notification.objects.create(
            user=user,
            title=title,
            message=message,
            type=notification_type,
        )

        logger.info(
            f"Created {notification_type} notification for user {user_id}",
            extra={'notification_id': str(notification.id)}
        )
        return notification

    # ==========================================================================
    # Reads and updates
    # ==========================================================================

    @staticmethod
    def list_for_user(user_id: UUID, is_read: Optional[bool] = None) -> QuerySet:
        queryset = Notification.objects.only_active().filter(user_id=user_id)
        if is_read is not None:
            queryset = queryset.filter(is_read=is_read)
        return queryset

    @staticmethod
    def get_for_user(notification_id: UUID, user_id: UUID) -> Notification:
        return get_or_raise(
            NotificationService.list_for_user(user_id),
            notification_id,
            NotificationNotFound,
        )

    @staticmethod
    def mark_read(notification_id: UUID, user_id: UUID) -> Notification:
        notification = NotificationService.get_for_user(notification_id, user_id)
        notification.mark_read()
        return notification

    @staticmethod
    def delete(notification_id: UUID, user_id: UUID) -> None:
        notification = NotificationService.get_for_user(notification_id, user_id)
        notification.soft_delete(deleted_by=user_id)
        logger.info(f"Deleted notification {notification_id}")
