"""
Notification Celery Tasks
"""

import logging
from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task(name='bookings.create_event_notification')
def create_event_notification(user_id: str, event: str):
    """
    Record the notification for a booking or payment event.

    Failures are logged and swallowed; the triggering operation has
    already committed.
    """
    from ..services.notification_service import NotificationService

    try:
        notification = NotificationService.notify(user_id, event)
    except Exception as e:
        logger.error(
            f"Failed to create {event} notification for user {user_id}",
            extra={'user_id': user_id, 'event': event, 'error': str(e)}
        )
        return None

    return str(notification.id)
