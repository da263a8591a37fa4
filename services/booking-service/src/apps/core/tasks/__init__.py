"""
Booking Service Celery Tasks
"""

from .notification_tasks import create_event_notification

__all__ = ['create_event_notification']
