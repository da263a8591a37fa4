"""
Celery application for the Booking Service.

Configuration is read from Django settings under the ``CELERY_`` namespace.
"""

import os

from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.base')

app = Celery('booking_service')
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()
