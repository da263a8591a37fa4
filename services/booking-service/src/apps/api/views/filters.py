# services/booking-service/src/apps/api/views/filters.py
"""
API Filters

Django Filter classes for the booking API.
"""

import django_filters

from apps.core.models import Booking, Notification, Payment


class BookingFilter(django_filters.FilterSet):
    """Filter for booking queries."""

    status = django_filters.ChoiceFilter(choices=Booking.Status.choices)
    user_id = django_filters.UUIDFilter(field_name='user_id')
    service_id = django_filters.UUIDFilter(field_name='service_id')

    class Meta:
        model = Booking
        fields = ['status', 'user_id', 'service_id']


class PaymentFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=Payment.Status.choices)

    class Meta:
        model = Payment
        fields = ['status']


class NotificationFilter(django_filters.FilterSet):
    is_read = django_filters.BooleanFilter()
    type = django_filters.ChoiceFilter(choices=Notification.Type.choices)

    class Meta:
        model = Notification
        fields = ['is_read', 'type']
