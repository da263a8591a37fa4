# services/booking-service/src/apps/core/services/booking_service.py
"""
Booking Service

Booking lifecycle: creation, admin decisions, pricing, soft deletion.
"""

import logging
import uuid
from decimal import Decimal
from typing import Any, Dict, Optional

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import QuerySet

from shared.common.constants import is_administrative
from shared.common.validators import validate_positive_amount, validate_uuid

from ..exceptions import (
    BookingNotFound,
    BookingValidationError,
    InvalidAdmin,
    InvalidPrice,
    ServiceNotFound,
    UserNotFound,
)
from ..models import Booking, Service, User
from .lookups import get_or_raise
from .notification_service import NotificationEvent, NotificationService

logger = logging.getLogger(__name__)

MAX_PRICE = Decimal('9999999999.99')


class BookingService:
    """
    Service for managing bookings.

    Every read and mutation goes through ``Booking.objects.only_active()``,
    so soft-deleted bookings behave as missing.
    """

    UPDATABLE_FIELDS = ('user_id', 'service_id', 'admin_id', 'status')

    # ==========================================================================
    # Queries
    # ==========================================================================

    def get_queryset(self) -> QuerySet:
        return Booking.objects.only_active().select_related('user', 'service', 'admin')

    def get_booking(self, booking_id: uuid.UUID) -> Booking:
        """Get a live booking by ID."""
        return get_or_raise(self.get_queryset(), booking_id, BookingNotFound)

    def list_bookings(self, status: Optional[str] = None, user_id: Optional[uuid.UUID] = None) -> QuerySet:
        """List live bookings, optionally by status and/or requesting user."""
        queryset = self.get_queryset()

        if status:
            if status not in Booking.Status.values:
                raise BookingValidationError({'status': [f"Invalid status: {status}"]})
            queryset = queryset.filter(status=status)

        if user_id:
            queryset = queryset.filter(user_id=user_id)

        return queryset

    # ==========================================================================
    # Lifecycle
    # ==========================================================================

    @transaction.atomic
    def create_booking(self, user_id: uuid.UUID, service_id: uuid.UUID) -> Booking:
        """Create a PENDING booking for a live user and a live service."""
        user = get_or_raise(User.objects.only_active(), user_id, UserNotFound)
        service = get_or_raise(Service.objects.only_active(), service_id, ServiceNotFound)

        booking = Booking.objects.create(user=user, service=service)

        logger.info(
            f"Created booking {booking.id} for service {service.id}",
            extra={'booking_id': str(booking.id), 'user_id': str(user.id)}
        )

        NotificationService.dispatch_event(user.id, NotificationEvent.BOOKING_CREATED)
        return booking

    @transaction.atomic
    def approve_booking(self, booking_id: uuid.UUID, admin_id: Optional[uuid.UUID]) -> Booking:
        """Accept a booking on behalf of an administrator."""
        booking = self.get_booking(booking_id)
        admin = self._resolve_admin(admin_id)

        previous_status = booking.status
        booking.approve(admin)

        logger.info(
            f"Booking {booking.id} approved by {admin.id}",
            extra={'booking_id': str(booking.id), 'previous_status': previous_status}
        )

        NotificationService.dispatch_event(booking.user_id, NotificationEvent.BOOKING_APPROVED)
        return booking

    @transaction.atomic
    def reject_booking(self, booking_id: uuid.UUID, admin_id: Optional[uuid.UUID]) -> Booking:
        """Reject a booking on behalf of an administrator."""
        booking = self.get_booking(booking_id)
        admin = self._resolve_admin(admin_id)

        previous_status = booking.status
        booking.reject(admin)

        logger.info(
            f"Booking {booking.id} rejected by {admin.id}",
            extra={'booking_id': str(booking.id), 'previous_status': previous_status}
        )

        NotificationService.dispatch_event(booking.user_id, NotificationEvent.BOOKING_REJECTED)
        return booking

    @transaction.atomic
    def assign_price(self, booking_id: uuid.UUID, price: Any) -> Booking:
        """Set the booking price. Must be a finite number greater than zero."""
        try:
            amount = validate_positive_amount(price, 'price')
        except DjangoValidationError:
            raise InvalidPrice()

        amount = amount.quantize(Decimal('0.01'))
        if amount <= 0 or amount > MAX_PRICE:
            raise InvalidPrice()

        booking = self.get_booking(booking_id)
        booking.assign_price(amount)

        logger.info(f"Assigned price {amount} to booking {booking.id}")
        return booking

    @transaction.atomic
    def update_booking(self, booking_id: uuid.UUID, fields: Dict[str, Any]) -> Booking:
        """
        Patch ``user_id``, ``service_id``, ``admin_id`` and ``status``.

        All problems are collected and reported together.
        """
        booking = self.get_booking(booking_id)
        errors: Dict[str, list] = {}
        changes: Dict[str, Any] = {}

        for name in fields:
            if name not in self.UPDATABLE_FIELDS:
                errors[name] = ['This field cannot be updated.']

        if 'user_id' in fields:
            user = self._lookup(User.objects.only_active(), fields['user_id'])
            if user is None:
                errors['user_id'] = ['User not found.']
            else:
                changes['user'] = user

        if 'service_id' in fields:
            service = self._lookup(Service.objects.only_active(), fields['service_id'])
            if service is None:
                errors['service_id'] = ['Service not found.']
            else:
                changes['service'] = service

        if 'admin_id' in fields:
            if fields['admin_id'] in (None, ''):
                changes['admin'] = None
            else:
                admin = self._lookup(User.objects.only_active(), fields['admin_id'])
                if admin is None or not is_administrative(admin.role):
                    errors['admin_id'] = ['Invalid admin.']
                else:
                    changes['admin'] = admin

        if 'status' in fields:
            if fields['status'] not in Booking.Status.values:
                errors['status'] = [f"Invalid status: {fields['status']}"]
            else:
                changes['status'] = fields['status']

        if not errors:
            status = changes.get('status', booking.status)
            admin = changes['admin'] if 'admin' in changes else booking.admin
            if status == Booking.Status.PENDING and admin is not None:
                errors['admin_id'] = ['Only accepted or rejected bookings can have an admin.']

        if errors:
            raise BookingValidationError(errors)

        for attr, value in changes.items():
            setattr(booking, attr, value)

        if changes:
            booking.save(update_fields=[*changes.keys(), 'updated_at'])
            logger.info(
                f"Updated booking {booking.id}",
                extra={'booking_id': str(booking.id), 'fields': sorted(changes)}
            )

        return booking

    @transaction.atomic
    def delete_booking(self, booking_id: uuid.UUID, deleted_by: Optional[uuid.UUID] = None) -> None:
        """Soft delete a live booking."""
        booking = self.get_booking(booking_id)
        booking.soft_delete(deleted_by=deleted_by)
        logger.info(f"Soft deleted booking {booking.id}")

    # ==========================================================================
    # Helpers
    # ==========================================================================

    def _resolve_admin(self, admin_id: Optional[uuid.UUID]) -> User:
        if admin_id in (None, ''):
            raise BookingValidationError({'admin_id': ['This field is required.']})

        admin = self._lookup(User.objects.only_active(), admin_id)
        if admin is None or not is_administrative(admin.role):
            logger.warning(f"Rejected booking decision by invalid admin {admin_id}")
            raise InvalidAdmin()
        return admin

    @staticmethod
    def _lookup(queryset: QuerySet, pk: Any):
        try:
            pk = validate_uuid(pk)
        except DjangoValidationError:
            return None
        return queryset.filter(pk=pk).first()
