# services/booking-service/src/apps/core/services/payment_service.py
"""
Payment Service

Initializes gateway checkouts for accepted bookings and reconciles
verifications and webhooks against local Payment and Booking rows.
"""

import json
import logging
import uuid
from typing import Any, Dict, Optional

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
from django.db.models import QuerySet

from shared.common.constants import PAYSTACK_CHARGE_SUCCESS_EVENT
from shared.common.exceptions import BadRequestException
from shared.common.validators import validate_uuid

from ..exceptions import (
    BookingNotAccepted,
    BookingNotFound,
    DuplicatePayment,
    InvalidPrice,
    InvalidWebhookSignature,
    PaymentAlreadyExists,
    PaymentNotFound,
    PaymentVerificationFailed,
)
from ..integrations import GatewayVerification, PaymentGateway, get_payment_gateway
from ..models import Booking, Payment
from .lookups import get_or_raise
from .notification_service import NotificationEvent, NotificationService

logger = logging.getLogger(__name__)


class PaymentService:
    """
    Service for booking payments.

    The gateway is injected; by default the class configured in
    ``PAYMENT_GATEWAY_CLASS`` is used.
    """

    def __init__(self, gateway: PaymentGateway = None):
        self.gateway = gateway or get_payment_gateway()

    # ==========================================================================
    # Initialization
    # ==========================================================================

    def initialize_payment(self, booking_id: uuid.UUID, callback_url: str = None) -> Dict[str, Any]:
        """
        Start a hosted checkout for an accepted, priced booking.

        All local checks run before the gateway is contacted.

        Returns:
            Dict with ``authorization_url``, ``payment_id`` and ``reference``

        Raises:
            BookingNotFound, BookingNotAccepted, PaymentAlreadyExists,
            InvalidPrice, PaymentGatewayError, DuplicatePayment
        """
        booking = get_or_raise(
            Booking.objects.only_active().select_related('user', 'service'),
            booking_id,
            BookingNotFound,
        )

        if booking.status != Booking.Status.ACCEPTED:
            raise BookingNotAccepted(f"Booking is not yet accepted: {booking.status}")

        if Payment.objects.filter(booking=booking).exists():
            raise PaymentAlreadyExists()

        if not booking.is_payable:
            raise InvalidPrice()

        checkout = self.gateway.initialize_transaction(
            email=booking.user.email,
            amount=booking.price,
            metadata={
                'booking_id': str(booking.id),
                'service_name': booking.service.name,
            },
            callback_url=callback_url,
        )

        try:
            with transaction.atomic():
                payment = Payment.objects.create(
                    booking=booking,
                    amount=booking.price,
                    reference=checkout.reference,
                    status=Payment.Status.PENDING,
                )
        except IntegrityError:
            logger.warning(
                f"Concurrent payment initialization for booking {booking.id}",
                extra={'booking_id': str(booking.id), 'reference': checkout.reference}
            )
            raise DuplicatePayment()

        logger.info(
            f"Initialized payment {payment.id} for booking {booking.id}",
            extra={
                'payment_id': str(payment.id),
                'reference': payment.reference,
                'amount': str(payment.amount),
            }
        )

        return {
            'authorization_url': checkout.authorization_url,
            'payment_id': str(payment.id),
            'reference': payment.reference,
        }

    # ==========================================================================
    # Confirmation
    # ==========================================================================

    def confirm_payment(self, reference: str) -> Payment:
        """
        Verify a transaction with the gateway and settle it locally.

        The Payment and Booking updates commit together. Confirming an
        already successful payment returns it unchanged.
        """
        if not reference:
            raise BadRequestException('Payment reference is required.')

        verification = self.gateway.verify_transaction(reference)

        if not verification.is_successful:
            logger.warning(
                f"Payment verification failed for {reference}",
                extra={'reference': reference, 'gateway_status': verification.status}
            )
            raise PaymentVerificationFailed()

        booking_id = verification.metadata.get('booking_id') or verification.metadata.get('bookingId')

        with transaction.atomic():
            payment = self._locate_for_update(booking_id, verification.reference or reference)
            self._check_matches(payment, verification)

            if payment.is_successful:
                logger.info(
                    f"Payment {payment.id} already confirmed",
                    extra={'payment_id': str(payment.id), 'reference': reference}
                )
                return payment

            payment.mark_success()

            booking = Booking.objects.select_for_update().get(pk=payment.booking_id)
            booking.mark_paid()

            NotificationService.dispatch_event(booking.user_id, NotificationEvent.PAYMENT_SUCCESS)

        logger.info(
            f"Confirmed payment {payment.id} for booking {payment.booking_id}",
            extra={'payment_id': str(payment.id), 'reference': payment.reference}
        )
        return payment

    def _locate_for_update(self, booking_id: Optional[str], reference: str) -> Payment:
        queryset = Payment.objects.select_for_update()

        if booking_id:
            try:
                booking_id = validate_uuid(booking_id, 'booking_id')
            except DjangoValidationError:
                raise PaymentNotFound()
            payment = queryset.filter(booking_id=booking_id).first()
        else:
            payment = queryset.filter(reference=reference).first()

        if payment is None:
            raise PaymentNotFound()
        return payment

    @staticmethod
    def _check_matches(payment: Payment, verification: GatewayVerification) -> None:
        """The verified transaction must be the one recorded for this payment."""
        if verification.reference != payment.reference or verification.amount != payment.amount:
            logger.warning(
                f"Verified transaction {verification.reference} does not match payment {payment.id}",
                extra={
                    'payment_id': str(payment.id),
                    'reference': verification.reference,
                    'expected_reference': payment.reference,
                    'amount': str(verification.amount),
                }
            )
            raise PaymentVerificationFailed()

    # ==========================================================================
    # Webhook
    # ==========================================================================

    def handle_webhook(self, raw_body: bytes, signature: Optional[str]) -> Dict[str, Any]:
        """
        Process a signed gateway webhook.

        Only ``charge.success`` changes state; every other event is acknowledged.
        """
        if not self.gateway.verify_signature(raw_body, signature):
            logger.warning("Rejected webhook with missing or invalid signature")
            raise InvalidWebhookSignature()

        try:
            payload = json.loads(raw_body)
        except ValueError:
            raise BadRequestException('Invalid webhook payload.')

        if not isinstance(payload, dict):
            raise BadRequestException('Invalid webhook payload.')

        event = payload.get('event')
        if event != PAYSTACK_CHARGE_SUCCESS_EVENT:
            logger.info(f"Ignoring webhook event {event}")
            return {'received': True, 'processed': False}

        data = payload.get('data') or {}
        reference = data.get('reference') if isinstance(data, dict) else None
        if not reference or not Payment.objects.filter(reference=reference).exists():
            logger.warning(f"Webhook for unknown payment reference {reference}")
            raise PaymentNotFound()

        payment = self.confirm_payment(reference)
        return {'received': True, 'processed': True, 'payment_id': str(payment.id)}

    # ==========================================================================
    # Reads and admin operations
    # ==========================================================================

    @staticmethod
    def get_queryset() -> QuerySet:
        return Payment.objects.select_related('booking', 'booking__user')

    @staticmethod
    def get_payment(payment_id: uuid.UUID) -> Payment:
        return get_or_raise(PaymentService.get_queryset(), payment_id, PaymentNotFound)

    @staticmethod
    def list_payments(status: Optional[str] = None) -> QuerySet:
        queryset = PaymentService.get_queryset()
        if status:
            queryset = queryset.filter(status=status)
        return queryset

    @staticmethod
    @transaction.atomic
    def delete_payment(payment_id: uuid.UUID) -> None:
        payment = PaymentService.get_payment(payment_id)
        payment.delete()
        logger.info(f"Deleted payment {payment_id}")
