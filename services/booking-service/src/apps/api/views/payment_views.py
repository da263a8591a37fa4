"""
Payment API Views
"""

import logging

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from apps.core.services import BookingService, PaymentService
from apps.api.permissions import IsCurrentAdministrator
from apps.api.serializers import (
    PaymentSerializer,
    PaymentInitializeSerializer,
    PaymentConfirmSerializer,
)
from shared.common.constants import PAYSTACK_SIGNATURE_HEADER
from shared.common.exceptions import ForbiddenException
from .filters import PaymentFilter

logger = logging.getLogger(__name__)


class PaymentViewSet(viewsets.GenericViewSet):
    """
    Payment initialization, confirmation and gateway webhooks.
    """

    serializer_class = PaymentSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_class = PaymentFilter

    def get_permissions(self):
        if self.action in ('list', 'destroy'):
            return [IsCurrentAdministrator()]
        if self.action in ('confirm', 'webhook'):
            return [AllowAny()]
        return [IsAuthenticated()]

    def get_queryset(self):
        return PaymentService.list_payments()

    def list(self, request):
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        return self.get_paginated_response(self.get_serializer(page, many=True).data)

    def retrieve(self, request, pk=None):
        payment = PaymentService.get_payment(pk)
        if not request.user.is_admin and str(payment.booking.user_id) != str(request.user.id):
            raise ForbiddenException()
        return Response(self.get_serializer(payment).data)

    def destroy(self, request, pk=None):
        PaymentService.delete_payment(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['post'])
    def initialize(self, request):
        """Start a hosted checkout for an accepted booking."""
        serializer = PaymentInitializeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        booking = BookingService().get_booking(serializer.validated_data['booking_id'])
        if not request.user.is_admin and str(booking.user_id) != str(request.user.id):
            raise ForbiddenException('You can only pay for your own bookings.')

        result = PaymentService().initialize_payment(
            booking.id,
            callback_url=serializer.validated_data.get('callback_url'),
        )
        return Response(result, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['post'], authentication_classes=[])
    def confirm(self, request):
        """Verify a transaction reference and settle the payment."""
        serializer = PaymentConfirmSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        payment = PaymentService().confirm_payment(serializer.validated_data['reference'])
        return Response(self.get_serializer(payment).data)

    @action(detail=False, methods=['post'], authentication_classes=[])
    def webhook(self, request):
        """Gateway callback. Trust comes from the HMAC signature over the raw body."""
        result = PaymentService().handle_webhook(
            request.body,
            request.headers.get(PAYSTACK_SIGNATURE_HEADER),
        )
        return Response(result, status=status.HTTP_200_OK)
