# services/booking-service/src/apps/api/views/booking_views.py
"""
Booking API Views

Booking CRUD and admin workflow actions.
"""

import logging

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from apps.core.services import BookingService
from apps.api.permissions import IsCurrentAdministrator
from apps.api.serializers import (
    BookingSerializer,
    BookingCreateSerializer,
    BookingDecisionSerializer,
)
from shared.common.exceptions import ForbiddenException
from shared.common.permissions import IsOwnerOrAdmin
from .filters import BookingFilter

logger = logging.getLogger(__name__)


class BookingViewSet(viewsets.GenericViewSet):
    """
    ViewSet for booking management.

    Users see and edit their own bookings; administrators see all bookings
    and decide, price and delete them.
    """

    serializer_class = BookingSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_class = BookingFilter

    ADMIN_ACTIONS = ('destroy', 'approve', 'reject', 'price')
    OWNER_EDITABLE_FIELDS = {'service_id'}

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.booking_service = BookingService()

    def get_permissions(self):
        if self.action in self.ADMIN_ACTIONS:
            return [IsCurrentAdministrator()]
        if self.action in ('retrieve', 'update', 'partial_update'):
            return [IsOwnerOrAdmin()]
        return [IsAuthenticated()]

    def get_queryset(self):
        """Administrators see every live booking, everyone else only their own."""
        if getattr(self.request.user, 'is_admin', False):
            return self.booking_service.list_bookings()
        return self.booking_service.list_bookings(user_id=self.request.user.id)

    def get_object(self):
        booking = self.booking_service.get_booking(self.kwargs['pk'])
        self.check_object_permissions(self.request, booking)
        return booking

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        serializer = self.get_serializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    def retrieve(self, request, pk=None):
        return Response(self.get_serializer(self.get_object()).data)

    def create(self, request, *args, **kwargs):
        """Create a new booking."""
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user_id = serializer.validated_data.get('user_id') or request.user.id
        if str(user_id) != str(request.user.id) and not request.user.is_admin:
            raise ForbiddenException('You can only create bookings for yourself.')

        booking = self.booking_service.create_booking(
            user_id=user_id,
            service_id=serializer.validated_data['service_id'],
        )
        return Response(self.get_serializer(booking).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        """Update booking references or status."""
        booking = self.get_object()
        fields = request.data.dict() if hasattr(request.data, 'dict') else dict(request.data)

        if not request.user.is_admin:
            if set(fields) - self.OWNER_EDITABLE_FIELDS:
                raise ForbiddenException('Only administrators can change these fields.')
            if booking.is_decided or booking.has_payment:
                raise ForbiddenException('Only pending bookings can be changed.')

        booking = self.booking_service.update_booking(booking.id, fields)
        return Response(self.get_serializer(booking).data)

    def update(self, request, pk=None):
        return self.partial_update(request, pk=pk)

    def destroy(self, request, pk=None):
        """Soft delete a booking."""
        self.booking_service.delete_booking(pk, deleted_by=request.user.id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ==========================================================================
    # Workflow actions
    # ==========================================================================

    @action(detail=True, methods=['post'])
    def approve(self, request, pk=None):
        """Accept a booking."""
        serializer = BookingDecisionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        admin_id = serializer.validated_data.get('admin_id') or request.user.id
        booking = self.booking_service.approve_booking(pk, admin_id)
        return Response(self.get_serializer(booking).data)

    @action(detail=True, methods=['post'])
    def reject(self, request, pk=None):
        """Reject a booking."""
        serializer = BookingDecisionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        admin_id = serializer.validated_data.get('admin_id') or request.user.id
        booking = self.booking_service.reject_booking(pk, admin_id)
        return Response(self.get_serializer(booking).data)

    @action(detail=True, methods=['post'])
    def price(self, request, pk=None):
        """Assign a price to a booking."""
        booking = self.booking_service.assign_price(pk, request.data.get('price'))
        return Response(self.get_serializer(booking).data)
