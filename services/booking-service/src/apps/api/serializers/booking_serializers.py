# services/booking-service/src/apps/api/serializers/booking_serializers.py
"""
Booking Serializers
"""

from rest_framework import serializers

from apps.core.models import Booking


class BookingSerializer(serializers.ModelSerializer):
    """Booking representation."""

    user_id = serializers.UUIDField(read_only=True)
    service_id = serializers.UUIDField(read_only=True)
    admin_id = serializers.UUIDField(read_only=True, allow_null=True)
    service_name = serializers.CharField(source='service.name', read_only=True)
    status_display = serializers.CharField(source='get_status_display', read_only=True)
    has_payment = serializers.SerializerMethodField()

    class Meta:
        model = Booking
        fields = [
            'id', 'user_id', 'service_id', 'service_name', 'admin_id',
            'status', 'status_display', 'price', 'has_payment',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields

    def get_has_payment(self, obj) -> bool:
        return obj.has_payment


class BookingCreateSerializer(serializers.Serializer):
    """Input for creating a booking. ``user_id`` defaults to the caller."""

    user_id = serializers.UUIDField(required=False)
    service_id = serializers.UUIDField()


class BookingDecisionSerializer(serializers.Serializer):
    """Input for approve/reject. ``admin_id`` defaults to the caller."""

    admin_id = serializers.UUIDField(required=False)
