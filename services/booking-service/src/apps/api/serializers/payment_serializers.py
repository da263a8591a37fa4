"""
Payment Serializers
"""

from rest_framework import serializers

from apps.core.models import Payment


class PaymentSerializer(serializers.ModelSerializer):
    booking_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Payment
        fields = [
            'id', 'booking_id', 'amount', 'status', 'reference',
            'paid_at', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class PaymentInitializeSerializer(serializers.Serializer):
    booking_id = serializers.UUIDField()
    callback_url = serializers.URLField(required=False)


class PaymentConfirmSerializer(serializers.Serializer):
    reference = serializers.CharField(max_length=255)
