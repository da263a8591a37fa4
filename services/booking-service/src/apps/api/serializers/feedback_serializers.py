"""
Feedback and Notification Serializers
"""

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from apps.core.models import Feedback, Notification
from shared.common.validators import validate_range


class FeedbackSerializer(serializers.ModelSerializer):
    user_id = serializers.UUIDField(read_only=True)
    message = serializers.CharField(allow_blank=False, trim_whitespace=True)
    rating = serializers.IntegerField()

    class Meta:
        model = Feedback
        fields = ['id', 'user_id', 'message', 'rating', 'created_at', 'updated_at']
        read_only_fields = ['id', 'user_id', 'created_at', 'updated_at']

    def validate_rating(self, value):
        try:
            return validate_range(value, Feedback.MIN_RATING, Feedback.MAX_RATING, 'rating')
        except DjangoValidationError as e:
            raise serializers.ValidationError(e.messages)


class NotificationSerializer(serializers.ModelSerializer):
    user_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Notification
        fields = ['id', 'user_id', 'title', 'message', 'type', 'is_read', 'created_at']
        read_only_fields = fields
