"""
User Serializers
"""

from rest_framework import serializers

from apps.core.models import User
from shared.common.constants import UserRole


class UserSerializer(serializers.ModelSerializer):
    """Public user fields. The password hash is never exposed."""

    class Meta:
        model = User
        fields = ['id', 'email', 'name', 'phone_number', 'role', 'last_login', 'created_at', 'updated_at']
        read_only_fields = fields


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField(max_length=255)
    name = serializers.CharField(max_length=255)
    password = serializers.CharField(min_length=8, max_length=128, write_only=True)
    phone_number = serializers.CharField(max_length=50, required=False, allow_blank=True)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)


class UserUpdateSerializer(serializers.Serializer):
    email = serializers.EmailField(max_length=255, required=False)
    name = serializers.CharField(max_length=255, required=False)
    phone_number = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)
    password = serializers.CharField(min_length=8, max_length=128, required=False, write_only=True)


class UserRoleSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=UserRole.choices())
