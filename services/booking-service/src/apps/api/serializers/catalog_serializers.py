"""
Service Catalog Serializers
"""

from rest_framework import serializers

from apps.core.models import Service


class ServiceSerializer(serializers.ModelSerializer):

    class Meta:
        model = Service
        fields = ['id', 'name', 'description', 'service_type', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']
        extra_kwargs = {
            'description': {'required': False, 'allow_null': True, 'allow_blank': True},
            'service_type': {'required': False, 'allow_blank': True},
        }
        # Uniqueness among live services is enforced by CatalogService
        validators = []
