# services/booking-service/src/apps/core/services/catalog_service.py
"""
Catalog Service

CRUD for bookable services.
"""

import logging
import uuid
from typing import Optional

from django.db import IntegrityError, transaction
from django.db.models import QuerySet

from ..exceptions import DuplicateService, ServiceNotFound
from ..models import Service
from .lookups import get_or_raise

logger = logging.getLogger(__name__)


class CatalogService:
    """Service for the catalog of bookable services."""

    EDITABLE_FIELDS = ('name', 'description', 'service_type')

    @staticmethod
    def get_service(service_id: uuid.UUID) -> Service:
        return get_or_raise(Service.objects.only_active(), service_id, ServiceNotFound)

    @staticmethod
    def list_services(service_type: Optional[str] = None) -> QuerySet:
        queryset = Service.objects.only_active()
        if service_type:
            queryset = queryset.filter(service_type=service_type)
        return queryset

    @staticmethod
    def _ensure_unique(name: str, service_type: str, exclude_id: uuid.UUID = None):
        queryset = Service.objects.only_active().filter(name=name, service_type=service_type)
        if exclude_id:
            queryset = queryset.exclude(pk=exclude_id)
        if queryset.exists():
            raise DuplicateService()

    @staticmethod
    def _save(service: Service, **kwargs) -> Service:
        try:
            with transaction.atomic():
                service.save(**kwargs)
        except IntegrityError:
            raise DuplicateService()
        return service

    @staticmethod
    @transaction.atomic
    def create_service(name: str, description: str = None, service_type: str = '') -> Service:
        service_type = service_type or ''
        CatalogService._ensure_unique(name, service_type)

        service = CatalogService._save(
            Service(name=name, description=description, service_type=service_type)
        )
        logger.info(f"Created service {service.id}: {service.name}")
        return service

    @staticmethod
    @transaction.atomic
    def update_service(service_id: uuid.UUID, **fields) -> Service:
        service = CatalogService.get_service(service_id)

        changed = []
        for name in CatalogService.EDITABLE_FIELDS:
            if name in fields:
                value = fields[name]
                if name == 'service_type':
                    value = value or ''
                setattr(service, name, value)
                changed.append(name)

        if not changed:
            return service

        CatalogService._ensure_unique(service.name, service.service_type, exclude_id=service.pk)
        CatalogService._save(service, update_fields=[*changed, 'updated_at'])
        logger.info(f"Updated service {service.id}", extra={'fields': changed})
        return service

    @staticmethod
    @transaction.atomic
    def delete_service(service_id: uuid.UUID, deleted_by: uuid.UUID = None) -> None:
        service = CatalogService.get_service(service_id)
        service.soft_delete(deleted_by=deleted_by)
        logger.info(f"Soft deleted service {service.id}")
