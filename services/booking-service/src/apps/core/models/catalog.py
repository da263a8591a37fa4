# services/booking-service/src/apps/core/models/catalog.py
"""
Service catalog model
"""

from django.db import models

from shared.common.mixins import BaseModel


class Service(BaseModel):
    """A bookable service offered on the platform."""

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    service_type = models.CharField(max_length=100, blank=True, default='')

    class Meta:
        db_table = 'services'
        ordering = ['name']
        constraints = [
            models.UniqueConstraint(
                fields=['name', 'service_type'],
                condition=models.Q(is_deleted=False),
                name='unique_active_service_name_type'
            ),
        ]

    def __str__(self):
        return self.name
