# services/booking-service/src/apps/core/models/payment.py
"""
Payment Model
"""

from django.db import models
from django.utils import timezone

from shared.common.mixins import UUIDPrimaryKeyMixin, TimestampMixin


class Payment(UUIDPrimaryKeyMixin, TimestampMixin):
    """
    Gateway payment for a booking.

    At most one payment exists per booking; the one-to-one column is
    enforced by a unique index so concurrent initializations cannot both win.
    """

    class Status(models.TextChoices):
        PENDING = 'PENDING', 'Pending'
        SUCCESS = 'SUCCESS', 'Success'
        FAILED = 'FAILED', 'Failed'
        REFUNDED = 'REFUNDED', 'Refunded'

    booking = models.OneToOneField(
        'core.Booking',
        on_delete=models.CASCADE,
        related_name='payment'
    )
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True
    )
    reference = models.CharField(max_length=255, unique=True)
    paid_at = models.DateTimeField(blank=True, null=True)

    class Meta:
        db_table = 'payments'
        ordering = ['-created_at']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(amount__gt=0),
                name='payment_amount_positive'
            ),
        ]

    def __str__(self):
        return f"Payment {self.reference} ({self.status})"

    @property
    def is_successful(self) -> bool:
        return self.status == self.Status.SUCCESS

    def mark_success(self):
        self.status = self.Status.SUCCESS
        self.paid_at = timezone.now()
        self.save(update_fields=['status', 'paid_at', 'updated_at'])
