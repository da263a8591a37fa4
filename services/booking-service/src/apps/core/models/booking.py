# services/booking-service/src/apps/core/models/booking.py
"""
Booking Model

A user's request for a catalog service, moving PENDING -> ACCEPTED / REJECTED.
"""

from decimal import Decimal

from django.db import models

from shared.common.mixins import BaseModel


class Booking(BaseModel):
    """
    Booking aggregate.

    ``admin`` is only set once an administrator has decided the booking;
    ``price`` is assigned separately and is required before payment.
    """

    class Status(models.TextChoices):
        PENDING = 'PENDING', 'Pending'
        ACCEPTED = 'ACCEPTED', 'Accepted'
        REJECTED = 'REJECTED', 'Rejected'

    DECIDED_STATUSES = (Status.ACCEPTED, Status.REJECTED)

    user = models.ForeignKey(
        'core.User',
        on_delete=models.CASCADE,
        related_name='bookings'
    )
    service = models.ForeignKey(
        'core.Service',
        on_delete=models.PROTECT,
        related_name='bookings'
    )
    admin = models.ForeignKey(
        'core.User',
        on_delete=models.SET_NULL,
        blank=True,
        null=True,
        related_name='handled_bookings'
    )

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True
    )
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        blank=True,
        null=True
    )

    class Meta:
        db_table = 'bookings'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'status']),
            models.Index(fields=['status', 'created_at']),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__isnull=True) | models.Q(price__gt=0),
                name='booking_price_positive'
            ),
        ]

    def __str__(self):
        return f"Booking {self.id} ({self.status})"

    @property
    def is_decided(self) -> bool:
        return self.status in self.DECIDED_STATUSES

    @property
    def has_payment(self) -> bool:
        return hasattr(self, 'payment')

    @property
    def is_payable(self) -> bool:
        return (
            self.status == self.Status.ACCEPTED
            and self.price is not None
            and self.price > Decimal('0')
        )

    # ==========================================================================
    # State transitions
    # ==========================================================================

    def approve(self, admin):
        """Accept the booking. Re-deciding an already decided booking overwrites it."""
        self.status = self.Status.ACCEPTED
        self.admin = admin
        self.save(update_fields=['status', 'admin', 'updated_at'])

    def reject(self, admin):
        """Reject the booking."""
        self.status = self.Status.REJECTED
        self.admin = admin
        self.save(update_fields=['status', 'admin', 'updated_at'])

    def assign_price(self, price: Decimal):
        self.price = price
        self.save(update_fields=['price', 'updated_at'])

    def mark_paid(self):
        """Reaffirm acceptance once payment has been confirmed."""
        self.status = self.Status.ACCEPTED
        self.save(update_fields=['status', 'updated_at'])
