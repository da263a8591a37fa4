# services/booking-service/src/apps/core/models/feedback.py
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from shared.common.mixins import BaseModel


class Feedback(BaseModel):
    """User feedback with a 0-5 rating."""

    MIN_RATING = 0
    MAX_RATING = 5

    user = models.ForeignKey(
        'core.User',
        on_delete=models.CASCADE,
        related_name='feedbacks'
    )
    message = models.TextField()
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(MIN_RATING), MaxValueValidator(MAX_RATING)]
    )

    class Meta:
        db_table = 'feedbacks'
        ordering = ['-created_at']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(rating__gte=0) & models.Q(rating__lte=5),
                name='feedback_rating_range'
            ),
        ]

    def __str__(self):
        return f"Feedback {self.rating}/5 by {self.user_id}"
