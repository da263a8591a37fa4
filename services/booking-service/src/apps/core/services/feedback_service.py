# services/booking-service/src/apps/core/services/feedback_service.py
"""
Feedback Service
"""

import logging
import uuid
from typing import Optional

from django.db import transaction
from django.db.models import QuerySet

from ..exceptions import FeedbackNotFound, UserNotFound
from ..models import Feedback, User
from .lookups import get_or_raise

logger = logging.getLogger(__name__)


class FeedbackService:

    EDITABLE_FIELDS = ('message', 'rating')

    @staticmethod
    def get_feedback(feedback_id: uuid.UUID) -> Feedback:
        return get_or_raise(
            Feedback.objects.only_active().select_related('user'),
            feedback_id,
            FeedbackNotFound,
        )

    @staticmethod
    def list_feedback(user_id: Optional[uuid.UUID] = None) -> QuerySet:
        queryset = Feedback.objects.only_active().select_related('user')
        if user_id:
            queryset = queryset.filter(user_id=user_id)
        return queryset

    @staticmethod
    @transaction.atomic
    def create_feedback(user_id: uuid.UUID, message: str, rating: int) -> Feedback:
        user = get_or_raise(User.objects.only_active(), user_id, UserNotFound)
        feedback = Feedback.objects.create(user=user, message=message, rating=rating)
        logger.info(f"Recorded feedback {feedback.id} ({rating}/5)")
        return feedback

    @staticmethod
    @transaction.atomic
    def update_feedback(feedback_id: uuid.UUID, **fields) -> Feedback:
        feedback = FeedbackService.get_feedback(feedback_id)
        changed = [name for name in FeedbackService.EDITABLE_FIELDS if name in fields]

        for name in changed:
            setattr(feedback, name, fields[name])

        if changed:
            feedback.save(update_fields=[*changed, 'updated_at'])
        return feedback

    @staticmethod
    @transaction.atomic
    def delete_feedback(feedback_id: uuid.UUID, deleted_by: uuid.UUID = None) -> None:
        feedback = FeedbackService.get_feedback(feedback_id)
        feedback.soft_delete(deleted_by=deleted_by)
        logger.info(f"Soft deleted feedback {feedback.id}")
