# services/booking-service/src/apps/core/services/user_service.py
"""
User and Authentication Services
"""

import logging
import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import QuerySet
from django.utils import timezone

from shared.common.authentication import JWTTokenGenerator
from shared.common.cache import get_token_blacklist
from shared.common.constants import UserRole

from ..exceptions import EmailAlreadyExists, InvalidCredentials, UserNotFound
from ..models import User
from .lookups import get_or_raise

logger = logging.getLogger(__name__)


class AuthService:
    """Registration, login and logout."""

    @staticmethod
    @transaction.atomic
    def register(email: str, name: str, password: str, phone_number: str = None) -> User:
        """Create a USER account. Emails are unique across all accounts."""
        email = User.objects.normalize_email(email)
        if User.objects.filter(email__iexact=email).exists():
            raise EmailAlreadyExists()

        try:
            with transaction.atomic():
                user = User.objects.create_user(
                    email=email,
                    name=name,
                    password=password,
                    phone_number=phone_number,
                    role=UserRole.USER.value,
                )
        except IntegrityError:
            raise EmailAlreadyExists()

        logger.info(f"Registered user {user.id}", extra={'user_id': str(user.id)})
        return user

    @staticmethod
    def login(email: str, password: str) -> Dict[str, Any]:
        """Exchange credentials for a bearer token."""
        user = User.objects.only_active().filter(email__iexact=email).first()

        if user is None or not user.check_password(password):
            logger.warning("Failed login attempt", extra={'email': email})
            raise InvalidCredentials()

        user.last_login = timezone.now()
        user.save(update_fields=['last_login'])

        token = JWTTokenGenerator.generate_access_token(
            user_id=user.id,
            email=user.email,
            role=user.role,
        )
        lifetime = settings.JWT_SETTINGS['ACCESS_TOKEN_LIFETIME']

        logger.info(f"User {user.id} logged in")

        return {
            'access_token': token,
            'token_type': 'Bearer',
            'expires_in': int(lifetime.total_seconds()),
            'user': user,
        }

    @staticmethod
    def logout(token: str, expires_at: Optional[datetime]) -> None:
        """Revoke a token until it would have expired."""
        if expires_at is None:
            return
        get_token_blacklist().add(token, expires_at)


class UserService:
    """Account management."""

    EDITABLE_FIELDS = ('name', 'email', 'phone_number', 'password')

    @staticmethod
    def get_user(user_id: uuid.UUID) -> User:
        return get_or_raise(User.objects.only_active(), user_id, UserNotFound)

    @staticmethod
    def list_users(role: Optional[str] = None) -> QuerySet:
        queryset = User.objects.only_active()
        if role:
            queryset = queryset.filter(role=role)
        return queryset

    @staticmethod
    @transaction.atomic
    def update_user(user_id: uuid.UUID, **fields) -> User:
        user = UserService.get_user(user_id)
        update_fields = []

        for name in UserService.EDITABLE_FIELDS:
            if name not in fields:
                continue

            value = fields[name]
            if name == 'password':
                user.set_password(value)
            elif name == 'email':
                value = User.objects.normalize_email(value)
                if User.objects.filter(email__iexact=value).exclude(pk=user.pk).exists():
                    raise EmailAlreadyExists()
                user.email = value
            else:
                setattr(user, name, value)
            update_fields.append(name)

        if update_fields:
            user.save(update_fields=[*update_fields, 'updated_at'])
            logger.info(f"Updated user {user.id}", extra={'fields': update_fields})

        return user

    @staticmethod
    @transaction.atomic
    def set_role(user_id: uuid.UUID, role: str) -> User:
        user = UserService.get_user(user_id)
        user.role = UserRole(role).value
        user.save(update_fields=['role', 'updated_at'])
        logger.info(f"Changed role of user {user.id} to {user.role}")
        return user

    @staticmethod
    @transaction.atomic
    def delete_user(user_id: uuid.UUID, deleted_by: uuid.UUID = None) -> None:
        user = UserService.get_user(user_id)
        user.soft_delete(deleted_by=deleted_by)
        logger.info(f"Soft deleted user {user.id}")
