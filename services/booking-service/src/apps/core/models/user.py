# services/booking-service/src/apps/core/models/user.py
"""
User model

Accounts that request bookings, or approve and price them.
"""

from django.contrib.auth.models import AbstractBaseUser, BaseUserManager
from django.db import models

from shared.common.constants import UserRole, is_administrative
from shared.common.mixins import BaseModel, SoftDeleteQuerySet


class UserManager(BaseUserManager.from_queryset(SoftDeleteQuerySet)):
    """User manager with soft-delete aware queries"""

    def create_user(self, email, name, password=None, **extra_fields):
        """Create and return a user"""
        if not email:
            raise ValueError('Email is required')

        user = self.model(email=self.normalize_email(email), name=name, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_admin(self, email, name, password=None, **extra_fields):
        extra_fields.setdefault('role', UserRole.ADMIN.value)
        return self.create_user(email, name, password, **extra_fields)


class User(AbstractBaseUser, BaseModel):
    """
    Platform account. Password hashing is inherited from AbstractBaseUser.
    """

    Role = UserRole

    email = models.EmailField(max_length=255, unique=True)
    name = models.CharField(max_length=255)
    phone_number = models.CharField(max_length=50, blank=True, null=True)
    role = models.CharField(
        max_length=20,
        choices=UserRole.choices(),
        default=UserRole.USER.value,
        db_index=True
    )

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['name']

    class Meta:
        db_table = 'users'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.name} <{self.email}>"

    @property
    def is_admin(self) -> bool:
        return is_administrative(self.role)
