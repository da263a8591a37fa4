"""
Shared Validators Module.

Common validation utilities used by the services and serializers.
"""
from decimal import Decimal, InvalidOperation
from typing import Any
from uuid import UUID

from django.core.exceptions import ValidationError


# =============================================================================
# UUID VALIDATORS
# =============================================================================

def validate_uuid(value: Any, field_name: str = "value") -> UUID:
    """Validate and convert a value to UUID."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (ValueError, TypeError, AttributeError):
        raise ValidationError(f"Invalid UUID format for {field_name}")


# =============================================================================
# NUMERIC VALIDATORS
# =============================================================================

def validate_positive_amount(value: Any, field_name: str = "amount") -> Decimal:
    """Validate a finite, strictly positive monetary amount."""
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field_name} must be a number")

    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} must be a number")

    if not amount.is_finite():
        raise ValidationError(f"{field_name} must be a finite number")

    if amount <= 0:
        raise ValidationError(f"{field_name} must be greater than zero")

    return amount


def validate_range(value: int, min_value: int, max_value: int, field_name: str = "value") -> int:
    """Validate that an integer is within an inclusive range."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field_name} must be an integer")

    if value < min_value or value > max_value:
        raise ValidationError(f"{field_name} must be between {min_value} and {max_value}")

    return value
