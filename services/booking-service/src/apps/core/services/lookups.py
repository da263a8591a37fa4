"""
Lookup helpers shared by the service layer.
"""
from typing import Any, Type

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import Model, QuerySet

from shared.common.exceptions import NotFoundException
from shared.common.validators import validate_uuid


def get_or_raise(queryset: QuerySet, pk: Any, exc_class: Type[NotFoundException]) -> Model:
    """
    Fetch one row by primary key or raise ``exc_class``.

    Malformed identifiers are reported as not found rather than leaking a
    database error.
    """
    if pk in (None, ''):
        raise exc_class()
    try:
        pk = validate_uuid(pk)
    except DjangoValidationError:
        raise exc_class()

    instance = queryset.filter(pk=pk).first()
    if instance is None:
        raise exc_class()
    return instance
