"""
External integrations.
"""

from django.conf import settings
from django.utils.module_loading import import_string

from .base import GatewayTransaction, GatewayVerification, PaymentGateway


def get_payment_gateway() -> PaymentGateway:
    """Instantiate the gateway named by ``PAYMENT_GATEWAY_CLASS``."""
    return import_string(settings.PAYMENT_GATEWAY_CLASS)()


__all__ = [
    'GatewayTransaction',
    'GatewayVerification',
    'PaymentGateway',
    'get_payment_gateway',
]
