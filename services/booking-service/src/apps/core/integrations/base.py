# services/booking-service/src/apps/core/integrations/base.py
"""
Payment gateway interface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class GatewayTransaction:
    """Hosted-checkout transaction created by the gateway."""
    authorization_url: str
    reference: str
    access_code: Optional[str] = None


@dataclass(frozen=True)
class GatewayVerification:
    """Outcome of verifying a transaction by reference."""
    reference: str
    status: str
    amount: Optional[Decimal] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_successful(self) -> bool:
        return self.status == 'success'


class PaymentGateway(ABC):
    """Capability used by the payment workflow to talk to a payment provider."""

    @abstractmethod
    def initialize_transaction(
        self,
        email: str,
        amount: Decimal,
        metadata: Dict[str, Any],
        callback_url: Optional[str] = None,
    ) -> GatewayTransaction:
        ...

    @abstractmethod
    def verify_transaction(self, reference: str) -> GatewayVerification:
        ...

    @abstractmethod
    def verify_signature(self, raw_body: bytes, signature: Optional[str]) -> bool:
        ...
