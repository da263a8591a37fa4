# services/booking-service/src/apps/core/integrations/paystack.py
"""
Paystack gateway client.

Hosted checkout (``/transaction/initialize``), verification
(``/transaction/verify/<reference>``) and webhook signature checks.
Amounts are sent in kobo.
"""

import hashlib
import hmac
import json
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx
from django.conf import settings

from apps.core.exceptions import PaymentGatewayError, PaymentGatewayTimeout

from .base import GatewayTransaction, GatewayVerification, PaymentGateway

logger = logging.getLogger(__name__)


def compute_signature(secret: str, raw_body: bytes) -> str:
    """HMAC-SHA512 hex digest Paystack sends in ``X-Paystack-Signature``."""
    return hmac.new(secret.encode('utf-8'), raw_body, hashlib.sha512).hexdigest()


def to_subunit(amount: Decimal) -> int:
    """Naira to kobo."""
    return int((Decimal(amount) * 100).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


class PaystackGateway(PaymentGateway):
    """
    Paystack REST client over httpx.

    ``transport`` lets tests plug in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        secret_key: str = None,
        base_url: str = None,
        timeout: float = None,
        transport: httpx.BaseTransport = None,
    ):
        self.secret_key = secret_key if secret_key is not None else settings.PAYSTACK_SECRET_KEY
        self.base_url = (base_url or settings.PAYSTACK_BASE_URL).rstrip('/')
        read_timeout = timeout or getattr(settings, 'PAYSTACK_TIMEOUT_SECONDS', 10.0)
        self.timeout = httpx.Timeout(read_timeout, connect=5.0)
        self.transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self.transport,
            headers={
                'Authorization': f'Bearer {self.secret_key}',
                'Content-Type': 'application/json',
            },
        )

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        try:
            with self._client() as client:
                response = client.request(method, path, **kwargs)
                response.raise_for_status()
                body = response.json()
        except httpx.TimeoutException as e:
            logger.warning(f"Paystack request timed out: {method} {path}", extra={'error': str(e)})
            raise PaymentGatewayTimeout()
        except httpx.HTTPStatusError as e:
            message = self._error_message(e.response)
            logger.error(
                f"Paystack returned {e.response.status_code} for {method} {path}",
                extra={'status_code': e.response.status_code, 'gateway_message': message}
            )
            raise PaymentGatewayError(f"Payment gateway error: {message}")
        except httpx.HTTPError as e:
            logger.error(f"Paystack request failed: {method} {path}", extra={'error': str(e)})
            raise PaymentGatewayError()
        except ValueError:
            raise PaymentGatewayError('Payment gateway returned an invalid response.')

        if not isinstance(body, dict):
            raise PaymentGatewayError('Payment gateway returned an invalid response.')

        if not body.get('status'):
            raise PaymentGatewayError(f"Payment gateway error: {body.get('message', 'unknown error')}")

        data = body.get('data') or {}
        if not isinstance(data, dict):
            raise PaymentGatewayError('Payment gateway returned an invalid response.')
        return data

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.reason_phrase
        if isinstance(body, dict):
            return body.get('message', response.reason_phrase)
        return response.reason_phrase

    def initialize_transaction(
        self,
        email: str,
        amount: Decimal,
        metadata: Dict[str, Any],
        callback_url: Optional[str] = None,
    ) -> GatewayTransaction:
        payload = {
            'email': email,
            'amount': to_subunit(amount),
            'metadata': metadata,
        }
        callback_url = callback_url or settings.PAYSTACK_CALLBACK_URL
        if callback_url:
            payload['callback_url'] = callback_url

        data = self._request('POST', '/transaction/initialize', json=payload)

        if not data.get('authorization_url') or not data.get('reference'):
            raise PaymentGatewayError('Payment gateway returned an incomplete transaction.')

        logger.info(
            "Initialized Paystack transaction",
            extra={'reference': data['reference'], 'amount': str(amount)}
        )

        return GatewayTransaction(
            authorization_url=data['authorization_url'],
            reference=data['reference'],
            access_code=data.get('access_code'),
        )

    def verify_transaction(self, reference: str) -> GatewayVerification:
        path = '/transaction/verify/' + quote(reference, safe='')
        data = self._request('GET', path)

        metadata = data.get('metadata') or {}
        if isinstance(metadata, str):
            try:
                metadata = json.loads(metadata)
            except ValueError:
                metadata = {}

        amount = data.get('amount')
        return GatewayVerification(
            reference=data.get('reference', reference),
            status=data.get('status', ''),
            amount=Decimal(amount) / 100 if amount is not None else None,
            metadata=metadata if isinstance(metadata, dict) else {},
            raw=data,
        )

    def verify_signature(self, raw_body: bytes, signature: Optional[str]) -> bool:
        if not signature or not self.secret_key:
            return False
        expected = compute_signature(self.secret_key, raw_body)
        return hmac.compare_digest(expected, signature)
