# services/booking-service/src/tests/conftest.py
"""
Pytest Configuration and Fixtures

Provides common fixtures for booking platform tests.
"""

import hmac
import uuid
from decimal import Decimal

import pytest
from django.conf import settings
from django.core.cache import cache
from rest_framework.test import APIClient

from apps.core.integrations import GatewayTransaction, GatewayVerification, PaymentGateway
from apps.core.integrations.paystack import compute_signature
from apps.core.models import Booking, Payment, Service, User
from shared.common.authentication import JWTTokenGenerator
from shared.common.cache import set_token_blacklist
from shared.common.constants import UserRole


class FakeGateway(PaymentGateway):
    """In-memory gateway: every initialized transaction verifies as successful."""

    def __init__(self):
        self.initialized = []
        self.verifications = {}

    def initialize_transaction(self, email, amount, metadata, callback_url=None):
        reference = f"ref_{uuid.uuid4().hex[:12]}"
        self.initialized.append({
            'email': email,
            'amount': amount,
            'metadata': metadata,
            'callback_url': callback_url,
            'reference': reference,
        })
        self.verifications[reference] = GatewayVerification(
            reference=reference,
            status='success',
            amount=amount,
            metadata=dict(metadata),
        )
        return GatewayTransaction(
            authorization_url=f"https://checkout.paystack.test/{reference}",
            reference=reference,
        )

    def verify_transaction(self, reference):
        return self.verifications.get(
            reference,
            GatewayVerification(reference=reference, status='failed'),
        )

    def verify_signature(self, raw_body, signature):
        if not signature:
            return False
        expected = compute_signature(settings.PAYSTACK_SECRET_KEY, raw_body)
        return hmac.compare_digest(expected, signature)


@pytest.fixture(autouse=True)
def reset_token_blacklist():
    """Each test starts with an empty cache and a fresh blacklist."""
    cache.clear()
    set_token_blacklist(None)
    yield
    set_token_blacklist(None)


@pytest.fixture
def api_client():
    """Provide API client for testing."""
    return APIClient()


@pytest.fixture
def fake_gateway(monkeypatch):
    """Route PaymentService to an in-memory gateway."""
    gateway = FakeGateway()
    monkeypatch.setattr(
        'apps.core.services.payment_service.get_payment_gateway',
        lambda: gateway,
    )
    return gateway


@pytest.fixture
def sign_webhook():
    """Sign a webhook body the way Paystack does."""
    def _sign(body: bytes) -> str:
        return compute_signature(settings.PAYSTACK_SECRET_KEY, body)
    return _sign


@pytest.fixture
def create_user(db):
    """Factory fixture for creating users."""
    def _create_user(email=None, name='Test User', password='password123', role=UserRole.USER.value, **kwargs):
        return User.objects.create_user(
            email=email or f"user-{uuid.uuid4().hex[:8]}@example.com",
            name=name,
            password=password,
            role=role,
            **kwargs
        )
    return _create_user


@pytest.fixture
def create_admin(create_user):
    """Factory fixture for creating administrators."""
    def _create_admin(role=UserRole.ADMIN.value, **kwargs):
        kwargs.setdefault('name', 'Admin User')
        return create_user(role=role, **kwargs)
    return _create_admin


@pytest.fixture
def create_service(db):
    """Factory fixture for creating catalog services."""
    def _create_service(name=None, description='A bookable service', service_type='consulting'):
        return Service.objects.create(
            name=name or f"Service {uuid.uuid4().hex[:6]}",
            description=description,
            service_type=service_type,
        )
    return _create_service


@pytest.fixture
def create_booking(create_user, create_service):
    """Factory fixture for creating bookings."""
    def _create_booking(user=None, service=None, status=Booking.Status.PENDING, price=None, admin=None):
        return Booking.objects.create(
            user=user or create_user(),
            service=service or create_service(),
            status=status,
            price=price,
            admin=admin,
        )
    return _create_booking


@pytest.fixture
def accepted_booking(create_booking, create_admin):
    """An accepted, priced booking ready for payment."""
    return create_booking(
        status=Booking.Status.ACCEPTED,
        price=Decimal('150.00'),
        admin=create_admin(),
    )


@pytest.fixture
def create_payment(db):
    """Factory fixture for creating payments."""
    def _create_payment(booking, reference=None, status=Payment.Status.PENDING, amount=None):
        return Payment.objects.create(
            booking=booking,
            amount=amount or booking.price or Decimal('100.00'),
            reference=reference or f"ref_{uuid.uuid4().hex[:12]}",
            status=status,
        )
    return _create_payment


@pytest.fixture
def token_for():
    """Issue an access token for a user."""
    def _token_for(user):
        return JWTTokenGenerator.generate_access_token(
            user_id=user.id,
            email=user.email,
            role=user.role,
        )
    return _token_for


@pytest.fixture
def client_for(token_for):
    """Build an API client authenticated as the given user."""
    def _client_for(user):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {token_for(user)}")
        return client
    return _client_for
