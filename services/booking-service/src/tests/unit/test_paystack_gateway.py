# services/booking-service/src/tests/unit/test_paystack_gateway.py
"""
Unit Tests for the Paystack gateway client
"""

import json
from decimal import Decimal

import httpx
import pytest

from apps.core.exceptions import PaymentGatewayError, PaymentGatewayTimeout
from apps.core.integrations.paystack import PaystackGateway, compute_signature, to_subunit

SECRET = 'sk_test_unit'


def make_gateway(handler):
    return PaystackGateway(
        secret_key=SECRET,
        base_url='https://api.paystack.test',
        transport=httpx.MockTransport(handler),
    )


class TestHelpers:

    @pytest.mark.parametrize('amount, expected', [
        (Decimal('150.00'), 15000),
        (Decimal('0.01'), 1),
        (Decimal('19.995'), 2000),
        (Decimal('1'), 100),
    ])
    def test_to_subunit(self, amount, expected):
        assert to_subunit(amount) == expected

    def test_compute_signature_is_sha512_hex(self):
        signature = compute_signature(SECRET, b'{}')
        assert len(signature) == 128
        assert signature == compute_signature(SECRET, b'{}')
        assert signature != compute_signature('other', b'{}')


class TestInitializeTransaction:

    def test_sends_amount_in_kobo_with_bearer_auth(self):
        captured = {}

        def handler(request):
            captured['auth'] = request.headers['Authorization']
            captured['path'] = request.url.path
            captured['body'] = json.loads(request.content)
            return httpx.Response(200, json={
                'status': True,
                'message': 'Authorization URL created',
                'data': {
                    'authorization_url': 'https://checkout.paystack.com/abc',
                    'access_code': 'abc',
                    'reference': 'ref_abc',
                },
            })

        transaction = make_gateway(handler).initialize_transaction(
            email='payer@example.com',
            amount=Decimal('150.00'),
            metadata={'booking_id': 'b-1', 'service_name': 'Massage'},
            callback_url='https://app.test/cb',
        )

        assert captured['auth'] == f'Bearer {SECRET}'
        assert captured['path'] == '/transaction/initialize'
        assert captured['body'] == {
            'email': 'payer@example.com',
            'amount': 15000,
            'metadata': {'booking_id': 'b-1', 'service_name': 'Massage'},
            'callback_url': 'https://app.test/cb',
        }
        assert transaction.reference == 'ref_abc'
        assert transaction.authorization_url == 'https://checkout.paystack.com/abc'
        assert transaction.access_code == 'abc'

    def test_error_status_raises_gateway_error(self):
        def handler(request):
            return httpx.Response(401, json={'status': False, 'message': 'Invalid key'})

        with pytest.raises(PaymentGatewayError) as exc_info:
            make_gateway(handler).initialize_transaction('a@b.co', Decimal('10'), {})

        assert 'Invalid key' in str(exc_info.value.detail)

    def test_status_false_raises_gateway_error(self):
        def handler(request):
            return httpx.Response(200, json={'status': False, 'message': 'Duplicate reference'})

        with pytest.raises(PaymentGatewayError):
            make_gateway(handler).initialize_transaction('a@b.co', Decimal('10'), {})

    def test_timeout_is_retryable(self):
        def handler(request):
            raise httpx.ReadTimeout('timed out', request=request)

        with pytest.raises(PaymentGatewayTimeout) as exc_info:
            make_gateway(handler).initialize_transaction('a@b.co', Decimal('10'), {})

        assert exc_info.value.extra_data == {'retryable': True}

    def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError('refused', request=request)

        with pytest.raises(PaymentGatewayError):
            make_gateway(handler).initialize_transaction('a@b.co', Decimal('10'), {})

    def test_invalid_json(self):
        def handler(request):
            return httpx.Response(200, content=b'<html>')

        with pytest.raises(PaymentGatewayError):
            make_gateway(handler).initialize_transaction('a@b.co', Decimal('10'), {})


    @pytest.mark.parametrize('payload', [[1, 2], 'ok', {'status': True, 'data': ['x']}])
    def test_unexpected_body_shape(self, payload):
        def handler(request):
            return httpx.Response(200, json=payload)

        with pytest.raises(PaymentGatewayError):
            make_gateway(handler).initialize_transaction('a@b.co', Decimal('10'), {})

    def test_error_body_that_is_not_an_object(self):
        def handler(request):
            return httpx.Response(400, json=['bad'])

        with pytest.raises(PaymentGatewayError):
            make_gateway(handler).initialize_transaction('a@b.co', Decimal('10'), {})


class TestVerifyTransaction:

    def test_reference_is_encoded_into_one_path_segment(self):
        seen = []

        def handler(request):
            seen.append(request.url.raw_path)
            return httpx.Response(200, json={
                'status': True,
                'data': {'reference': 'ref/../bank', 'status': 'failed'},
            })

        make_gateway(handler).verify_transaction('ref/../bank')

        assert seen == [b'/transaction/verify/ref%2F..%2Fbank']

    def test_parses_verification(self):
        def handler(request):
            assert request.method == 'GET'
            assert request.url.path == '/transaction/verify/ref_abc'
            return httpx.Response(200, json={
                'status': True,
                'data': {
                    'reference': 'ref_abc',
                    'status': 'success',
                    'amount': 15000,
                    'metadata': {'booking_id': 'b-1'},
                },
            })

        verification = make_gateway(handler).verify_transaction('ref_abc')

        assert verification.is_successful
        assert verification.amount == Decimal('150')
        assert verification.metadata == {'booking_id': 'b-1'}

    def test_string_metadata_is_decoded(self):
        def handler(request):
            return httpx.Response(200, json={
                'status': True,
                'data': {'reference': 'ref_abc', 'status': 'failed', 'metadata': '{"bookingId": "b-2"}'},
            })

        verification = make_gateway(handler).verify_transaction('ref_abc')

        assert not verification.is_successful
        assert verification.metadata == {'bookingId': 'b-2'}


class TestVerifySignature:

    def test_valid_signature(self):
        body = b'{"event": "charge.success"}'
        gateway = PaystackGateway(secret_key=SECRET, base_url='https://api.paystack.test')

        assert gateway.verify_signature(body, compute_signature(SECRET, body))

    @pytest.mark.parametrize('signature', [None, '', 'abc123'])
    def test_invalid_signature(self, signature):
        gateway = PaystackGateway(secret_key=SECRET, base_url='https://api.paystack.test')
        assert not gateway.verify_signature(b'{}', signature)

    def test_missing_secret_rejects_everything(self):
        gateway = PaystackGateway(secret_key='', base_url='https://api.paystack.test')
        assert not gateway.verify_signature(b'{}', compute_signature('', b'{}'))
