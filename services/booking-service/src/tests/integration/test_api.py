# services/booking-service/src/tests/integration/test_api.py
"""
Integration Tests for the Booking Platform API

Tests API endpoints with full request/response cycle.
"""

import json
import uuid
from decimal import Decimal

import pytest
from rest_framework import status
from rest_framework.test import APIClient

from apps.core.exceptions import PaymentGatewayTimeout
from apps.core.models import Booking, Feedback, Notification, Payment
from shared.common.constants import UserRole


@pytest.mark.django_db
class TestHealthAPI:

    def test_health(self):
        response = APIClient().get('/health/')

        assert response.status_code == status.HTTP_200_OK
        assert response.json()['status'] == 'healthy'
        assert response['X-Request-ID']

    def test_request_id_is_echoed(self):
        response = APIClient().get('/health/', HTTP_X_REQUEST_ID='trace-123')

        assert response['X-Request-ID'] == 'trace-123'


@pytest.mark.django_db
class TestAuthAPI:
    """Integration tests for registration, login and logout."""

    def setup_method(self):
        self.client = APIClient()

    def test_register_and_login(self):
        response = self.client.post('/api/v1/users/register/', {
            'email': 'alice@example.com',
            'name': 'Alice',
            'password': 'password123',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['role'] == UserRole.USER.value
        assert 'password' not in response.data

        response = self.client.post('/api/v1/users/login/', {
            'email': 'alice@example.com',
            'password': 'password123',
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['token_type'] == 'Bearer'
        assert response.data['user']['email'] == 'alice@example.com'

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access_token']}")
        me = self.client.get('/api/v1/users/me/')
        assert me.status_code == status.HTTP_200_OK
        assert me.data['name'] == 'Alice'

    def test_register_duplicate_email(self, create_user):
        create_user(email='taken@example.com')

        response = self.client.post('/api/v1/users/register/', {
            'email': 'taken@example.com',
            'name': 'Again',
            'password': 'password123',
        }, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['error']['code'] == 'EMAIL_EXISTS'

    def test_register_short_password(self):
        response = self.client.post('/api/v1/users/register/', {
            'email': 'short@example.com',
            'name': 'Short',
            'password': 'abc',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'password' in response.data['error']['details']

    def test_login_bad_credentials(self, create_user):
        create_user(email='bob@example.com', password='password123')

        response = self.client.post('/api/v1/users/login/', {
            'email': 'bob@example.com',
            'password': 'nope-nope',
        }, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['success'] is False
        assert response.data['error']['code'] == 'INVALID_CREDENTIALS'

    def test_logout_revokes_token(self, create_user, token_for):
        user = create_user()
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token_for(user)}")

        assert self.client.post('/api/v1/users/logout/').status_code == status.HTTP_200_OK

        response = self.client.get('/api/v1/users/me/')
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_unauthenticated_request(self):
        response = self.client.get('/api/v1/bookings/')
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestUserAPI:

    def test_users_list_requires_admin(self, create_user, create_admin, client_for):
        create_user()

        assert client_for(create_user()).get('/api/v1/users/').status_code == status.HTTP_403_FORBIDDEN

        response = client_for(create_admin()).get('/api/v1/users/')
        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] >= 3

    def test_user_cannot_read_another_user(self, create_user, client_for):
        other = create_user()

        response = client_for(create_user()).get(f'/api/v1/users/{other.id}/')
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_update_own_profile(self, create_user, client_for):
        user = create_user()

        response = client_for(user).patch(f'/api/v1/users/{user.id}/', {'name': 'Renamed'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['name'] == 'Renamed'

    def test_only_super_admin_sets_roles(self, create_user, create_admin, client_for):
        target = create_user()
        url = f'/api/v1/users/{target.id}/role/'

        response = client_for(create_admin()).post(url, {'role': 'ADMIN'}, format='json')
        assert response.status_code == status.HTTP_403_FORBIDDEN

        super_admin = create_admin(role=UserRole.SUPER_ADMIN.value)
        response = client_for(super_admin).post(url, {'role': 'ADMIN'}, format='json')
        assert response.status_code == status.HTTP_200_OK
        assert response.data['role'] == 'ADMIN'


@pytest.mark.django_db
class TestServiceAPI:
    """Integration tests for the service catalog."""

    def test_anonymous_can_browse(self, create_service):
        create_service(name='Massage')

        response = APIClient().get('/api/v1/services/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['results'][0]['name'] == 'Massage'

    def test_only_admin_creates(self, create_user, create_admin, client_for):
        payload = {'name': 'Haircut', 'description': 'Wash and cut', 'service_type': 'beauty'}

        response = client_for(create_user()).post('/api/v1/services/', payload, format='json')
        assert response.status_code == status.HTTP_403_FORBIDDEN

        admin_client = client_for(create_admin())
        response = admin_client.post('/api/v1/services/', payload, format='json')
        assert response.status_code == status.HTTP_201_CREATED

        response = admin_client.post('/api/v1/services/', payload, format='json')
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['error']['code'] == 'DUPLICATE_SERVICE'

    def test_deleted_service_is_not_found(self, create_service, create_admin, client_for):
        item = create_service()
        admin_client = client_for(create_admin())

        assert admin_client.delete(f'/api/v1/services/{item.id}/').status_code == status.HTTP_204_NO_CONTENT
        assert admin_client.get(f'/api/v1/services/{item.id}/').status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestBookingAPI:
    """Integration tests for booking endpoints."""

    def test_create_booking(self, create_user, create_service, client_for, django_capture_on_commit_callbacks):
        user = create_user()
        item = create_service()

        with django_capture_on_commit_callbacks(execute=True):
            response = client_for(user).post('/api/v1/bookings/', {'service_id': str(item.id)}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == Booking.Status.PENDING
        assert response.data['user_id'] == str(user.id)
        assert response.data['admin_id'] is None
        assert response.data['price'] is None

        notification = Notification.objects.get(user=user)
        assert notification.message == 'Your booking has been created and is pending approval'

    def test_create_booking_unknown_service(self, create_user, client_for):
        response = client_for(create_user()).post(
            '/api/v1/bookings/', {'service_id': str(uuid.uuid4())}, format='json'
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error']['code'] == 'SERVICE_NOT_FOUND'

    def test_user_cannot_book_for_someone_else(self, create_user, create_service, client_for):
        response = client_for(create_user()).post('/api/v1/bookings/', {
            'user_id': str(create_user().id),
            'service_id': str(create_service().id),
        }, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_list_is_scoped_to_caller(self, create_user, create_admin, create_booking, client_for):
        user = create_user()
        create_booking(user=user)
        create_booking()

        response = client_for(user).get('/api/v1/bookings/')
        assert response.data['count'] == 1

        response = client_for(create_admin()).get('/api/v1/bookings/')
        assert response.data['count'] == 2

    def test_filter_by_status(self, create_admin, create_booking, client_for):
        create_booking(status=Booking.Status.REJECTED)
        create_booking()

        response = client_for(create_admin()).get('/api/v1/bookings/', {'status': 'REJECTED'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1

    def test_retrieve_other_users_booking_forbidden(self, create_user, create_booking, client_for):
        booking = create_booking()

        response = client_for(create_user()).get(f'/api/v1/bookings/{booking.id}/')
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_admin_approves(self, create_admin, create_booking, client_for, django_capture_on_commit_callbacks):
        booking = create_booking()
        admin = create_admin()

        with django_capture_on_commit_callbacks(execute=True):
            response = client_for(admin).post(f'/api/v1/bookings/{booking.id}/approve/', format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == Booking.Status.ACCEPTED
        assert response.data['admin_id'] == str(admin.id)
        assert Notification.objects.filter(
            user=booking.user, message='Your booking has been approved'
        ).exists()

    def test_regular_user_cannot_approve(self, create_user, create_booking, client_for):
        booking = create_booking()

        response = client_for(create_user()).post(f'/api/v1/bookings/{booking.id}/approve/', format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        booking.refresh_from_db()
        assert booking.status == Booking.Status.PENDING

    def test_approve_on_behalf_of_non_admin(self, create_user, create_admin, create_booking, client_for):
        booking = create_booking()

        response = client_for(create_admin()).post(
            f'/api/v1/bookings/{booking.id}/reject/', {'admin_id': str(create_user().id)}, format='json'
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['error']['code'] == 'INVALID_ADMIN'
        booking.refresh_from_db()
        assert booking.status == Booking.Status.PENDING

    def test_assign_price(self, create_admin, create_booking, client_for):
        booking = create_booking()

        response = client_for(create_admin()).post(
            f'/api/v1/bookings/{booking.id}/price/', {'price': 250.5}, format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert Decimal(response.data['price']) == Decimal('250.50')

    def test_demoted_admin_token_cannot_price_or_delete(self, create_admin, create_booking, client_for):
        booking = create_booking()
        admin = create_admin()
        client = client_for(admin)
        admin.role = UserRole.USER.value
        admin.save(update_fields=['role'])

        response = client.post(f'/api/v1/bookings/{booking.id}/price/', {'price': 99}, format='json')
        assert response.status_code == status.HTTP_403_FORBIDDEN

        response = client.delete(f'/api/v1/bookings/{booking.id}/')
        assert response.status_code == status.HTTP_403_FORBIDDEN

        booking.refresh_from_db()
        assert booking.price is None
        assert not booking.is_deleted

    @pytest.mark.parametrize('price', [0, -10, 'free'])
    def test_assign_invalid_price(self, create_admin, create_booking, client_for, price):
        booking = create_booking()

        response = client_for(create_admin()).post(
            f'/api/v1/bookings/{booking.id}/price/', {'price': price}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error']['code'] == 'INVALID_PRICE'

    def test_owner_cannot_change_status(self, create_user, create_booking, client_for):
        user = create_user()
        booking = create_booking(user=user)

        response = client_for(user).patch(
            f'/api/v1/bookings/{booking.id}/', {'status': 'ACCEPTED'}, format='json'
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_owner_changes_service_while_pending(self, create_user, create_service, create_booking, client_for):
        user = create_user()
        booking = create_booking(user=user)
        other = create_service(name='Other')

        response = client_for(user).patch(
            f'/api/v1/bookings/{booking.id}/', {'service_id': str(other.id)}, format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['service_id'] == str(other.id)

    def test_owner_cannot_change_service_after_decision(self, create_service, accepted_booking, client_for):
        original_service_id = accepted_booking.service_id
        expensive = create_service(name='Expensive')

        response = client_for(accepted_booking.user).patch(
            f'/api/v1/bookings/{accepted_booking.id}/', {'service_id': str(expensive.id)}, format='json'
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        accepted_booking.refresh_from_db()
        assert accepted_booking.service_id == original_service_id

    def test_owner_cannot_change_paid_booking(self, create_user, create_service, create_booking,
                                              create_payment, client_for):
        user = create_user()
        booking = create_booking(user=user)
        create_payment(booking)

        response = client_for(user).patch(
            f'/api/v1/bookings/{booking.id}/', {'service_id': str(create_service().id)}, format='json'
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_admin_update_validation_errors(self, create_admin, create_booking, client_for):
        booking = create_booking()

        response = client_for(create_admin()).patch(f'/api/v1/bookings/{booking.id}/', {
            'status': 'ARCHIVED',
            'service_id': str(uuid.uuid4()),
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert set(response.data['error']['details']) == {'status', 'service_id'}

    def test_deleted_booking_is_gone(self, create_admin, create_booking, client_for):
        booking = create_booking()
        admin_client = client_for(create_admin())

        response = admin_client.delete(f'/api/v1/bookings/{booking.id}/')
        assert response.status_code == status.HTTP_204_NO_CONTENT

        assert admin_client.get(f'/api/v1/bookings/{booking.id}/').status_code == status.HTTP_404_NOT_FOUND
        response = admin_client.post(f'/api/v1/bookings/{booking.id}/approve/', format='json')
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert admin_client.get('/api/v1/bookings/').data['count'] == 0
        assert Booking.objects.filter(pk=booking.pk, is_deleted=True).exists()


@pytest.mark.django_db
class TestPaymentAPI:
    """Integration tests for the payment workflow."""

    def test_full_payment_flow_via_webhook(
        self, create_user, create_admin, create_service, client_for, fake_gateway, sign_webhook,
        django_capture_on_commit_callbacks,
    ):
        user = create_user()
        user_client = client_for(user)
        admin_client = client_for(create_admin())

        booking_id = user_client.post(
            '/api/v1/bookings/', {'service_id': str(create_service().id)}, format='json'
        ).data['id']
        admin_client.post(f'/api/v1/bookings/{booking_id}/approve/', format='json')
        admin_client.post(f'/api/v1/bookings/{booking_id}/price/', {'price': '1000'}, format='json')

        response = user_client.post('/api/v1/payments/initialize/', {'booking_id': booking_id}, format='json')
        assert response.status_code == status.HTTP_201_CREATED
        reference = response.data['reference']
        assert response.data['authorization_url']
        assert fake_gateway.initialized[0]['amount'] == Decimal('1000.00')

        body = json.dumps({'event': 'charge.success', 'data': {'reference': reference}}).encode()
        with django_capture_on_commit_callbacks(execute=True):
            response = APIClient().post(
                '/api/v1/payments/webhook/',
                data=body,
                content_type='application/json',
                HTTP_X_PAYSTACK_SIGNATURE=sign_webhook(body),
            )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['processed'] is True

        payment = Payment.objects.get(reference=reference)
        assert payment.status == Payment.Status.SUCCESS
        assert payment.paid_at is not None
        assert Booking.objects.get(pk=booking_id).status == Booking.Status.ACCEPTED
        assert Notification.objects.filter(user=user, type=Notification.Type.PAYMENT).count() == 1

        detail = user_client.get(f'/api/v1/bookings/{booking_id}/')
        assert detail.data['has_payment'] is True

    def test_webhook_bad_signature(self, accepted_booking, create_payment, fake_gateway):
        payment = create_payment(accepted_booking, reference='ref_webhook')
        body = json.dumps({'event': 'charge.success', 'data': {'reference': 'ref_webhook'}}).encode()

        response = APIClient().post(
            '/api/v1/payments/webhook/',
            data=body,
            content_type='application/json',
            HTTP_X_PAYSTACK_SIGNATURE='0' * 128,
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['error']['code'] == 'INVALID_SIGNATURE'
        payment.refresh_from_db()
        assert payment.status == Payment.Status.PENDING

    def test_webhook_ignores_other_events(self, fake_gateway, sign_webhook):
        body = json.dumps({'event': 'refund.processed', 'data': {}}).encode()

        response = APIClient().post(
            '/api/v1/payments/webhook/',
            data=body,
            content_type='application/json',
            HTTP_X_PAYSTACK_SIGNATURE=sign_webhook(body),
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'received': True, 'processed': False}

    def test_confirm_endpoint(self, accepted_booking, client_for, fake_gateway):
        user_client = client_for(accepted_booking.user)
        reference = user_client.post(
            '/api/v1/payments/initialize/', {'booking_id': str(accepted_booking.id)}, format='json'
        ).data['reference']

        response = APIClient().post('/api/v1/payments/confirm/', {'reference': reference}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == Payment.Status.SUCCESS

        again = APIClient().post('/api/v1/payments/confirm/', {'reference': reference}, format='json')
        assert again.status_code == status.HTTP_200_OK
        assert again.data['paid_at'] == response.data['paid_at']

    def test_initialize_pending_booking(self, create_booking, client_for, fake_gateway):
        booking = create_booking()

        response = client_for(booking.user).post(
            '/api/v1/payments/initialize/', {'booking_id': str(booking.id)}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error']['code'] == 'BOOKING_NOT_ACCEPTED'

    def test_initialize_twice(self, accepted_booking, client_for, fake_gateway):
        user_client = client_for(accepted_booking.user)
        payload = {'booking_id': str(accepted_booking.id)}

        assert user_client.post('/api/v1/payments/initialize/', payload, format='json').status_code == 201

        response = user_client.post('/api/v1/payments/initialize/', payload, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error']['code'] == 'PAYMENT_ALREADY_EXISTS'

    def test_cannot_pay_for_someone_elses_booking(self, accepted_booking, create_user, client_for, fake_gateway):
        response = client_for(create_user()).post(
            '/api/v1/payments/initialize/', {'booking_id': str(accepted_booking.id)}, format='json'
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert fake_gateway.initialized == []

    def test_gateway_timeout_is_retryable(self, accepted_booking, client_for, fake_gateway, monkeypatch):
        def timeout(**kwargs):
            raise PaymentGatewayTimeout()

        monkeypatch.setattr(fake_gateway, 'initialize_transaction', timeout)

        response = client_for(accepted_booking.user).post(
            '/api/v1/payments/initialize/', {'booking_id': str(accepted_booking.id)}, format='json'
        )

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data['error']['code'] == 'PAYMENT_GATEWAY_TIMEOUT'
        assert response.data['error']['retryable'] is True
        assert not Payment.objects.exists()

    def test_payment_list_admin_only(self, accepted_booking, create_payment, create_admin, client_for):
        create_payment(accepted_booking)

        response = client_for(accepted_booking.user).get('/api/v1/payments/')
        assert response.status_code == status.HTTP_403_FORBIDDEN

        response = client_for(create_admin()).get('/api/v1/payments/', {'status': 'PENDING'})
        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1

    def test_deleted_admin_token_cannot_list_payments(self, accepted_booking, create_payment, create_admin,
                                                      client_for):
        create_payment(accepted_booking)
        admin = create_admin()
        client = client_for(admin)
        admin.soft_delete()

        response = client.get('/api/v1/payments/')
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_owner_reads_payment(self, accepted_booking, create_payment, create_user, client_for):
        payment = create_payment(accepted_booking)

        response = client_for(accepted_booking.user).get(f'/api/v1/payments/{payment.id}/')
        assert response.status_code == status.HTTP_200_OK
        assert response.data['booking_id'] == str(accepted_booking.id)

        response = client_for(create_user()).get(f'/api/v1/payments/{payment.id}/')
        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestFeedbackAndNotificationAPI:

    def test_submit_feedback(self, create_user, client_for):
        user = create_user()

        response = client_for(user).post('/api/v1/feedback/', {'message': 'Great', 'rating': 5}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['user_id'] == str(user.id)
        assert Feedback.objects.filter(user=user).count() == 1

    @pytest.mark.parametrize('rating', [-1, 6])
    def test_feedback_rating_out_of_range(self, create_user, client_for, rating):
        response = client_for(create_user()).post(
            '/api/v1/feedback/', {'message': 'Hmm', 'rating': rating}, format='json'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'rating' in response.data['error']['details']

    def test_notifications_are_private(self, create_user, client_for):
        owner, stranger = create_user(), create_user()
        notification = Notification.objects.create(
            user=owner, title='Booking Update', message='Your booking has been approved',
            type=Notification.Type.BOOKING,
        )

        assert client_for(stranger).get('/api/v1/notifications/').data['count'] == 0
        response = client_for(stranger).post(f'/api/v1/notifications/{notification.id}/read/')
        assert response.status_code == status.HTTP_404_NOT_FOUND

        owner_client = client_for(owner)
        assert owner_client.get('/api/v1/notifications/', {'is_read': 'false'}).data['count'] == 1

        response = owner_client.post(f'/api/v1/notifications/{notification.id}/read/')
        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_read'] is True
