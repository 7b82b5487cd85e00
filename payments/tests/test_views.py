from datetime import timedelta
from unittest.mock import patch

import pytest
from django.utils import timezone
from rest_framework import status

from payments.models import Payment, Subscription
from payments.razorpay_client import razorpay_client

pytestmark = pytest.mark.django_db

SUBSCRIBE_URL = '/api/v1/subscribe'
VERIFY_URL = '/api/v1/paymentverification'
KEY_URL = '/api/v1/razorpaykey'
CANCEL_URL = '/api/v1/subscribe/cancel'


def _created_subscription(subscription_id='sub_new456'):
    return {
        'success': True,
        'subscription': {
            'id': subscription_id,
            'entity': 'subscription',
            'plan_id': 'plan_test',
            'status': 'created',
        }
    }


def _verification_body(**overrides):
    body = {
        'razorpay_payment_id': 'pay_abc123',
        'razorpay_subscription_id': 'sub_pending123',
        'razorpay_signature': 'f' * 64,
    }
    body.update(overrides)
    return body


def _paid(subscription, days_ago=0):
    payment = Payment.objects.create(
        user=subscription.user,
        razorpay_payment_id='pay_abc123',
        razorpay_subscription_id=subscription.razorpay_subscription_id,
        razorpay_signature='f' * 64,
    )
    if days_ago:
        Payment.objects.filter(pk=payment.pk).update(
            created_at=timezone.now() - timedelta(days=days_ago)
        )
    subscription.activate()
    return payment


class TestBuySubscription:

    def test_creates_subscription_for_caller(self, auth_client, user):
        with patch.object(razorpay_client, 'create_subscription', return_value=_created_subscription()) as create:
            response = auth_client.get(SUBSCRIBE_URL)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json() == {'success': True, 'subscription_id': 'sub_new456'}

        create.assert_called_once()
        assert create.call_args.kwargs['user_id'] == user.id
        assert create.call_args.kwargs['notes']['email'] == user.email

        subscription = Subscription.objects.get(user=user)
        assert subscription.razorpay_subscription_id == 'sub_new456'
        assert subscription.status == 'created'
        assert subscription.plan_id == 'plan_test'

    def test_replaces_unpaid_subscription(self, auth_client, pending_subscription):
        with patch.object(razorpay_client, 'create_subscription', return_value=_created_subscription('sub_retry')):
            response = auth_client.get(SUBSCRIBE_URL)

        assert response.status_code == status.HTTP_201_CREATED
        assert Subscription.objects.filter(user=pending_subscription.user).count() == 1
        assert Subscription.objects.get(user=pending_subscription.user).razorpay_subscription_id == 'sub_retry'

    def test_admin_cannot_subscribe(self, admin_client_jwt):
        with patch.object(razorpay_client, 'create_subscription') as create:
            response = admin_client_jwt.get(SUBSCRIBE_URL)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()['message'] == "Admin can't buy subscription"
        create.assert_not_called()

    def test_active_subscriber_cannot_subscribe_again(self, auth_client, pending_subscription):
        _paid(pending_subscription)

        with patch.object(razorpay_client, 'create_subscription') as create:
            response = auth_client.get(SUBSCRIBE_URL)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        create.assert_not_called()

    def test_gateway_failure_is_bad_gateway(self, auth_client, user):
        failure = {'success': False, 'error': 'The id provided does not exist'}
        with patch.object(razorpay_client, 'create_subscription', return_value=failure):
            response = auth_client.get(SUBSCRIBE_URL)

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.json() == {'success': False, 'message': 'Failed to create subscription'}
        assert not Subscription.objects.filter(user=user).exists()


class TestPaymentVerification:

    def test_valid_signature_activates_subscription(self, auth_client, pending_subscription):
        with patch.object(razorpay_client, 'verify_subscription_signature', return_value=True) as verify:
            response = auth_client.post(VERIFY_URL, _verification_body(), format='json')

        assert response.status_code == status.HTTP_200_OK
        verify.assert_called_once_with('sub_pending123', 'pay_abc123', 'f' * 64)

        body = response.json()
        assert body['success'] is True
        assert body['reference'] == 'pay_abc123'
        assert body['subscription']['razorpay_subscription_id'] == 'sub_pending123'
        assert body['subscription']['status'] == 'active'
        assert body['subscription']['is_active'] is True
        assert body['redirect_url'] == 'http://frontend.test/paymentsuccess?reference=pay_abc123'

        pending_subscription.refresh_from_db()
        assert pending_subscription.status == Subscription.STATUS_ACTIVE
        payment = Payment.objects.get(razorpay_payment_id='pay_abc123')
        assert payment.user == pending_subscription.user
        assert payment.razorpay_subscription_id == 'sub_pending123'

    def test_invalid_signature_is_rejected(self, auth_client, pending_subscription):
        with patch.object(razorpay_client, 'verify_subscription_signature', return_value=False):
            response = auth_client.post(VERIFY_URL, _verification_body(), format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()['redirect_url'] == 'http://frontend.test/paymentfail'
        assert not Payment.objects.exists()
        pending_subscription.refresh_from_db()
        assert pending_subscription.status == Subscription.STATUS_CREATED

    def test_foreign_subscription_id_is_rejected_without_gateway_check(self, auth_client, pending_subscription):
        with patch.object(razorpay_client, 'verify_subscription_signature') as verify:
            response = auth_client.post(
                VERIFY_URL, _verification_body(razorpay_subscription_id='sub_someone_else'), format='json'
            )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        verify.assert_not_called()

    def test_missing_fields_fail_validation(self, auth_client, pending_subscription):
        response = auth_client.post(VERIFY_URL, {'razorpay_payment_id': 'pay_abc123'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body['success'] is False
        assert set(body['errors']) == {'razorpay_subscription_id', 'razorpay_signature'}

    def test_without_subscription_is_not_found(self, auth_client):
        with patch.object(razorpay_client, 'verify_subscription_signature') as verify:
            response = auth_client.post(VERIFY_URL, _verification_body(), format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {'success': False, 'message': 'No subscription found'}
        verify.assert_not_called()

    def test_repeated_verification_keeps_one_payment(self, auth_client, pending_subscription):
        with patch.object(razorpay_client, 'verify_subscription_signature', return_value=True):
            auth_client.post(VERIFY_URL, _verification_body(), format='json')
            response = auth_client.post(VERIFY_URL, _verification_body(), format='json')

        assert response.status_code == status.HTTP_200_OK
        assert Payment.objects.count() == 1

    def test_active_subscription_accepts_next_cycle_payment(self, auth_client, pending_subscription):
        _paid(pending_subscription)

        with patch.object(razorpay_client, 'verify_subscription_signature', return_value=True):
            response = auth_client.post(
                VERIFY_URL, _verification_body(razorpay_payment_id='pay_cycle2'), format='json'
            )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()['subscription']['status'] == 'active'
        assert Payment.objects.filter(razorpay_subscription_id='sub_pending123').count() == 2


class TestRazorpayKey:

    def test_returns_public_key(self, auth_client):
        response = auth_client.get(KEY_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {'success': True, 'key': 'rzp_test_key'}


class TestCancelSubscription:

    def test_without_subscription_is_not_found(self, auth_client):
        with patch.object(razorpay_client, 'cancel_subscription') as cancel:
            response = auth_client.delete(CANCEL_URL)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {'success': False, 'message': 'No active subscription found'}
        cancel.assert_not_called()

    def test_refunds_inside_refund_window(self, auth_client, pending_subscription):
        _paid(pending_subscription, days_ago=2)

        with patch.object(razorpay_client, 'cancel_subscription', return_value={'success': True}) as cancel, \
                patch.object(razorpay_client, 'refund_payment', return_value={'success': True}) as refund:
            response = auth_client.delete(CANCEL_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            'success': True,
            'message': 'Subscription cancelled, You will receive full refund within 7 days.',
            'refund': True,
        }
        cancel.assert_called_once_with('sub_pending123')
        refund.assert_called_once_with('pay_abc123')
        assert not Subscription.objects.exists()
        assert not Payment.objects.exists()

    def test_no_refund_after_refund_window(self, auth_client, pending_subscription):
        _paid(pending_subscription, days_ago=10)

        with patch.object(razorpay_client, 'cancel_subscription', return_value={'success': True}), \
                patch.object(razorpay_client, 'refund_payment') as refund:
            response = auth_client.delete(CANCEL_URL)

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body['refund'] is False
        assert body['message'] == (
            'Subscription cancelled, No refund initiated as subscription was cancelled after 7 days.'
        )
        refund.assert_not_called()
        assert not Subscription.objects.exists()

    def test_unpaid_subscription_is_cancelled_without_refund(self, auth_client, pending_subscription):
        with patch.object(razorpay_client, 'cancel_subscription', return_value={'success': True}), \
                patch.object(razorpay_client, 'refund_payment') as refund:
            response = auth_client.delete(CANCEL_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()['message'] == 'Subscription cancelled successfully'
        refund.assert_not_called()

    def test_failed_refund_is_reported(self, auth_client, pending_subscription):
        _paid(pending_subscription, days_ago=1)

        with patch.object(razorpay_client, 'cancel_subscription', return_value={'success': True}), \
                patch.object(razorpay_client, 'refund_payment', return_value={'success': False, 'error': 'boom'}):
            response = auth_client.delete(CANCEL_URL)

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body['refund'] is False
        assert 'contact support' in body['message']

    def test_gateway_failure_keeps_subscription(self, auth_client, pending_subscription):
        _paid(pending_subscription)

        with patch.object(razorpay_client, 'cancel_subscription', return_value={'success': False, 'error': 'down'}), \
                patch.object(razorpay_client, 'refund_payment') as refund:
            response = auth_client.delete(CANCEL_URL)

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.json()['message'] == 'Failed to cancel subscription'
        refund.assert_not_called()
        assert Subscription.objects.filter(pk=pending_subscription.pk).exists()
        assert Payment.objects.count() == 1
