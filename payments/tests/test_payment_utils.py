from datetime import timedelta
from types import SimpleNamespace

import pytest
from django.utils import timezone

from payments.payment_utils import (
    check_user_subscription_eligibility, get_cancellation_message,
    get_payment_redirect_url, is_within_refund_window
)
from payments.models import Subscription


def test_refund_window_boundaries():
    now = timezone.now()

    assert is_within_refund_window(SimpleNamespace(created_at=now - timedelta(days=6, hours=23)), now=now)
    assert not is_within_refund_window(SimpleNamespace(created_at=now - timedelta(days=7)), now=now)
    assert not is_within_refund_window(SimpleNamespace(created_at=now - timedelta(days=30)), now=now)


def test_redirect_urls(settings):
    settings.FRONTEND_URL = 'https://learn.example.com/'

    assert get_payment_redirect_url(False) == 'https://learn.example.com/paymentfail'
    assert get_payment_redirect_url(True, 'pay_9') == 'https://learn.example.com/paymentsuccess?reference=pay_9'


def test_cancellation_messages():
    assert get_cancellation_message(None, False) == 'Subscription cancelled successfully'
    assert get_cancellation_message(True, True) == (
        'Subscription cancelled, You will receive full refund within 7 days.'
    )
    assert get_cancellation_message(False, False) == (
        'Subscription cancelled, No refund initiated as subscription was cancelled after 7 days.'
    )
    assert 'contact support' in get_cancellation_message(True, False)


@pytest.mark.django_db
def test_eligibility(user, admin_account, pending_subscription):
    assert check_user_subscription_eligibility(admin_account) == (False, "Admin can't buy subscription")

    is_eligible, _ = check_user_subscription_eligibility(user)
    assert is_eligible

    pending_subscription.status = Subscription.STATUS_ACTIVE
    pending_subscription.save()
    user.refresh_from_db()

    is_eligible, message = check_user_subscription_eligibility(user)
    assert not is_eligible
    assert message == 'User already has an active subscription'
