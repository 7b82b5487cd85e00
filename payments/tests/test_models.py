import pytest

from payments.models import Subscription

pytestmark = pytest.mark.django_db


def test_status_choices_cover_every_status_constant():
    constants = {
        value for name, value in vars(Subscription).items()
        if name.startswith('STATUS_') and isinstance(value, str)
    }

    assert {key for key, _ in Subscription.STATUS_CHOICES} == constants


def test_activate_marks_subscription_paid(pending_subscription):
    assert not pending_subscription.is_active

    pending_subscription.activate()
    pending_subscription.refresh_from_db()

    assert pending_subscription.status == Subscription.STATUS_ACTIVE
    assert pending_subscription.is_active
