import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from authentication.models import User
from payments.models import Subscription


@pytest.fixture
def api_client():
    """Anonymous DRF test client"""
    return APIClient()


@pytest.fixture
def user(db):
    return User.objects.create_user(
        email='asha@example.com',
        username='asha',
        full_name='Asha Rao',
        password='Str0ng-pass-123',
    )


@pytest.fixture
def admin_account(db):
    return User.objects.create_user(
        email='ops@example.com',
        username='ops',
        full_name='Ops Admin',
        password='Str0ng-pass-123',
        role=User.ROLE_ADMIN,
    )


def _bearer_client(account):
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {AccessToken.for_user(account)}')
    return client


@pytest.fixture
def auth_client(user):
    """Client sending a valid bearer token for ``user``"""
    return _bearer_client(user)


@pytest.fixture
def admin_client_jwt(admin_account):
    return _bearer_client(admin_account)


@pytest.fixture
def pending_subscription(user):
    return Subscription.objects.create(
        user=user,
        razorpay_subscription_id='sub_pending123',
        plan_id='plan_test',
        status=Subscription.STATUS_CREATED,
    )
