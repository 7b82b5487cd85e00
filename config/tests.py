from rest_framework import status
from rest_framework.exceptions import NotAuthenticated, ValidationError

from config.exceptions import PaymentGatewayError, api_exception_handler


def test_unexpected_errors_become_internal_server_error():
    response = api_exception_handler(RuntimeError('database exploded'), {'view': None})

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.data == {'success': False, 'message': 'Internal server error'}


def test_api_errors_use_the_standard_shape():
    response = api_exception_handler(NotAuthenticated(), {'view': None})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.data == {
        'success': False,
        'message': 'Authentication credentials were not provided.'
    }


def test_validation_errors_keep_field_errors():
    response = api_exception_handler(ValidationError({'razorpay_signature': ['This field is required.']}), {})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.data['message'] == 'Invalid request data'
    assert response.data['errors'] == {'razorpay_signature': ['This field is required.']}


def test_gateway_errors_are_bad_gateway():
    response = api_exception_handler(PaymentGatewayError(), {})

    assert response.status_code == status.HTTP_502_BAD_GATEWAY
    assert response.data['message'] == 'Payment gateway request failed'
