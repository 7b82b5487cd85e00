# config/exceptions.py - Centralized API error responses
"""
Project-wide error rendering.

Views raise DRF exceptions (or let unexpected ones escape); this module turns
them into the single JSON error shape the frontend understands:

    {"success": false, "message": "..."}

Validation failures additionally carry the field ``errors``.
"""

import logging

from django.http import JsonResponse
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class PaymentGatewayError(APIException):
    """Razorpay rejected or failed a call"""

    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = 'Payment gateway request failed'
    default_code = 'payment_gateway_error'


def _message_from_detail(detail):
    """Flatten a DRF error detail into one human readable line"""
    if isinstance(detail, dict):
        if 'detail' in detail:
            return str(detail['detail'])
        return 'Invalid request data'
    if isinstance(detail, list):
        return str(detail[0]) if detail else 'Invalid request data'
    return str(detail)


def api_exception_handler(exc, context):
    """
    DRF EXCEPTION_HANDLER

    Args:
        exc: Exception raised while handling the request
        context: DRF handler context (view, request, ...)

    Returns:
        Response with the standard error body
    """
    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.error(
            f"Unhandled error in {view.__class__.__name__ if view else 'view'}: {str(exc)}",
            exc_info=exc,
        )
        return Response({
            'success': False,
            'message': 'Internal server error'
        }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    body = {
        'success': False,
        'message': _message_from_detail(response.data),
    }
    if isinstance(exc, ValidationError):
        body['errors'] = response.data

    if response.status_code == status.HTTP_401_UNAUTHORIZED:
        logger.warning(f"Unauthorized request: {body['message']}")

    response.data = body
    return response


def not_found(request, exception=None):
    """handler404 - unknown paths answer with the API error shape"""
    return JsonResponse({
        'success': False,
        'message': f'Cannot {request.method} {request.path}'
    }, status=status.HTTP_404_NOT_FOUND)


def server_error(request):
    """handler500"""
    return JsonResponse({
        'success': False,
        'message': 'Internal server error'
    }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
