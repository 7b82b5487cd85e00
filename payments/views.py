from rest_framework import status
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
from django.db import transaction
import logging

from config.exceptions import PaymentGatewayError
from .models import Payment, Subscription
from .serializers import PaymentVerificationSerializer
from .razorpay_client import razorpay_client
from .payment_utils import (
    create_subscription_notes, check_user_subscription_eligibility,
    is_within_refund_window, get_cancellation_message,
    get_payment_redirect_url, get_payment_success_data
)

logger = logging.getLogger(__name__)

# Controllers below are bound to URLs by payments.routing; the auth gate has
# already run when they are called.


def _get_subscription_or_404(user, message='No active subscription found'):
    subscription = Subscription.objects.filter(user=user).first()
    if subscription is None:
        raise NotFound(message)
    return subscription


def buy_subscription(request):
    """
    Start a Razorpay subscription for the caller

    Args:
        request: authenticated GET request

    Returns:
        Response 201 with the Razorpay subscription id for the checkout
    """
    user = request.user

    is_eligible, message = check_user_subscription_eligibility(user)
    if not is_eligible:
        return Response({
            'success': False,
            'message': message
        }, status=status.HTTP_400_BAD_REQUEST)

    subscription_response = razorpay_client.create_subscription(
        user_id=user.id,
        notes=create_subscription_notes(user)
    )

    if not subscription_response['success']:
        raise PaymentGatewayError('Failed to create subscription')

    razorpay_subscription = subscription_response['subscription']

    # A user holds one reference; an unpaid earlier attempt is replaced
    Subscription.objects.update_or_create(
        user=user,
        defaults={
            'razorpay_subscription_id': razorpay_subscription['id'],
            'plan_id': razorpay_subscription.get('plan_id', razorpay_client.plan_id),
            'status': razorpay_subscription.get('status', Subscription.STATUS_CREATED),
        }
    )

    logger.info(f"Subscription {razorpay_subscription['id']} created for user {user.username}")

    return Response({
        'success': True,
        'subscription_id': razorpay_subscription['id']
    }, status=status.HTTP_201_CREATED)


def payment_verification(request):
    """
    Verify the checkout signature and activate the caller's subscription

    Args:
        request: authenticated POST request with razorpay_payment_id,
            razorpay_subscription_id and razorpay_signature

    Returns:
        Response 200 with the updated subscription, or 400 with the failure redirect
    """
    user = request.user

    serializer = PaymentVerificationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    razorpay_payment_id = serializer.validated_data['razorpay_payment_id']
    razorpay_subscription_id = serializer.validated_data['razorpay_subscription_id']
    razorpay_signature = serializer.validated_data['razorpay_signature']

    subscription = _get_subscription_or_404(user, 'No subscription found')

    # The signature is checked against the id we issued, not the posted one
    is_authentic = (
        razorpay_subscription_id == subscription.razorpay_subscription_id
        and razorpay_client.verify_subscription_signature(
            subscription.razorpay_subscription_id, razorpay_payment_id, razorpay_signature
        )
    )

    if not is_authentic:
        logger.warning(f"Payment verification failed for user {user.username}")
        return Response({
            'success': False,
            'message': 'Invalid payment signature',
            'redirect_url': get_payment_redirect_url(False)
        }, status=status.HTTP_400_BAD_REQUEST)

    with transaction.atomic():
        payment, _ = Payment.objects.get_or_create(
            razorpay_payment_id=razorpay_payment_id,
            defaults={
                'user': user,
                'razorpay_subscription_id': subscription.razorpay_subscription_id,
                'razorpay_signature': razorpay_signature,
            }
        )
        subscription.activate()

    logger.info(f"Payment {razorpay_payment_id} verified, subscription active for user {user.username}")

    return Response(get_payment_success_data(payment, subscription), status=status.HTTP_200_OK)


def get_razorpay_key(request):
    """
    Public Razorpay key for client-side checkout initialization
    """
    return Response({
        'success': True,
        'key': razorpay_client.key_id
    }, status=status.HTTP_200_OK)


def cancel_subscription(request):
    """
    Cancel the caller's subscription, refunding payments inside the refund window

    Args:
        request: authenticated DELETE request

    Returns:
        Response 200 with the cancellation message, 404 without a subscription
    """
    user = request.user
    subscription = _get_subscription_or_404(user)
    subscription_id = subscription.razorpay_subscription_id

    cancel_response = razorpay_client.cancel_subscription(subscription_id)
    if not cancel_response['success']:
        raise PaymentGatewayError('Failed to cancel subscription')

    payments = Payment.objects.filter(razorpay_subscription_id=subscription_id)
    # Refund window runs from the first payment of the subscription
    payment = payments.order_by('created_at').first()

    refund_requested = None
    refund_succeeded = False

    if payment is not None:
        refund_requested = is_within_refund_window(payment)
        if refund_requested:
            refund_response = razorpay_client.refund_payment(payment.razorpay_payment_id)
            refund_succeeded = refund_response['success']

    with transaction.atomic():
        payments.delete()
        subscription.delete()

    logger.info(f"Subscription {subscription_id} cancelled for user {user.username} (refund: {refund_succeeded})")

    return Response({
        'success': True,
        'message': get_cancellation_message(refund_requested, refund_succeeded),
        'refund': refund_succeeded
    }, status=status.HTTP_200_OK)
