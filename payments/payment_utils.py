from django.utils import timezone
from django.conf import settings
from datetime import timedelta
from urllib.parse import urlencode
import logging

logger = logging.getLogger(__name__)


def get_refund_days():
    """Days after payment during which a cancellation is fully refunded"""
    return settings.RAZORPAY_SETTINGS['REFUND_DAYS']


def is_within_refund_window(payment_obj, now=None):
    """
    Check whether a payment is still refundable

    Args:
        payment_obj: Payment model instance
        now: Reference time (default: now)

    Returns:
        bool: True while the payment is younger than the refund window
    """
    if not now:
        now = timezone.now()

    return now - payment_obj.created_at < timedelta(days=get_refund_days())


def create_subscription_notes(user):
    """
    Create notes attached to the Razorpay subscription

    Args:
        user: User object

    Returns:
        dict: Notes for the subscription
    """
    return {
        'user_id': str(user.id),
        'username': user.username,
        'email': user.email,
    }


def check_user_subscription_eligibility(user):
    """
    Check if user may start a new subscription

    Args:
        user: User object

    Returns:
        tuple: (is_eligible, message)
    """
    if user.is_admin:
        return False, "Admin can't buy subscription"

    subscription = getattr(user, 'subscription', None)
    if subscription is not None and subscription.is_active:
        return False, "User already has an active subscription"

    return True, "User is eligible for subscription"


def get_payment_redirect_url(success, reference=None):
    """
    Frontend page the checkout should land on after verification

    Args:
        success: Whether the payment was verified
        reference: Razorpay payment ID shown on the success page

    Returns:
        str: Absolute frontend URL
    """
    base_url = settings.FRONTEND_URL.rstrip('/')

    if not success:
        return f"{base_url}/paymentfail"

    return f"{base_url}/paymentsuccess?{urlencode({'reference': reference})}"


def get_cancellation_message(refund_requested, refund_succeeded):
    """
    User facing cancellation message

    Args:
        refund_requested: Payment existed and was inside the refund window
        refund_succeeded: Razorpay accepted the refund

    Returns:
        str: Message for the cancellation response
    """
    refund_days = get_refund_days()

    if refund_requested is None:
        return "Subscription cancelled successfully"

    if refund_requested and refund_succeeded:
        return f"Subscription cancelled, You will receive full refund within {refund_days} days."

    if refund_requested:
        return "Subscription cancelled, refund could not be initiated. Please contact support."

    return f"Subscription cancelled, No refund initiated as subscription was cancelled after {refund_days} days."


def get_payment_success_data(payment_obj, subscription_obj):
    """
    Get payment verification success response data

    Args:
        payment_obj: Payment model instance
        subscription_obj: Subscription model instance

    Returns:
        dict: Success response data
    """
    from .serializers import SubscriptionSerializer

    return {
        'success': True,
        'message': 'Payment verified and subscription activated successfully',
        'reference': payment_obj.razorpay_payment_id,
        'subscription': SubscriptionSerializer(subscription_obj).data,
        'redirect_url': get_payment_redirect_url(True, payment_obj.razorpay_payment_id),
    }
