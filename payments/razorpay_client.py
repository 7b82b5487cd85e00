import razorpay
from razorpay.errors import SignatureVerificationError
from django.conf import settings
import logging

logger = logging.getLogger(__name__)


class RazorpayClient:
    """Razorpay client wrapper for recurring subscriptions"""

    def __init__(self):
        self.client = razorpay.Client(auth=(
            settings.RAZORPAY_KEY_ID,
            settings.RAZORPAY_KEY_SECRET
        ))
        self.plan_id = settings.RAZORPAY_SETTINGS['PLAN_ID']
        self.total_count = settings.RAZORPAY_SETTINGS['TOTAL_COUNT']
        self.customer_notify = settings.RAZORPAY_SETTINGS['CUSTOMER_NOTIFY']

    @property
    def key_id(self):
        """Public key the checkout frontend initializes with"""
        return self.client.auth[0]

    def create_subscription(self, user_id, notes=None):
        """
        Create Razorpay subscription on the configured plan

        Args:
            user_id: User ID, logged and kept in the notes
            notes: Additional notes for the subscription

        Returns:
            dict: {'success': True, 'subscription': {...}} or {'success': False, 'error': str}
        """
        try:
            subscription_data = {
                'plan_id': self.plan_id,
                'customer_notify': self.customer_notify,
                'total_count': self.total_count,
                'notes': notes or {}
            }

            subscription = self.client.subscription.create(data=subscription_data)

            logger.info(f"Razorpay subscription created: {subscription['id']} for user {user_id}")

            return {
                'success': True,
                'subscription': subscription
            }

        except Exception as e:
            logger.error(f"Failed to create Razorpay subscription for user {user_id}: {str(e)}")
            return {
                'success': False,
                'error': str(e)
            }

    def verify_subscription_signature(self, razorpay_subscription_id, razorpay_payment_id, razorpay_signature):
        """
        Verify the checkout signature of a subscription payment

        The SDK signs ``payment_id|subscription_id`` with the key secret.

        Returns:
            bool: True if signature is valid, False otherwise
        """
        try:
            self.client.utility.verify_subscription_payment_signature({
                'razorpay_subscription_id': razorpay_subscription_id,
                'razorpay_payment_id': razorpay_payment_id,
                'razorpay_signature': razorpay_signature,
            })
        except SignatureVerificationError:
            logger.warning(f"Invalid payment signature for payment {razorpay_payment_id}")
            return False

        logger.info(f"Payment signature verified for payment {razorpay_payment_id}")
        return True

    def cancel_subscription(self, subscription_id):
        """
        Cancel a Razorpay subscription immediately

        Returns:
            dict: Cancel response from Razorpay
        """
        try:
            subscription = self.client.subscription.cancel(subscription_id)

            logger.info(f"Razorpay subscription cancelled: {subscription_id}")

            return {
                'success': True,
                'subscription': subscription
            }

        except Exception as e:
            logger.error(f"Failed to cancel subscription {subscription_id}: {str(e)}")
            return {
                'success': False,
                'error': str(e)
            }

    def refund_payment(self, payment_id, amount=None, notes=None):
        """
        Refund a payment

        Args:
            payment_id: Razorpay payment ID to refund
            amount: Amount to refund in paise (None for full refund)
            notes: Additional notes for the refund

        Returns:
            dict: Refund response from Razorpay
        """
        try:
            refund_data = {}

            if amount:
                refund_data['amount'] = amount

            if notes:
                refund_data['notes'] = notes

            refund = self.client.payment.refund(payment_id, refund_data)

            logger.info(f"Payment refunded: {payment_id}")

            return {
                'success': True,
                'refund': refund
            }

        except Exception as e:
            logger.error(f"Failed to refund payment {payment_id}: {str(e)}")
            return {
                'success': False,
                'error': str(e)
            }


# Global client instance
razorpay_client = RazorpayClient()
