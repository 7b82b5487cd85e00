from rest_framework import serializers
from .models import Subscription


class SubscriptionSerializer(serializers.ModelSerializer):
    """Serializer for Subscription model"""

    is_active = serializers.ReadOnlyField()

    class Meta:
        model = Subscription
        fields = [
            'id', 'razorpay_subscription_id', 'plan_id', 'status',
            'is_active', 'created_at', 'updated_at'
        ]
        read_only_fields = fields


class PaymentVerificationSerializer(serializers.Serializer):
    """Checkout handler payload posted back after a subscription payment"""

    razorpay_payment_id = serializers.CharField(max_length=100)
    razorpay_subscription_id = serializers.CharField(max_length=100)
    razorpay_signature = serializers.CharField(max_length=200)
