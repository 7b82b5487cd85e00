from django.db import models
from django.conf import settings


class Subscription(models.Model):
    """Razorpay subscription reference held by a user"""

    # Razorpay subscription lifecycle states
    STATUS_CREATED = 'created'
    STATUS_AUTHENTICATED = 'authenticated'
    STATUS_ACTIVE = 'active'
    STATUS_PENDING = 'pending'
    STATUS_HALTED = 'halted'
    STATUS_CANCELLED = 'cancelled'
    STATUS_COMPLETED = 'completed'
    STATUS_EXPIRED = 'expired'
    STATUS_CHOICES = [
        (STATUS_CREATED, 'Created'),
        (STATUS_AUTHENTICATED, 'Authenticated'),
        (STATUS_ACTIVE, 'Active'),
        (STATUS_PENDING, 'Pending'),
        (STATUS_HALTED, 'Halted'),
        (STATUS_CANCELLED, 'Cancelled'),
        (STATUS_COMPLETED, 'Completed'),
        (STATUS_EXPIRED, 'Expired'),
    ]

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='subscription'
    )
    razorpay_subscription_id = models.CharField(max_length=100, unique=True)
    plan_id = models.CharField(max_length=100)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_CREATED)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'subscriptions'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status'], name='subscriptions_status_idx'),
        ]

    def __str__(self):
        return f"Subscription {self.razorpay_subscription_id} - {self.user.username} - {self.status}"

    @property
    def is_active(self):
        return self.status == self.STATUS_ACTIVE

    def activate(self):
        """Mark the subscription paid"""
        self.status = self.STATUS_ACTIVE
        self.save(update_fields=['status', 'updated_at'])


class Payment(models.Model):
    """Verified Razorpay subscription payment"""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='payments'
    )
    razorpay_payment_id = models.CharField(max_length=100, unique=True)
    razorpay_subscription_id = models.CharField(max_length=100)
    razorpay_signature = models.CharField(max_length=200)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'payments'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['razorpay_subscription_id'], name='payments_subscription_idx'),
            models.Index(fields=['user', '-created_at'], name='payments_user_created_idx'),
        ]

    def __str__(self):
        return f"Payment {self.razorpay_payment_id} - {self.user.username}"
