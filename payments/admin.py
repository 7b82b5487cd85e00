from django.contrib import admin
from django.utils.html import format_html
from django.urls import reverse
from .models import Payment, Subscription


def _user_link(obj):
    """Create clickable link to user"""
    url = reverse('admin:authentication_user_change', args=[obj.user.pk])
    return format_html('<a href="{}">{}</a>', url, obj.user.username)


@admin.register(Subscription)
class SubscriptionAdmin(admin.ModelAdmin):
    """Admin interface for Subscription model"""

    list_display = [
        'razorpay_subscription_id', 'user_link', 'plan_id',
        'status', 'created_at'
    ]
    list_filter = ['status', 'plan_id', 'created_at']
    search_fields = ['user__username', 'user__email', 'razorpay_subscription_id']
    readonly_fields = ['razorpay_subscription_id', 'plan_id', 'created_at', 'updated_at']
    list_per_page = 25
    ordering = ['-created_at']

    def user_link(self, obj):
        return _user_link(obj)
    user_link.short_description = 'User'
    user_link.admin_order_field = 'user__username'

    def has_add_permission(self, request):
        """Subscriptions only come from Razorpay"""
        return False


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    """Admin interface for Payment model"""

    list_display = [
        'razorpay_payment_id', 'user_link', 'razorpay_subscription_id', 'created_at'
    ]
    list_filter = ['created_at']
    search_fields = [
        'user__username', 'user__email', 'razorpay_payment_id',
        'razorpay_subscription_id'
    ]
    readonly_fields = [
        'user', 'razorpay_payment_id', 'razorpay_subscription_id',
        'razorpay_signature', 'created_at'
    ]
    list_per_page = 25
    ordering = ['-created_at']

    def user_link(self, obj):
        return _user_link(obj)
    user_link.short_description = 'User'
    user_link.admin_order_field = 'user__username'

    def has_add_permission(self, request):
        """Disable manual payment creation"""
        return False
