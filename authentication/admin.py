from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User


class UserAdmin(BaseUserAdmin):
    """
    Admin for subscription accounts
    """
    list_display = ('email', 'username', 'full_name', 'role', 'is_active', 'date_joined')
    list_display_links = ('email', 'username')
    search_fields = ('email', 'username', 'full_name')
    list_filter = ('role', 'is_active', 'date_joined')

    # Show newest users first
    ordering = ('-date_joined',)

    fieldsets = (
        ('User Info', {
            'fields': ('email', 'username', 'full_name', 'role')
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser')
        }),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'username', 'full_name', 'role', 'password1', 'password2'),
        }),
    )
    filter_horizontal = ()


admin.site.register(User, UserAdmin)

admin.site.site_header = "Subscriptions Admin"
