# config/urls.py - Project URL configuration
from django.contrib import admin
from django.urls import path, include


# Main project URL configuration
urlpatterns = [
    # Django Admin Interface
    path('admin/', admin.site.urls),

    # Login / logout / current user
    path('api/v1/auth/', include('authentication.urls')),

    # Razorpay subscription routes
    path('api/v1/', include('payments.urls')),
]

# Unknown paths answer in the API error shape
handler404 = 'config.exceptions.not_found'
handler500 = 'config.exceptions.server_error'
