# authentication/backends.py - JWT auth gate for HTTP requests
"""
JWT authentication for the REST API.

Browser checkouts keep the access token in the ``token`` cookie set at login,
API clients send ``Authorization: Bearer <token>``. The header wins when both
are present. A request without either stays anonymous and is rejected with
401 by ``IsAuthenticated`` before any controller runs.

The browser sends the cookie on its own, so cookie-authenticated unsafe
requests must also pass Django's CSRF check (``X-CSRFToken`` header matching
the ``csrftoken`` cookie issued at login).
"""

from django.conf import settings
from rest_framework import exceptions
from rest_framework.authentication import CSRFCheck
from rest_framework_simplejwt.authentication import JWTAuthentication
import logging

logger = logging.getLogger(__name__)


class CookieJWTAuthentication(JWTAuthentication):
    """
    simplejwt authentication that also accepts the access token cookie
    """

    def authenticate(self, request):
        """
        Resolve the caller from a bearer header or the auth cookie

        Returns:
            tuple: (user, validated_token) or None when no token was sent

        Raises:
            InvalidToken / AuthenticationFailed: bad, expired or inactive identity
            PermissionDenied: cookie identity on an unsafe request without a valid CSRF token
        """
        header = self.get_header(request)

        if header is not None:
            raw_token = self.get_raw_token(header)
            from_cookie = False
        else:
            raw_token = request.COOKIES.get(settings.AUTH_COOKIE_NAME) or None
            from_cookie = True

        if raw_token is None:
            return None

        validated_token = self.get_validated_token(raw_token)
        user = self.get_user(validated_token)

        if from_cookie:
            self.enforce_csrf(request)

        logger.debug(f"Authenticated request from user {user.username}")

        return user, validated_token

    def enforce_csrf(self, request):
        """
        Run Django's CSRF validation the way DRF's SessionAuthentication does
        """
        def dummy_get_response(request):  # pragma: no cover
            return None

        check = CSRFCheck(dummy_get_response)
        # populates request.META['CSRF_COOKIE'], which is used in process_view()
        check.process_request(request)
        reason = check.process_view(request, None, (), {})
        if reason:
            logger.warning(f"CSRF check failed for cookie-authenticated request: {reason}")
            raise exceptions.PermissionDenied(f'CSRF Failed: {reason}')
