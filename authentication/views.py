# authentication/views.py - Login endpoints issuing the JWT the auth gate checks

from django.conf import settings
from django.middleware.csrf import get_token
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, authentication_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from rest_framework_simplejwt.tokens import RefreshToken
import logging

from .serializers import UserRegistrationSerializer, UserSerializer
from .models import User

logger = logging.getLogger(__name__)


def _token_response(request, user, message, status_code):
    """Build the tokens + user body and drop the access token into the auth cookie"""
    refresh = RefreshToken.for_user(user)
    access_token = str(refresh.access_token)

    response = Response({
        'success': True,
        'message': message,
        'tokens': {
            'access': access_token,
            'refresh': str(refresh),
        },
        'user': UserSerializer(user).data,
        # Cookie sessions send this back as X-CSRFToken on unsafe requests
        'csrf_token': get_token(request),
    }, status=status_code)

    response.set_cookie(
        settings.AUTH_COOKIE_NAME,
        access_token,
        max_age=settings.AUTH_COOKIE_MAX_AGE,
        httponly=True,
        secure=not settings.DEBUG,
        samesite='None' if not settings.DEBUG else 'Lax',
    )
    return response


@api_view(['POST'])
@authentication_classes([])
@permission_classes([])
def register_user(request):
    """
    Create an account and log it in

    Args:
        request: POST request with email, username, full_name, password, confirm_password

    Returns:
        Response with tokens and user data
    """
    serializer = UserRegistrationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    user = serializer.save()
    logger.info(f"User registered: {user.username}")

    return _token_response(request, user, 'Account created successfully!', status.HTTP_201_CREATED)


@api_view(['POST'])
@authentication_classes([])
@permission_classes([])
def login_user(request):
    """
    Handle user login with JWT token generation

    Args:
        request: POST request with email and password

    Returns:
        Response with success status, tokens, and user data
    """
    email = request.data.get('email', '').strip().lower()
    password = request.data.get('password', '')

    if not email or not password:
        return Response({
            'success': False,
            'message': 'Email and password are required'
        }, status=status.HTTP_400_BAD_REQUEST)

    user = User.objects.filter(email=email).first()

    if user is None or not user.is_active or not user.check_password(password):
        logger.warning(f"Failed login attempt for {email}")
        return Response({
            'success': False,
            'message': 'Invalid email or password'
        }, status=status.HTTP_401_UNAUTHORIZED)

    return _token_response(request, user, 'Login successful!', status.HTTP_200_OK)


@api_view(['POST'])
@authentication_classes([])
@permission_classes([])
def logout_user(request):
    """Clear the auth cookie"""
    response = Response({
        'success': True,
        'message': 'Logged out successfully'
    }, status=status.HTTP_200_OK)
    response.delete_cookie(settings.AUTH_COOKIE_NAME)
    return response


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def current_user(request):
    """
    Get current authenticated user with its subscription reference
    """
    return Response({
        'success': True,
        'user': UserSerializer(request.user).data
    })
