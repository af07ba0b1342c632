"""Core app views.

Contains:
- health / api_index / api_not_found: service endpoints
- LoginView, RefreshView, ProfileView, VerifyView, LogoutView: auth
- AdminUserListCreateView, AdminUserDetailView: back-office accounts
"""

import logging

from django.conf import settings
from django.db import connection
from django.http import JsonResponse
from django.utils import timezone

from rest_framework import generics, status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from rest_framework_simplejwt.tokens import RefreshToken

from wellness_backend.core.models import User
from wellness_backend.core.permissions import IsClinicAdmin
from wellness_backend.core.serializers import (
    AdminUserCreateSerializer,
    AdminUserUpdateSerializer,
    LoginSerializer,
    ProfileUpdateSerializer,
    RefreshSerializer,
    UserSerializer,
    issue_tokens,
)

logger = logging.getLogger(__name__)


def health(request):
    """Health check endpoint - no authentication required."""
    payload = {
        'status': 'OK',
        'timestamp': timezone.now().isoformat(),
        'environment': getattr(settings, 'ENVIRONMENT', 'development'),
    }
    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1;')
    except Exception as exc:
        logger.error('Health check failed: %s', exc)
        payload['status'] = 'error'
        payload['detail'] = str(exc)
        return JsonResponse(payload, status=503)

    return JsonResponse(payload)


def api_index(request):
    """GET /api/ - lists the endpoint groups."""
    return JsonResponse({
        'message': 'Detox Wellness API',
        'version': '1.0.0',
        'endpoints': {
            'auth': '/api/auth',
            'admin': '/api/admin',
            'appointments': '/api/appointments',
            'practitioners': '/api/practitioners',
            'services': '/api/services',
            'programs': '/api/programs',
            'testimonials': '/api/testimonials',
            'contact': '/api/contact',
            'notifications': '/api/notifications',
            'uploads': '/api/uploads',
        },
    })


def api_not_found(request, path=''):
    """JSON 404 for unknown /api/* routes."""
    return JsonResponse(
        {
            'error': 'API endpoint not found',
            'path': request.path,
            'method': request.method,
            'timestamp': timezone.now().isoformat(),
        },
        status=404,
    )


class LoginView(APIView):
    """Obtain JWT access and refresh tokens.

    POST /api/auth/login/
    Body: {"email": "...", "password": "..."}
    Returns: {"message", "token", "access", "refresh", "user": {...}}
    """

    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = LoginSerializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)

        user = serializer.validated_data['user']
        tokens = issue_tokens(user)
        logger.info('Login: user_id=%s role=%s', user.id, user.role_name)

        return Response(
            {
                'message': 'Login successful',
                'token': tokens['access'],
                'access': tokens['access'],
                'refresh': tokens['refresh'],
                'user': UserSerializer(user).data,
            },
            status=status.HTTP_200_OK,
        )


class RefreshView(APIView):
    """Refresh JWT access token.

    POST /api/auth/refresh/
    Body: {"refresh": "..."}
    Returns: {"access": "..."}
    """

    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = RefreshSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        refresh = RefreshToken(serializer.validated_data['refresh'])
        return Response({'access': str(refresh.access_token)}, status=status.HTTP_200_OK)


class ProfileView(APIView):
    """GET/PUT /api/auth/profile/ - the current user's own account."""

    permission_classes = [IsAuthenticated]

    def get(self, request, *args, **kwargs):
        return Response({'user': UserSerializer(request.user).data})

    def put(self, request, *args, **kwargs):
        serializer = ProfileUpdateSerializer(data=request.data, context={'user': request.user})
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response(
            {'message': 'Profile updated successfully', 'user': UserSerializer(user).data},
            status=status.HTTP_200_OK,
        )

    patch = put


class VerifyView(APIView):
    """GET /api/auth/verify/ - 200 while the bearer token is valid."""

    permission_classes = [IsAuthenticated]

    def get(self, request, *args, **kwargs):
        return Response({'valid': True, 'user': UserSerializer(request.user).data})


class LogoutView(APIView):
    """POST /api/auth/logout/ - tokens are stateless; the client discards them."""

    permission_classes = [IsAuthenticated]

    def post(self, request, *args, **kwargs):
        logger.info('Logout: user_id=%s', request.user.id)
        return Response({'message': 'Logout successful'})


class AdminUserListCreateView(generics.ListCreateAPIView):
    """GET/POST /api/admin/users/"""

    permission_classes = [IsClinicAdmin]

    def get_queryset(self):
        return User.objects.using('default').select_related('role').order_by('-date_joined')

    def get_serializer_class(self):
        if self.request.method == 'POST':
            return AdminUserCreateSerializer
        return UserSerializer

    def create(self, request, *args, **kwargs):
        write_serializer = self.get_serializer(data=request.data)
        write_serializer.is_valid(raise_exception=True)
        user = write_serializer.save()
        logger.info('Admin user created: id=%s by user_id=%s', user.id, request.user.id)
        return Response(
            {'message': 'User created successfully', 'user': UserSerializer(user).data},
            status=status.HTTP_201_CREATED,
        )


class AdminUserDetailView(generics.RetrieveUpdateDestroyAPIView):
    """GET/PUT/PATCH/DELETE /api/admin/users/<id>/"""

    permission_classes = [IsClinicAdmin]
    not_found_message = 'User not found'

    def get_queryset(self):
        return User.objects.using('default').select_related('role')

    def get_serializer_class(self):
        if self.request.method in ('PUT', 'PATCH'):
            return AdminUserUpdateSerializer
        return UserSerializer

    def update(self, request, *args, **kwargs):
        # PUT behaves like PATCH: omitted fields keep their values
        user = self.get_object()
        write_serializer = AdminUserUpdateSerializer(
            user,
            data=request.data,
            partial=True,
            context={'request': request},
        )
        write_serializer.is_valid(raise_exception=True)
        updated = write_serializer.save()
        return Response(
            {'message': 'User updated successfully', 'user': UserSerializer(updated).data},
            status=status.HTTP_200_OK,
        )

    def destroy(self, request, *args, **kwargs):
        user = self.get_object()
        if user.pk == request.user.pk:
            return Response(
                {'error': 'Cannot delete your own account'},
                status=status.HTTP_400_BAD_REQUEST,
            )
        user.delete()
        logger.info('Admin user deleted: id=%s by user_id=%s', kwargs.get('pk'), request.user.id)
        return Response({'message': 'User deleted successfully'}, status=status.HTTP_200_OK)
