"""Core App URLs - Authentication, Health & Admin users.

Prefix: /api/
Routes:
    GET  /api/health/             - Health check (no auth)
    POST /api/auth/login/         - JWT token obtain with user/role info
    POST /api/auth/refresh/       - JWT token refresh
    GET  /api/auth/profile/       - Current user info (requires auth)
    PUT  /api/auth/profile/       - Update own name/email/password
    GET  /api/auth/verify/        - Token check
    POST /api/auth/logout/        - Stateless logout
    GET  /api/admin/users/        - Admin accounts (admin)
    POST /api/admin/users/
    *    /api/admin/users/<id>/
"""

from django.urls import path

from wellness_backend.core.views import (
    AdminUserDetailView,
    AdminUserListCreateView,
    LoginView,
    LogoutView,
    ProfileView,
    RefreshView,
    VerifyView,
    health,
)

app_name = 'core'

urlpatterns = [
    path('health/', health, name='health'),

    # JWT Authentication
    path('auth/login/', LoginView.as_view(), name='login'),
    path('auth/refresh/', RefreshView.as_view(), name='refresh'),
    path('auth/profile/', ProfileView.as_view(), name='profile'),
    path('auth/verify/', VerifyView.as_view(), name='verify'),
    path('auth/logout/', LogoutView.as_view(), name='logout'),

    # Back-office accounts
    path('admin/users/', AdminUserListCreateView.as_view(), name='admin-users'),
    path('admin/users/<int:pk>/', AdminUserDetailView.as_view(), name='admin-user-detail'),
]
