"""Notification URLs.

Prefix: /api/notifications/
Routes:
    GET    /                  - own notifications (limit, offset, unread_only)
    GET    /unread-count/
    PUT    /mark-all-read/
    DELETE /clear-read/
    PUT    /<id>/read/
    DELETE /<id>/
    POST   /system/           - broadcast (admin)
    GET    /admin/stats/      - (admin)
"""

from django.urls import path

from .views import (
    ClearReadView,
    MarkAllReadView,
    MarkReadView,
    NotificationDeleteView,
    NotificationListView,
    NotificationStatsView,
    SystemNotificationView,
    UnreadCountView,
)

app_name = 'notifications'

urlpatterns = [
    path('', NotificationListView.as_view(), name='list'),
    path('unread-count/', UnreadCountView.as_view(), name='unread-count'),
    path('mark-all-read/', MarkAllReadView.as_view(), name='mark-all-read'),
    path('clear-read/', ClearReadView.as_view(), name='clear-read'),
    path('system/', SystemNotificationView.as_view(), name='system'),
    path('admin/stats/', NotificationStatsView.as_view(), name='admin-stats'),
    path('<int:pk>/read/', MarkReadView.as_view(), name='mark-read'),
    path('<int:pk>/', NotificationDeleteView.as_view(), name='delete'),
]
