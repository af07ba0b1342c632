"""Notification endpoints.

Every authenticated back-office user reads and manages their own
notifications; admins can broadcast system notifications.
"""

import logging
from datetime import timedelta

from django.db.models import Count
from django.shortcuts import get_object_or_404
from django.utils import timezone

from rest_framework import status
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from wellness_backend.core.models import User
from wellness_backend.core.permissions import IsClinicAdmin
from wellness_backend.core.utils import parse_bool, parse_int

from .models import Notification
from .serializers import NotificationSerializer, SystemNotificationSerializer
from .utils import admin_users

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20


def _own_notification(request, pk) -> Notification:
    notification = get_object_or_404(Notification.objects.using('default'), pk=pk)
    if notification.user_id != request.user.pk:
        raise PermissionDenied('Access denied')
    return notification


class NotificationListView(APIView):
    """GET /api/notifications/?limit=&offset=&unread_only="""

    permission_classes = [IsAuthenticated]

    def get(self, request, *args, **kwargs):
        limit = parse_int(request.query_params.get('limit'), DEFAULT_PAGE_SIZE, minimum=1, maximum=100)
        offset = parse_int(request.query_params.get('offset'), 0, minimum=0)
        unread_only = parse_bool(request.query_params.get('unread_only'), False)

        own = Notification.objects.using('default').filter(user=request.user)
        qs = own.filter(read=False) if unread_only else own

        total = qs.count()
        page = list(qs[offset:offset + limit])
        return Response({
            'notifications': NotificationSerializer(page, many=True).data,
            'unread_count': own.filter(read=False).count(),
            'total_count': total,
            'has_more': offset + limit < total,
        })


class UnreadCountView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, *args, **kwargs):
        count = Notification.objects.using('default').filter(user=request.user, read=False).count()
        return Response({'unread_count': count})


class MarkReadView(APIView):
    """PUT /api/notifications/<id>/read/"""

    permission_classes = [IsAuthenticated]
    not_found_message = 'Notification not found'

    def put(self, request, pk, *args, **kwargs):
        notification = _own_notification(request, pk)
        if not notification.read:
            notification.read = True
            notification.read_at = timezone.now()
            notification.save(update_fields=['read', 'read_at'])
        return Response({
            'message': 'Notification marked as read',
            'notification': NotificationSerializer(notification).data,
        })

    patch = put


class MarkAllReadView(APIView):
    """PUT /api/notifications/mark-all-read/"""

    permission_classes = [IsAuthenticated]

    def put(self, request, *args, **kwargs):
        updated = Notification.objects.using('default').filter(
            user=request.user,
            read=False,
        ).update(read=True, read_at=timezone.now())
        return Response({'message': f'{updated} notifications marked as read', 'updated_count': updated})

    patch = put


class NotificationDeleteView(APIView):
    """DELETE /api/notifications/<id>/"""

    permission_classes = [IsAuthenticated]
    not_found_message = 'Notification not found'

    def delete(self, request, pk, *args, **kwargs):
        notification = _own_notification(request, pk)
        notification.delete()
        return Response({'message': 'Notification deleted successfully'})


class ClearReadView(APIView):
    """DELETE /api/notifications/clear-read/"""

    permission_classes = [IsAuthenticated]

    def delete(self, request, *args, **kwargs):
        deleted, _ = Notification.objects.using('default').filter(user=request.user, read=True).delete()
        return Response({'message': f'{deleted} read notifications cleared', 'deleted_count': deleted})


class SystemNotificationView(APIView):
    """POST /api/notifications/system/ - broadcast (admin)."""

    permission_classes = [IsClinicAdmin]

    def post(self, request, *args, **kwargs):
        serializer = SystemNotificationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        if data.get('send_to_all'):
            recipients = list(User.objects.using('default').filter(is_active=True))
        else:
            recipients = list(User.objects.using('default').filter(pk__in=data['target_user_ids'], is_active=True))

        rows = [
            Notification(
                user=user,
                title=data['title'],
                message=data['message'],
                type=data['type'],
                related_type='SYSTEM',
            )
            for user in recipients
        ]
        Notification.objects.using('default').bulk_create(rows)
        logger.info('System notification "%s" sent to %s users by user_id=%s', data['title'], len(rows), request.user.id)

        return Response(
            {
                'message': f'System notification sent to {len(rows)} users',
                'notification_count': len(rows),
            },
            status=status.HTTP_201_CREATED,
        )


class NotificationStatsView(APIView):
    """GET /api/notifications/admin/stats/"""

    permission_classes = [IsClinicAdmin]

    def get(self, request, *args, **kwargs):
        qs = Notification.objects.using('default')
        week_ago = timezone.now() - timedelta(days=7)
        by_type = {
            row['type']: row['count']
            for row in qs.values('type').annotate(count=Count('id')).order_by()
        }
        return Response({
            'total_notifications': qs.count(),
            'unread_notifications': qs.filter(read=False).count(),
            'recent_notifications': qs.filter(created_at__gte=week_ago).count(),
            'notifications_by_type': by_type,
            'admin_recipients': admin_users().count(),
        })
