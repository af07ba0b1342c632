"""Contact form (public) and inquiry management (admin)."""

import logging
from datetime import timedelta

from django.conf import settings
from django.db.models import Count, Q
from django.shortcuts import get_object_or_404
from django.utils import timezone

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from wellness_backend.core.mail import mail_enabled
from wellness_backend.core.permissions import IsClinicAdmin
from wellness_backend.core.utils import day_bounds, parse_date, parse_int
from wellness_backend.notifications.models import Notification
from wellness_backend.notifications.utils import notify_all_admins

from .emails import send_inquiry_emails, send_inquiry_reply
from .models import ContactInquiry
from .serializers import (
    ContactInquiryCreateSerializer,
    ContactInquirySerializer,
    ContactInquirySummarySerializer,
    InquiryReplySerializer,
    InquiryStatusSerializer,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50


def _get_inquiry(pk) -> ContactInquiry:
    return get_object_or_404(ContactInquiry.objects.using('default').select_related('replied_by'), pk=pk)


class ContactCreateView(APIView):
    """POST /api/contact/ - public contact form."""

    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = ContactInquiryCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        inquiry = serializer.save()
        logger.info('Contact inquiry %s received (%s)', inquiry.pk, inquiry.type)

        send_inquiry_emails(inquiry)
        try:
            notify_all_admins(
                'New contact inquiry',
                f'{inquiry.name} sent a {inquiry.get_type_display().lower()} inquiry.',
                type=Notification.TYPE_INFO,
                related_id=inquiry.pk,
                related_type='inquiry',
            )
        except Exception:
            logger.exception('Failed to notify admins about inquiry %s', inquiry.pk)

        return Response(
            {
                'message': 'Thank you for your inquiry. We will get back to you within 24 hours.',
                'inquiry': ContactInquirySummarySerializer(inquiry).data,
            },
            status=status.HTTP_201_CREATED,
        )


class ContactInfoView(APIView):
    """GET /api/contact/info/"""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):
        return Response(settings.CLINIC_INFO)


class InquiryListView(APIView):
    """GET /api/contact/admin/inquiries/?status=&type=&search=&date_start=&date_end=&limit=&offset="""

    permission_classes = [IsClinicAdmin]

    def get(self, request, *args, **kwargs):
        params = request.query_params
        qs = ContactInquiry.objects.using('default').select_related('replied_by')

        if params.get('status'):
            qs = qs.filter(status=params['status'].upper())
        if params.get('type'):
            qs = qs.filter(type=params['type'].upper())
        search = (params.get('search') or '').strip()
        if search:
            qs = qs.filter(
                Q(name__icontains=search)
                | Q(email__icontains=search)
                | Q(subject__icontains=search)
                | Q(message__icontains=search)
            )
        date_start = parse_date(params.get('date_start'))
        date_end = parse_date(params.get('date_end'))
        if date_start and date_end:
            qs = qs.filter(created_at__range=day_bounds(date_start, date_end))

        limit = parse_int(params.get('limit'), DEFAULT_PAGE_SIZE, minimum=1, maximum=200)
        offset = parse_int(params.get('offset'), 0, minimum=0)
        total = qs.count()
        page = list(qs[offset:offset + limit])
        return Response({
            'inquiries': ContactInquirySerializer(page, many=True).data,
            'total_count': total,
            'has_more': offset + limit < total,
        })


class InquiryDetailView(APIView):
    """GET (marks PENDING as READ) and DELETE /api/contact/admin/inquiries/<id>/"""

    permission_classes = [IsClinicAdmin]
    not_found_message = 'Inquiry not found'

    def get(self, request, pk, *args, **kwargs):
        inquiry = _get_inquiry(pk)
        if inquiry.status == ContactInquiry.STATUS_PENDING:
            inquiry.status = ContactInquiry.STATUS_READ
            inquiry.save(update_fields=['status', 'updated_at'])
        return Response(ContactInquirySerializer(inquiry).data)

    def delete(self, request, pk, *args, **kwargs):
        inquiry = _get_inquiry(pk)
        inquiry.delete()
        logger.info('Inquiry %s deleted by user_id=%s', pk, request.user.pk)
        return Response({'message': 'Inquiry deleted successfully'})


class InquiryStatusView(APIView):
    """PUT /api/contact/admin/inquiries/<id>/status/"""

    permission_classes = [IsClinicAdmin]
    not_found_message = 'Inquiry not found'

    def put(self, request, pk, *args, **kwargs):
        inquiry = _get_inquiry(pk)
        serializer = InquiryStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        inquiry.status = serializer.validated_data['status']
        if 'admin_notes' in serializer.validated_data:
            inquiry.admin_notes = serializer.validated_data['admin_notes']
        inquiry.save(update_fields=['status', 'admin_notes', 'updated_at'])
        return Response({
            'message': 'Inquiry status updated',
            'inquiry': ContactInquirySerializer(inquiry).data,
        })

    patch = put


class InquiryReplyView(APIView):
    """POST /api/contact/admin/inquiries/<id>/reply/ {message, send_email}"""

    permission_classes = [IsClinicAdmin]
    not_found_message = 'Inquiry not found'

    def post(self, request, pk, *args, **kwargs):
        inquiry = _get_inquiry(pk)
        serializer = InquiryReplySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        message = serializer.validated_data['message']

        inquiry.status = ContactInquiry.STATUS_RESOLVED
        inquiry.replied_at = timezone.now()
        inquiry.replied_by = request.user
        note = f'Reply ({inquiry.replied_at:%Y-%m-%d %H:%M}): {message}'
        inquiry.admin_notes = f'{inquiry.admin_notes}\n\n{note}'.strip()
        inquiry.save(update_fields=['status', 'replied_at', 'replied_by', 'admin_notes', 'updated_at'])

        email_sent = False
        if serializer.validated_data['send_email'] and mail_enabled():
            try:
                send_inquiry_reply(inquiry, message, replied_by=request.user)
                email_sent = True
            except Exception:
                logger.exception('Failed to send reply for inquiry %s', inquiry.pk)
                return Response(
                    {'error': 'Reply saved but failed to send email'},
                    status=status.HTTP_500_INTERNAL_SERVER_ERROR,
                )

        return Response({
            'message': 'Reply sent successfully' if email_sent else 'Reply saved successfully',
            'email_sent': email_sent,
            'inquiry': ContactInquirySerializer(inquiry).data,
        })


class InquiryStatsView(APIView):
    """GET /api/contact/admin/stats/"""

    permission_classes = [IsClinicAdmin]

    def get(self, request, *args, **kwargs):
        qs = ContactInquiry.objects.using('default')
        today = timezone.localdate()
        today_start, _ = day_bounds(today, today)
        week_start, _ = day_bounds(today - timedelta(days=today.weekday()), today)
        month_start, _ = day_bounds(today.replace(day=1), today)

        by_type = {row['type']: row['count'] for row in qs.values('type').annotate(count=Count('id')).order_by()}
        by_status = {row['status']: row['count'] for row in qs.values('status').annotate(count=Count('id')).order_by()}
        return Response({
            'total_inquiries': qs.count(),
            'pending_inquiries': qs.filter(status=ContactInquiry.STATUS_PENDING).count(),
            'today_inquiries': qs.filter(created_at__gte=today_start).count(),
            'week_inquiries': qs.filter(created_at__gte=week_start).count(),
            'month_inquiries': qs.filter(created_at__gte=month_start).count(),
            'inquiries_by_type': by_type,
            'inquiries_by_status': by_status,
        })
