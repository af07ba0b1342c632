"""Contact-form emails: admin alert, auto-reply and staff replies."""

import logging

from django.conf import settings

from wellness_backend.core.mail import mail_enabled, send_templated_mail

logger = logging.getLogger(__name__)


def send_inquiry_emails(inquiry) -> None:
    """Admin alert plus auto-reply. Failures are logged and swallowed."""
    if not mail_enabled():
        logger.info('Email not configured; skipping emails for inquiry %s', inquiry.pk)
        return
    context = {'inquiry': inquiry, 'clinic': settings.CLINIC_INFO}
    try:
        if settings.ADMIN_EMAIL:
            send_templated_mail(
                f'New contact inquiry: {inquiry.subject or inquiry.get_type_display()}',
                'inquiries/admin_notification.txt',
                context,
                [settings.ADMIN_EMAIL],
            )
        send_templated_mail(
            'We received your message',
            'inquiries/auto_reply.txt',
            context,
            [inquiry.email],
        )
    except Exception:
        logger.exception('Failed to send emails for inquiry %s', inquiry.pk)


def send_inquiry_reply(inquiry, message, replied_by=None) -> None:
    """Raises on failure; the reply view reports it to the admin."""
    subject = f'Re: {inquiry.subject}' if inquiry.subject else 'Re: your inquiry to Detox Wellness'
    context = {
        'inquiry': inquiry,
        'reply_message': message,
        'replied_by': getattr(replied_by, 'name', ''),
    }
    send_templated_mail(subject, 'inquiries/reply.txt', context, [inquiry.email])
