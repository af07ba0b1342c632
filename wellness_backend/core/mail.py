"""Plain-text clinic emails rendered from app templates.

``mail_enabled()`` is False when the SMTP backend is selected but no SMTP
user is configured; callers skip sending in that case. Send failures are
raised to the caller, which decides whether they are fatal.
"""

import logging

from django.conf import settings
from django.core.mail import send_mail
from django.template.loader import render_to_string

logger = logging.getLogger(__name__)

SMTP_BACKEND = 'django.core.mail.backends.smtp.EmailBackend'


def mail_enabled() -> bool:
    if settings.EMAIL_BACKEND != SMTP_BACKEND:
        return True
    return bool(settings.EMAIL_HOST_USER)


def send_templated_mail(subject, template_name, context, recipients):
    """Render ``template_name`` with ``context`` and send it. Returns the count sent."""
    recipients = [address for address in recipients if address]
    if not recipients:
        return 0
    body = render_to_string(template_name, context)
    sent = send_mail(
        subject,
        body,
        settings.DEFAULT_FROM_EMAIL,
        recipients,
        fail_silently=False,
    )
    logger.info('Sent "%s" to %s', subject, ', '.join(recipients))
    return sent
