import logging

from wellness_backend.core.models import User
from wellness_backend.core.permissions import ADMIN_ROLES

from .models import Notification

logger = logging.getLogger(__name__)


def create_notification(user, title, message, type=Notification.TYPE_INFO, related_id=None, related_type=None):
    """Appends one Notification row for ``user`` (a User or a user id)."""
    user_id = getattr(user, 'pk', user)
    notification = Notification.objects.using('default').create(
        user_id=user_id,
        title=title,
        message=message,
        type=type,
        related_id=str(related_id) if related_id is not None else '',
        related_type=related_type or '',
    )
    logger.debug('Notification %s created for user_id=%s', notification.pk, user_id)
    return notification


def admin_users():
    return User.objects.using('default').filter(is_active=True, role__name__in=ADMIN_ROLES)


def notify_all_admins(title, message, type=Notification.TYPE_INFO, related_id=None, related_type=None):
    """One Notification per active admin. Returns the number written."""
    rows = [
        Notification(
            user=user,
            title=title,
            message=message,
            type=type,
            related_id=str(related_id) if related_id is not None else '',
            related_type=related_type or '',
        )
        for user in admin_users()
    ]
    Notification.objects.using('default').bulk_create(rows)
    logger.info('Notified %s admins: %s', len(rows), title)
    return len(rows)
