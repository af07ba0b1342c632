from django.db import transaction

from .models import Notification
from .utils import admin_users

WELCOME_TITLE = "Welcome to Detox Wellness admin"


def seed_notifications(flush: bool = False) -> dict:
    """One welcome notification per admin that has none yet."""
    with transaction.atomic():
        if flush:
            Notification.objects.all().delete()

        rows = [
            Notification(
                user=user,
                title=WELCOME_TITLE,
                message="New bookings and contact inquiries will show up here.",
                type=Notification.TYPE_INFO,
                related_type="SYSTEM",
            )
            for user in admin_users()
            if not Notification.objects.filter(user=user, title=WELCOME_TITLE).exists()
        ]
        Notification.objects.bulk_create(rows)

    return {"notifications": len(rows)}
