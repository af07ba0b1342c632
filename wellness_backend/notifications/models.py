from django.conf import settings
from django.db import models


class Notification(models.Model):
    """In-app message for one back-office user."""

    TYPE_INFO = 'INFO'
    TYPE_SUCCESS = 'SUCCESS'
    TYPE_WARNING = 'WARNING'
    TYPE_ERROR = 'ERROR'
    TYPE_APPOINTMENT = 'APPOINTMENT'

    TYPE_CHOICES = (
        (TYPE_INFO, 'Info'),
        (TYPE_SUCCESS, 'Success'),
        (TYPE_WARNING, 'Warning'),
        (TYPE_ERROR, 'Error'),
        (TYPE_APPOINTMENT, 'Appointment'),
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='notifications',
    )
    title = models.CharField(max_length=200)
    message = models.TextField()
    type = models.CharField(max_length=12, choices=TYPE_CHOICES, default=TYPE_INFO, db_index=True)
    read = models.BooleanField(default=False, db_index=True)
    read_at = models.DateTimeField(null=True, blank=True)
    related_id = models.CharField(max_length=64, blank=True, default='')
    related_type = models.CharField(max_length=50, blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['user', 'read'], name='notification_user_read_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.title} -> user_id={self.user_id}"
