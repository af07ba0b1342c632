from django.conf import settings
from django.db import models


class ContactInquiry(models.Model):
    """A message sent through the public contact form."""

    TYPE_GENERAL = 'GENERAL'
    TYPE_APPOINTMENT = 'APPOINTMENT'
    TYPE_CONSULTATION = 'CONSULTATION'
    TYPE_COMPLAINT = 'COMPLAINT'
    TYPE_CHOICES = (
        (TYPE_GENERAL, 'General'),
        (TYPE_APPOINTMENT, 'Appointment'),
        (TYPE_CONSULTATION, 'Consultation'),
        (TYPE_COMPLAINT, 'Complaint'),
    )

    CONTACT_EMAIL = 'EMAIL'
    CONTACT_PHONE = 'PHONE'
    CONTACT_CHOICES = (
        (CONTACT_EMAIL, 'Email'),
        (CONTACT_PHONE, 'Phone'),
    )

    STATUS_PENDING = 'PENDING'
    STATUS_READ = 'READ'
    STATUS_IN_PROGRESS = 'IN_PROGRESS'
    STATUS_RESOLVED = 'RESOLVED'
    STATUS_CLOSED = 'CLOSED'
    STATUS_CHOICES = (
        (STATUS_PENDING, 'Pending'),
        (STATUS_READ, 'Read'),
        (STATUS_IN_PROGRESS, 'In progress'),
        (STATUS_RESOLVED, 'Resolved'),
        (STATUS_CLOSED, 'Closed'),
    )

    name = models.CharField(max_length=150)
    email = models.EmailField()
    phone = models.CharField(max_length=30, blank=True, default='')
    subject = models.CharField(max_length=200, blank=True, default='')
    message = models.TextField()
    type = models.CharField(max_length=12, choices=TYPE_CHOICES, default=TYPE_GENERAL, db_index=True)
    preferred_contact = models.CharField(max_length=5, choices=CONTACT_CHOICES, default=CONTACT_EMAIL)
    status = models.CharField(max_length=12, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    admin_notes = models.TextField(blank=True, default='')
    replied_at = models.DateTimeField(null=True, blank=True)
    replied_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name='inquiry_replies',
    )
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']
        verbose_name_plural = 'contact inquiries'

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>: {self.subject or self.get_type_display()}"
