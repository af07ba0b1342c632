from django.apps import AppConfig


class InquiriesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'wellness_backend.inquiries'
    label = 'inquiries'
    verbose_name = 'Contact inquiries'
