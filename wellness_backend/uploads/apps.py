from django.apps import AppConfig


class UploadsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'wellness_backend.uploads'
    label = 'uploads'
    verbose_name = 'Uploads'
