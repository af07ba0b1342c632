"""
Core App Configuration
"""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Users, roles, auth and the shared API plumbing."""
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'wellness_backend.core'
    label = 'core'
    verbose_name = 'Core (Users & Roles)'
