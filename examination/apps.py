"""
Examination Application Configuration

This module contains the Django application configuration for the online
examination platform.

Author: DSP Development Team
Version: 1.0.0
"""

from django.apps import AppConfig


class ExaminationConfig(AppConfig):
    """
    Configuration class for the examination Django application.

    Attributes:
        default_auto_field: Default primary key field type for models
        name: Application name for Django registration
        verbose_name: Human-readable application name for admin interface
    """

    default_auto_field: str = "django.db.models.BigAutoField"
    name: str = "examination"
    verbose_name: str = "Examination"

    def ready(self) -> None:
        """
        Import the user signal handlers so every new user gets a profile.
        """
        super().ready()
        from .users import models  # noqa: F401
