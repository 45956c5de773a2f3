"""
Examination User Models

This module extends Django's built-in User model with the profile data the
examination platform needs. Credentials (username, email, password hash) stay
on ``auth.User``; the display name lives on the profile.

Models:
- Profile: Display name of an exam creator or test-taker

Features:
- Automatic profile creation for new users
- Proper signal handling for profile lifecycle management

Author: DSP Development Team
Version: 1.0.0
"""

from django.db import models
from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver
from django.utils.translation import gettext_lazy as _


class Profile(models.Model):
    """
    Extended user profile for the examination platform.

    Attributes:
        user: One-to-one relationship with Django User model
        name: Full display name shown to exam creators
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
        verbose_name=_("User"),
        help_text=_("Associated user account"),
    )

    name = models.CharField(
        max_length=255,
        blank=True,
        default="",
        verbose_name=_("Name"),
        help_text=_("Display name of the user"),
    )

    class Meta:
        verbose_name = _("User Profile")
        verbose_name_plural = _("User Profiles")
        db_table = "examination_profile"

    def __str__(self) -> str:
        return f"{self.user.username} Profile"

    def __repr__(self) -> str:
        return f"<Profile(user={self.user.username}, name={self.name!r})>"


def display_name(user) -> str:
    """
    Return the profile name of a user, falling back to the username.
    """
    try:
        return user.profile.name or user.username
    except Profile.DoesNotExist:
        return user.username


# --- Signal Handlers for Automatic Profile Management ---


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def create_user_profile(sender, instance, created: bool, **kwargs) -> None:
    """
    Automatically create a profile when a new user is created.

    Args:
        sender: The User model class
        instance: The actual User instance that was saved
        created: Boolean indicating if this is a new instance
        **kwargs: Additional signal arguments
    """
    if created:
        Profile.objects.get_or_create(user=instance)
