# rx_core/iam/models.py
from django.conf import settings
from django.db import models

from rx_core.common.models import TimeStampedModel


class UserProfile(TimeStampedModel):
    """
    Display identity anchored to Django's AUTH_USER_MODEL.
    Login identity (email) lives on the user row as username + email.
    """
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="rx_profile")
    display_name = models.CharField(max_length=255)

    class Meta:
        db_table = "iam_user_profile"

    def __str__(self) -> str:
        return self.display_name


def display_name_of(user) -> str:
    """Profile display name, falling back to the login email."""
    profile = getattr(user, "rx_profile", None) if user is not None else None
    if profile is not None:
        return profile.display_name
    return getattr(user, "email", "") or getattr(user, "username", "")
