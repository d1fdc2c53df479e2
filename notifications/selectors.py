from django.conf import settings
from django.db.models import Q, QuerySet

from .models import Notification


def visible_to(*, user) -> QuerySet[Notification]:
    """Admins also see notifications addressed to all admins."""

    match = Q(recipient=user)
    if user.is_staff:
        match |= Q(recipient__isnull=True)
    return Notification.objects.filter(match)


def latest_for(*, user) -> QuerySet[Notification]:
    return visible_to(user=user).order_by("-created_at", "-id")[: settings.NOTIFICATIONS_LIST_LIMIT]
