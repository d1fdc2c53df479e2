"""Notification services.

Emitting is a side effect of other mutations and must never break them:
``notify_*`` run in a savepoint and log failures instead of raising.
"""

import logging
from typing import Optional

from common.choices import NotificationType
from common.exceptions import NotFoundError
from django.db import transaction

from .models import Notification
from .selectors import visible_to

logger = logging.getLogger("lumiere.notifications")


def _emit(*, recipient, message: str, type: str, link: str) -> Optional[Notification]:
    try:
        with transaction.atomic():
            notification = Notification.objects.create(recipient=recipient, message=message, type=type, link=link)
    except Exception:
        logger.warning(
            "notification.emit_failed",
            exc_info=True,
            extra={"event": "notification.emit_failed", "recipient_id": getattr(recipient, "id", None)},
        )
        return None
    logger.info(
        "notification.emitted",
        extra={"event": "notification.emitted", "notification_id": notification.id, "type": type},
    )
    return notification


def notify_admins(*, message: str, type: str = NotificationType.ORDER, link: str = "") -> Optional[Notification]:
    return _emit(recipient=None, message=message, type=type, link=link)


def notify_user(*, user, message: str, type: str = NotificationType.ORDER, link: str = "") -> Optional[Notification]:
    return _emit(recipient=user, message=message, type=type, link=link)


def mark_read(*, user, notification_id) -> Notification:
    try:
        notification = visible_to(user=user).get(pk=notification_id)
    except (Notification.DoesNotExist, ValueError, TypeError):
        raise NotFoundError("Notification not found.") from None
    if not notification.is_read:
        notification.is_read = True
        notification.save(update_fields=["is_read", "updated_at"])
    return notification


def mark_all_read(*, user) -> int:
    return visible_to(user=user).filter(is_read=False).update(is_read=True)
