from common.choices import NotificationType
from django.conf import settings
from django.db import models


class Notification(models.Model):
    """In-app notification.

    ``recipient`` is null for notifications addressed to every admin.
    """

    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name="notifications",
        null=True,
        blank=True,
        on_delete=models.CASCADE,
    )
    message = models.CharField(max_length=500)
    type = models.CharField(max_length=16, choices=NotificationType.choices, default=NotificationType.ORDER)
    link = models.CharField(max_length=255, blank=True)
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["recipient", "is_read"], name="notif_recipient_read_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"Notification#{self.id} to={self.recipient_id or 'admins'}"
