import logging

logger = logging.getLogger("auth")


def log_auth_event(action: str, request, user=None, status: str = "success", extra: dict | None = None):
    """Emit a structured auth event with action, user, ip, and status."""
    fields = {
        "event": f"auth.{action}",
        "action": action,
        "ip": request.META.get("REMOTE_ADDR") if request is not None else None,
        "status": status,
    }
    if user is not None:
        fields["user_id"] = getattr(user, "id", None)
        fields["email"] = getattr(user, "email", None)
    if extra:
        fields.update(extra)
    level = logging.INFO if status == "success" else logging.WARNING
    logger.log(level, fields["event"], extra=fields)
