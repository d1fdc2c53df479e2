"""Email utilities for the orders app.

Uses Django's email backend, with links composed from FRONTEND_URL. Messages
are composed in the caller's thread and, when ORDER_EMAILS_ASYNC is set,
sent from a daemon thread so the request never waits on SMTP. Sending is
best effort: failures are logged and never raised.
"""

import logging
import threading
from typing import Sequence

from django.conf import settings
from django.core.mail import send_mail

logger = logging.getLogger("lumiere.orders")


def _send(*, kind: str, order_id: int, subject: str, body: str, recipients: Sequence[str]) -> None:
    try:
        send_mail(subject, body, settings.DEFAULT_FROM_EMAIL, list(recipients), fail_silently=False)
    except Exception:
        logger.warning(
            "order.email_failed",
            exc_info=True,
            extra={"event": "order.email_failed", "kind": kind, "order_id": order_id},
        )
        return
    logger.info("order.email_sent", extra={"event": "order.email_sent", "kind": kind, "order_id": order_id})


def dispatch(*, kind: str, order_id: int, subject: str, body: str, recipients: Sequence[str]) -> None:
    recipients = [r for r in recipients if r]
    if not recipients:
        logger.info("order.email_skipped", extra={"event": "order.email_skipped", "kind": kind, "order_id": order_id})
        return
    kwargs = {"kind": kind, "order_id": order_id, "subject": subject, "body": body, "recipients": recipients}
    if settings.ORDER_EMAILS_ASYNC:
        threading.Thread(target=_send, kwargs=kwargs, daemon=True, name=f"order-email-{order_id}").start()
    else:
        _send(**kwargs)


def _order_link(order, *, admin: bool = False) -> str:
    base = settings.FRONTEND_URL.rstrip("/")
    return f"{base}/admin/orders/{order.id}" if admin else f"{base}/order/{order.id}"


def send_new_order_email(order) -> None:
    """Tell the shop owner a new order came in."""

    customer = order.user.display_name
    body = (
        f"You have received a new order from {customer}.\n\n"
        f"Order ID: {order.id}\n"
        f"Total: {order.total_price} {settings.SHOP_CURRENCY}\n"
        f"Items: {order.items.count()}\n\n"
        f"Check the dashboard for details: {_order_link(order, admin=True)}\n"
    )
    dispatch(
        kind="new_order",
        order_id=order.id,
        subject=f"New Order Received! ID: {order.id}",
        body=body,
        recipients=[settings.ADMIN_NOTIFICATION_EMAIL],
    )


def send_order_delivered_email(order) -> None:
    """Tell the customer their order has shipped."""

    body = (
        f"Hello {order.user.display_name},\n\n"
        f"We are excited to let you know that your order {order.id} has been approved and shipped!\n\n"
        f"You can follow it here: {_order_link(order)}\n\n"
        "Thank you for shopping with us.\n\n"
        f"Best regards,\nThe {settings.SHOP_NAME} Team"
    )
    dispatch(
        kind="delivered",
        order_id=order.id,
        subject=f"Your Order Has Been Shipped! - {settings.SHOP_NAME}",
        body=body,
        recipients=[order.user.email],
    )
