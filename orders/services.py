"""Order lifecycle: placement and the paid / delivered / cancelled flags.

Each transition takes the acting account explicitly and locks the order row.
Only the touched flag and its timestamp are written, so admins working on
different flags of the same order do not overwrite each other. Cancelling
never restocks or refunds.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence

from catalog.selectors import products_by_id
from common.choices import OrderStatus
from common.exceptions import AuthorizationError, InvalidStateError, NotFoundError, ValidationError
from django.conf import settings
from django.db import transaction
from django.utils import timezone
from notifications.services import notify_admins, notify_user

from .emails import send_new_order_email, send_order_delivered_email
from .models import Order, OrderItem
from .pricing import MAX_AMOUNT, PriceBreakdown, quote

logger = logging.getLogger("lumiere.orders")


def display_status(*, is_paid: bool, is_delivered: bool, is_cancelled: bool) -> OrderStatus:
    """Collapse the lifecycle flags into one label.

    Precedence is Cancelled > Delivered > Paid > Pending, so a paid order
    that was later cancelled reads as cancelled.
    """
    if is_cancelled:
        return OrderStatus.CANCELLED
    if is_delivered:
        return OrderStatus.DELIVERED
    if is_paid:
        return OrderStatus.PAID
    return OrderStatus.PENDING


def status_of(order: Order) -> OrderStatus:
    return display_status(is_paid=order.is_paid, is_delivered=order.is_delivered, is_cancelled=order.is_cancelled)


@dataclass(frozen=True)
class LineSnapshot:
    """A line item's values as they were when the order was placed."""

    product_id: Optional[int]
    name: str
    price: Decimal
    quantity: int
    image: str = ""


def snapshot_lines(lines: Mapping[int, int]) -> list[LineSnapshot]:
    """Copy name, image and current price for each ``{product_id: qty}``.

    Raises ValidationError if any product no longer exists.
    """

    products = products_by_id(lines.keys())
    snapshot = []
    for product_id, quantity in lines.items():
        product = products.get(int(product_id))
        if product is None:
            raise ValidationError(f"Product {product_id} is no longer available.")
        snapshot.append(
            LineSnapshot(
                product_id=product.id,
                name=product.name,
                price=product.price,
                quantity=int(quantity),
                image=product.image_url,
            )
        )
    return snapshot


def _log_transition(order: Order, *, actor, previous: OrderStatus) -> None:
    logger.info(
        "order.status_changed",
        extra={
            "event": "order.status_changed",
            "order_id": order.id,
            "user_id": order.user_id,
            "actor_id": getattr(actor, "id", None),
            "status_from": previous.value,
            "status_to": status_of(order).value,
        },
    )


@transaction.atomic
def create_order(
    *,
    user,
    items: Sequence[LineSnapshot],
    shipping_address: Mapping[str, Any],
    payment_method: str,
    prices: PriceBreakdown,
) -> Order:
    """Persist an order from a line-item snapshot and a price breakdown.

    Both are stored by value. Notifying admins and emailing the shop owner
    are best effort and do not affect the result. The email goes out only
    once the surrounding transaction commits.
    """

    if not items:
        raise ValidationError("No order items.")
    if prices.total > MAX_AMOUNT:
        raise ValidationError("Order total is too large.")

    order = Order.objects.create(
        user=user,
        shipping_street=shipping_address.get("street", ""),
        shipping_city=shipping_address.get("city", ""),
        shipping_postal_code=shipping_address.get("postal_code", ""),
        shipping_country=shipping_address.get("country", ""),
        shipping_phone=shipping_address.get("phone", "") or "",
        payment_method=payment_method,
        items_price=prices.items,
        tax_price=prices.tax,
        shipping_price=prices.shipping,
        total_price=prices.total,
    )
    OrderItem.objects.bulk_create(
        [
            OrderItem(
                order=order,
                product_id=line.product_id,
                name=line.name,
                image=line.image,
                price=line.price,
                quantity=line.quantity,
            )
            for line in items
        ]
    )
    logger.info(
        "order.created",
        extra={
            "event": "order.created",
            "order_id": order.id,
            "user_id": user.id,
            "lines": len(items),
            "total_price": prices.total,
        },
    )

    notify_admins(
        message=f"New Order #{order.id} from {user.display_name} - {order.total_price} {settings.SHOP_CURRENCY}",
        link="/admin/orders",
    )
    transaction.on_commit(lambda: send_new_order_email(order))
    return order


def place_order(*, user, lines: Mapping[int, int], shipping_address: Mapping[str, Any], payment_method: str) -> Order:
    """Snapshot ``{product_id: qty}`` from the catalog, quote it and create the order."""

    if not lines:
        raise ValidationError("No order items.")
    snapshot = snapshot_lines(lines)
    prices = quote((line.price, line.quantity) for line in snapshot)
    return create_order(
        user=user,
        items=snapshot,
        shipping_address=shipping_address,
        payment_method=payment_method,
        prices=prices,
    )


def _locked_order(order_id) -> Order:
    try:
        return Order.objects.select_for_update().select_related("user").get(pk=order_id)
    except (Order.DoesNotExist, ValueError, TypeError, OverflowError):
        raise NotFoundError("Order not found.") from None


def _require_admin(actor) -> None:
    if not getattr(actor, "is_staff", False):
        raise AuthorizationError("Not authorized as an admin.")


@transaction.atomic
def mark_paid(*, order_id, actor, payment_result: Optional[Mapping[str, Any]] = None) -> Order:
    """Flag the order paid and store the payment result as given.

    Calling it again overwrites the timestamp and result.
    """

    _require_admin(actor)
    order = _locked_order(order_id)
    previous = status_of(order)
    order.is_paid = True
    order.paid_at = timezone.now()
    order.payment_result = dict(payment_result or {})
    order.save(update_fields=["is_paid", "paid_at", "payment_result", "updated_at"])
    _log_transition(order, actor=actor, previous=previous)
    return order


@transaction.atomic
def mark_delivered(*, order_id, actor) -> Order:
    """Flag the order delivered and let the customer know.

    The customer email is sent detached after commit; its failure only gets
    logged.
    """

    _require_admin(actor)
    order = _locked_order(order_id)
    previous = status_of(order)
    order.is_delivered = True
    order.delivered_at = timezone.now()
    order.save(update_fields=["is_delivered", "delivered_at", "updated_at"])
    _log_transition(order, actor=actor, previous=previous)

    notify_user(
        user=order.user,
        message=f"Your order #{order.id} has been shipped.",
        link=f"/order/{order.id}",
    )
    transaction.on_commit(lambda: send_order_delivered_email(order))
    return order


@transaction.atomic
def cancel_order(*, order_id, actor) -> Order:
    """Cancel an order on behalf of its owner or an admin.

    A delivered order can never be cancelled, whoever asks. Cancelling an
    already-cancelled order returns it unchanged.
    """

    order = _locked_order(order_id)
    if order.is_delivered:
        raise InvalidStateError("Cannot cancel delivered order.")
    if order.user_id != getattr(actor, "id", None) and not getattr(actor, "is_staff", False):
        raise AuthorizationError("Not authorized to cancel this order.")
    if order.is_cancelled:
        return order

    previous = status_of(order)
    order.is_cancelled = True
    order.cancelled_at = timezone.now()
    order.save(update_fields=["is_cancelled", "cancelled_at", "updated_at"])
    _log_transition(order, actor=actor, previous=previous)

    notify_admins(
        message=f"Order #{order.id} was cancelled by {actor.display_name}.",
        link="/admin/orders",
    )
    return order
