"""Read-only order queries."""

from typing import Optional

from django.db.models import Q, QuerySet

from .models import Order

MAX_ORDER_ID = 2**63 - 1


def _base() -> QuerySet[Order]:
    return Order.objects.select_related("user").prefetch_related("items")


def orders_for_user(*, user) -> QuerySet[Order]:
    return _base().filter(user=user).order_by("-updated_at", "-id")


def get_order_for_actor(*, order_id, actor) -> Optional[Order]:
    """Return the order if ``actor`` owns it or is an admin, else None."""

    qs = _base()
    if not actor.is_staff:
        qs = qs.filter(user=actor)
    try:
        return qs.get(pk=order_id)
    except (Order.DoesNotExist, ValueError, TypeError, OverflowError):
        return None


def _order_id(keyword: str) -> Optional[int]:
    if not keyword.isdecimal():
        return None
    value = int(keyword)
    return value if 0 < value <= MAX_ORDER_ID else None


def search_orders(*, keyword: Optional[str] = None) -> QuerySet[Order]:
    """Admin listing: keyword matches order id, customer name or email."""

    qs = _base()
    if keyword:
        keyword = keyword.strip().lstrip("#")
        match = Q(user__name__icontains=keyword) | Q(user__email__icontains=keyword)
        order_id = _order_id(keyword)
        if order_id is not None:
            match |= Q(pk=order_id)
        qs = qs.filter(match)
    return qs.order_by("-created_at", "-id")
