"""Cart services: guest reconciliation and single-unit mutations.

Every function takes the account explicitly. Mutations lock the cart row
so concurrent requests for the same account apply one after another instead
of overwriting each other's quantities.
"""

import logging
from typing import Any, Iterable, Mapping

from common.exceptions import ValidationError
from django.db import transaction
from django.db.models import F
from orders.services import place_order

from .domain import CartView, collapse_guest_entries, product_ref
from .models import Cart, CartItem
from .selectors import account_quantities, build_cart_view

logger = logging.getLogger("lumiere.cart")


def get_or_create_cart(*, user) -> Cart:
    cart, created = Cart.objects.get_or_create(user=user)
    if created:
        logger.info("cart.created", extra={"event": "cart.created", "user_id": user.id, "cart_id": cart.id})
    return cart


def _locked_cart(*, user) -> Cart:
    cart = get_or_create_cart(user=user)
    return Cart.objects.select_for_update().get(pk=cart.pk)


def _require_ref(product: Any) -> int:
    ref = product_ref(product)
    if ref is None:
        raise ValidationError("Invalid product reference.")
    return ref


def load_cart(*, user=None, guest_entries: Iterable[Any] = ()) -> CartView:
    """Return the priced cart for ``user``, or for a guest snapshot.

    With no account the view is built from the client-held entries and
    nothing is persisted. With an account the cart is created on first use.
    """

    if user is None:
        return build_cart_view(quantities=collapse_guest_entries(guest_entries))
    cart = get_or_create_cart(user=user)
    return build_cart_view(quantities=account_quantities(cart=cart), account_id=user.id)


@transaction.atomic
def merge_guest_cart(*, user, guest_entries: Iterable[Any]) -> CartView:
    """Add a guest snapshot's counts onto the account cart.

    Quantities are summed, so merging the same snapshot twice adds it
    twice. Clearing the guest copy afterwards is the client's job.
    """

    counts = collapse_guest_entries(guest_entries)
    cart = _locked_cart(user=user)
    existing = {item.product_id: item for item in cart.items.select_for_update()}
    for product_id, count in counts.items():
        item = existing.get(product_id)
        if item is not None:
            item.quantity = F("quantity") + count
            item.save(update_fields=["quantity", "updated_at"])
        else:
            CartItem.objects.create(cart=cart, product_id=product_id, quantity=count)
    cart.save(update_fields=["updated_at"])
    logger.info(
        "cart.merged",
        extra={
            "event": "cart.merged",
            "user_id": user.id,
            "cart_id": cart.id,
            "products": len(counts),
            "units": sum(counts.values()),
        },
    )
    return build_cart_view(quantities=account_quantities(cart=cart), account_id=user.id)


@transaction.atomic
def add_one(*, user, product: Any) -> CartView:
    """Increment the line for ``product`` by one, creating it at 1."""

    product_id = _require_ref(product)
    cart = _locked_cart(user=user)
    updated = CartItem.objects.filter(cart=cart, product_id=product_id).update(quantity=F("quantity") + 1)
    if not updated:
        CartItem.objects.create(cart=cart, product_id=product_id, quantity=1)
    cart.save(update_fields=["updated_at"])
    logger.info(
        "cart.item_added",
        extra={"event": "cart.item_added", "user_id": user.id, "cart_id": cart.id, "product_id": product_id},
    )
    return build_cart_view(quantities=account_quantities(cart=cart), account_id=user.id)


@transaction.atomic
def remove_one(*, user, product: Any) -> CartView:
    """Decrement the line for ``product``; a line at 1 is deleted.

    Removing a product that is not in the cart changes nothing.
    """

    product_id = _require_ref(product)
    cart = _locked_cart(user=user)
    item = CartItem.objects.select_for_update().filter(cart=cart, product_id=product_id).first()
    if item is None:
        return build_cart_view(quantities=account_quantities(cart=cart), account_id=user.id)
    if item.quantity <= 1:
        item.delete()
    else:
        item.quantity = F("quantity") - 1
        item.save(update_fields=["quantity", "updated_at"])
    cart.save(update_fields=["updated_at"])
    logger.info(
        "cart.item_removed",
        extra={"event": "cart.item_removed", "user_id": user.id, "cart_id": cart.id, "product_id": product_id},
    )
    return build_cart_view(quantities=account_quantities(cart=cart), account_id=user.id)


@transaction.atomic
def clear_cart(*, user) -> None:
    cart = _locked_cart(user=user)
    deleted, _ = cart.items.all().delete()
    logger.info(
        "cart.cleared",
        extra={"event": "cart.cleared", "user_id": user.id, "cart_id": cart.id, "lines": deleted},
    )


@transaction.atomic
def checkout_cart(*, user, shipping_address: Mapping[str, Any], payment_method: str):
    """Place an order for the cart's current contents and empty the cart.

    Raises ValidationError when the cart is empty or references a product
    that no longer exists; the cart is left untouched in that case.
    """

    cart = _locked_cart(user=user)
    quantities = account_quantities(cart=cart)
    order = place_order(
        user=user,
        lines=quantities,
        shipping_address=shipping_address,
        payment_method=payment_method,
    )
    clear_cart(user=user)
    logger.info(
        "cart.checked_out",
        extra={"event": "cart.checked_out", "user_id": user.id, "cart_id": cart.id, "order_id": order.id},
    )
    return order
