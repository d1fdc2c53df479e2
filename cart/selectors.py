"""Cart selectors: read-only helpers that price a cart into a view."""

from decimal import Decimal
from typing import Mapping, Optional

from catalog.selectors import products_by_id

from .domain import CartLine, CartView
from .models import Cart


def account_quantities(*, cart: Optional[Cart]) -> dict[int, int]:
    """Return ``{product_id: quantity}`` for a persisted cart, in line order."""

    if cart is None:
        return {}
    return dict(cart.items.order_by("id").values_list("product_id", "quantity"))


def build_cart_view(*, quantities: Mapping[int, int], account_id: Optional[int] = None) -> CartView:
    """Price ``quantities`` against the live catalog.

    Missing products yield lines with ``product=None`` and a zero price.
    """

    products = products_by_id(quantities.keys())
    lines = []
    for product_id, quantity in quantities.items():
        product = products.get(product_id)
        lines.append(
            CartLine(
                product_id=product_id,
                quantity=quantity,
                product=product,
                unit_price=product.price if product is not None else Decimal("0.00"),
            )
        )
    return CartView(lines=tuple(lines), account_id=account_id)
