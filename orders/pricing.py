"""Server-side price quotes for checkout.

Tax is a flat rate on the items total; shipping is a flat fee waived above a
threshold. Rates and thresholds come from settings.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Tuple

from django.conf import settings

CENT = Decimal("0.01")
# Largest value the order money columns (12 digits, 2 places) can hold.
MAX_AMOUNT = Decimal("9999999999.99")


def _money(value) -> Decimal:
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class PriceBreakdown:
    items: Decimal
    shipping: Decimal
    tax: Decimal
    total: Decimal


def quote(lines: Iterable[Tuple[Decimal, int]]) -> PriceBreakdown:
    """Quote ``(unit_price, quantity)`` pairs."""

    items = _money(sum((Decimal(price) * qty for price, qty in lines), Decimal("0")))
    threshold = Decimal(settings.ORDER_FREE_SHIPPING_THRESHOLD)
    shipping = Decimal("0.00") if items > threshold else _money(settings.ORDER_SHIPPING_FEE)
    tax = _money(items * Decimal(settings.ORDER_TAX_RATE))
    return PriceBreakdown(items=items, shipping=shipping, tax=tax, total=items + shipping + tax)
