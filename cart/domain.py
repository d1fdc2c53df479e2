"""Cart value types and the guest-entry conversion.

Two shapes of cart exist. A guest cart lives on the client as a flat
sequence of product references where repetition encodes quantity. An
account cart is persisted as one line per product with an explicit
quantity. :func:`collapse_guest_entries` is the only place one becomes the
other.
"""

from collections import Counter
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional, Sequence

ProductRef = int
MAX_REF = 2**63 - 1
GuestCartEntries = Sequence[Any]
AccountCart = Mapping[ProductRef, int]


def product_ref(entry: Any) -> Optional[ProductRef]:
    """Extract a product id from a guest entry.

    Clients send either bare ids or the product objects they cached, so
    ``{"id": ...}``, ``{"_id": ...}`` and ``{"product": ...}`` are accepted
    too. Returns None for anything that does not resolve to a positive int.
    """
    if isinstance(entry, Mapping):
        for key in ("id", "_id", "product_id", "product"):
            if entry.get(key) is not None:
                return product_ref(entry[key])
        return None
    if isinstance(entry, bool):
        return None
    try:
        value = int(str(entry).strip())
    except (TypeError, ValueError):
        return None
    return value if 0 < value <= MAX_REF else None


def collapse_guest_entries(entries: Iterable[Any]) -> dict[ProductRef, int]:
    """Count occurrences per product, keeping first-seen order.

    ``[a, a, b]`` becomes ``{a: 2, b: 1}``. Unusable entries are dropped.
    """
    counts: Counter = Counter()
    for entry in entries or ():
        ref = product_ref(entry)
        if ref is not None:
            counts[ref] += 1
    return dict(counts)


@dataclass(frozen=True)
class CartLine:
    product_id: ProductRef
    quantity: int
    product: Any = None
    unit_price: Decimal = Decimal("0.00")

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class CartView:
    """A priced, read-only view of either kind of cart.

    ``product`` is None on lines whose product no longer exists; such lines
    count towards ``item_count`` but add nothing to ``subtotal``.
    """

    lines: tuple[CartLine, ...] = field(default_factory=tuple)
    account_id: Optional[int] = None

    @property
    def is_guest(self) -> bool:
        return self.account_id is None

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def subtotal(self) -> Decimal:
        return sum((line.line_total for line in self.lines), Decimal("0.00"))

    def quantities(self) -> dict[ProductRef, int]:
        return {line.product_id: line.quantity for line in self.lines}
