"""Selectors for the catalog domain.

Read-only query helpers shared by the catalog views, the cart (pricing a
view) and orders (snapshotting line items).
"""

from typing import Iterable, Optional

from django.db.models import Q, QuerySet

from .models import Brand, Category, Product


def list_brands() -> QuerySet[Brand]:
    return Brand.objects.order_by("name")


def list_categories() -> QuerySet[Category]:
    return Category.objects.select_related("parent").order_by("name")


def list_products(
    *,
    category_id: Optional[int] = None,
    brand_id: Optional[int] = None,
    keyword: Optional[str] = None,
    ordering: Optional[Iterable[str]] = None,
) -> QuerySet[Product]:
    """Return products with brand and category joined in.

    ``keyword`` matches name, description or brand name, case-insensitively.
    """

    qs = Product.objects.select_related("brand", "category")
    if category_id:
        qs = qs.filter(category_id=category_id)
    if brand_id:
        qs = qs.filter(brand_id=brand_id)
    if keyword:
        qs = qs.filter(
            Q(name__icontains=keyword) | Q(description__icontains=keyword) | Q(brand__name__icontains=keyword)
        )
    return qs.order_by(*(ordering or ("name",)))


def products_by_id(product_ids: Iterable[int]) -> dict[int, Product]:
    """Map ids to products; ids with no product are simply absent."""

    ids = {int(pk) for pk in product_ids}
    if not ids:
        return {}
    return Product.objects.select_related("brand").in_bulk(ids)
