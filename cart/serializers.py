"""Cart serializers for read and write operations."""

from catalog.serializers import ProductSummarySerializer
from rest_framework import serializers

from .domain import MAX_REF, CartView


class CartLineSerializer(serializers.Serializer):
    """One priced line; ``product`` is null when the product no longer exists."""

    product_id = serializers.IntegerField()
    product = ProductSummarySerializer(allow_null=True)
    quantity = serializers.IntegerField()
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2)


class CartReadSerializer(serializers.Serializer):
    """Read serializer for the cart summary and lines."""

    items = CartLineSerializer(many=True, source="lines")
    item_count = serializers.IntegerField()
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2)
    is_guest = serializers.BooleanField()

    @classmethod
    def from_view(cls, view: CartView):
        return cls(view)


class GuestEntriesSerializer(serializers.Serializer):
    """A client-held guest cart.

    Each entry is a product id or a product object carrying ``id``/``_id``;
    repeating an entry adds one more unit.
    """

    items = serializers.ListField(child=serializers.JSONField(), allow_empty=True)


class ProductRefSerializer(serializers.Serializer):
    product_id = serializers.IntegerField(min_value=1, max_value=MAX_REF)
