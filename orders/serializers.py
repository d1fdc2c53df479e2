"""DRF serializers for Orders.

Output serializers expose the stored snapshot as-is; nothing is recomputed
from the live catalog. Input serializers accept product ids and quantities
only: prices sent by a client are ignored and quoted server-side.
"""

from cart.domain import MAX_REF
from common.choices import PaymentMethod
from rest_framework import serializers

from .models import Order, OrderItem
from .services import status_of

MAX_LINE_QUANTITY = 1000


class ShippingAddressSerializer(serializers.Serializer):
    street = serializers.CharField(max_length=255)
    city = serializers.CharField(max_length=120)
    postal_code = serializers.CharField(max_length=20)
    country = serializers.CharField(max_length=120)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")


class OrderItemSerializer(serializers.ModelSerializer):
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = OrderItem
        fields = ["id", "product", "name", "image", "price", "quantity", "line_total"]
        read_only_fields = fields


class OrderCustomerSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField(source="display_name")
    email = serializers.EmailField()


class OrderSerializer(serializers.ModelSerializer):
    """API representation of an order.

    ``status`` is derived from the three lifecycle flags on every read.
    """

    user = OrderCustomerSerializer(read_only=True)
    items = OrderItemSerializer(many=True, read_only=True)
    shipping_address = ShippingAddressSerializer(read_only=True)
    status = serializers.SerializerMethodField()
    status_display = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            "id",
            "user",
            "items",
            "shipping_address",
            "payment_method",
            "payment_result",
            "items_price",
            "tax_price",
            "shipping_price",
            "total_price",
            "is_paid",
            "paid_at",
            "is_delivered",
            "delivered_at",
            "is_cancelled",
            "cancelled_at",
            "status",
            "status_display",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_status(self, obj: Order) -> str:
        return status_of(obj).value

    def get_status_display(self, obj: Order) -> str:
        return status_of(obj).label


class OrderLineInputSerializer(serializers.Serializer):
    product = serializers.IntegerField(min_value=1, max_value=MAX_REF)
    qty = serializers.IntegerField(min_value=1, max_value=MAX_LINE_QUANTITY, default=1)


class OrderCreateSerializer(serializers.Serializer):
    """Input for placing an order.

    Repeated products are summed into one line.
    """

    order_items = OrderLineInputSerializer(many=True, allow_empty=True)
    shipping_address = ShippingAddressSerializer()
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices, default=PaymentMethod.CASH_ON_DELIVERY)

    def validate_order_items(self, value):
        lines: dict[int, int] = {}
        for line in value:
            lines[line["product"]] = lines.get(line["product"], 0) + line["qty"]
        return lines


class CheckoutSerializer(serializers.Serializer):
    shipping_address = ShippingAddressSerializer()
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices, default=PaymentMethod.CASH_ON_DELIVERY)


class PaymentResultSerializer(serializers.Serializer):
    """Opaque payment-provider record stored verbatim on the order."""

    id = serializers.CharField(required=False, allow_blank=True)
    status = serializers.CharField(required=False, allow_blank=True)
    update_time = serializers.CharField(required=False, allow_blank=True)
    email_address = serializers.EmailField(required=False, allow_blank=True)


class AdminOrderListSerializer(serializers.Serializer):
    orders = OrderSerializer(many=True)
    page = serializers.IntegerField()
    pages = serializers.IntegerField()
    total = serializers.IntegerField()
