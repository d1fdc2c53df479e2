from decimal import Decimal

from common.choices import PaymentMethod
from django.conf import settings
from django.db import models


class TimeStampedModel(models.Model):
    """Abstract base model adding created/updated timestamps."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Order(TimeStampedModel):
    """Purchase order capturing a frozen snapshot of a checkout.

    Prices are stored by value. Lifecycle is tracked by three independent
    flags, each with its own timestamp; the display status is derived from
    them and never stored (see ``orders.services.display_status``).
    """

    user = models.ForeignKey(settings.AUTH_USER_MODEL, related_name="orders", on_delete=models.CASCADE)

    shipping_street = models.CharField(max_length=255)
    shipping_city = models.CharField(max_length=120)
    shipping_postal_code = models.CharField(max_length=20)
    shipping_country = models.CharField(max_length=120)
    shipping_phone = models.CharField(max_length=32, blank=True)

    payment_method = models.CharField(
        max_length=32, choices=PaymentMethod.choices, default=PaymentMethod.CASH_ON_DELIVERY
    )
    payment_result = models.JSONField(default=dict, blank=True)

    items_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    tax_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    shipping_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    total_price = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    is_paid = models.BooleanField(default=False)
    paid_at = models.DateTimeField(null=True, blank=True)
    is_delivered = models.BooleanField(default=False)
    delivered_at = models.DateTimeField(null=True, blank=True)
    is_cancelled = models.BooleanField(default=False)
    cancelled_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["user", "created_at"], name="orders_order_user_created_idx"),
            models.Index(fields=["is_paid", "is_delivered", "is_cancelled"], name="orders_order_flags_idx"),
        ]
        constraints = [
            models.CheckConstraint(name="order_total_non_negative", condition=models.Q(total_price__gte=0)),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"Order#{self.id} user={self.user_id}"

    @property
    def shipping_address(self) -> dict:
        return {
            "street": self.shipping_street,
            "city": self.shipping_city,
            "postal_code": self.shipping_postal_code,
            "country": self.shipping_country,
            "phone": self.shipping_phone,
        }


class OrderItem(models.Model):
    """Line item within an order.

    Name, image and unit price are copied from the product when the order is
    placed; ``product`` is kept for linking only and may dangle.
    """

    order = models.ForeignKey(Order, related_name="items", on_delete=models.CASCADE)
    product = models.ForeignKey(
        "catalog.Product",
        related_name="+",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
    )
    name = models.CharField(max_length=200)
    image = models.CharField(max_length=500, blank=True)
    price = models.DecimalField(max_digits=12, decimal_places=2)
    quantity = models.PositiveIntegerField(default=1)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(name="orderitem_price_non_negative", condition=models.Q(price__gte=0)),
            models.CheckConstraint(name="orderitem_quantity_positive", condition=models.Q(quantity__gte=1)),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"OrderItem#{self.id} order={self.order_id} product={self.product_id} qty={self.quantity}"

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity
