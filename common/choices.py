"""Shared enumerations and choices used across apps."""

from django.db import models


class OrderStatus(models.TextChoices):
    """Display statuses derived from an order's lifecycle flags.

    Never stored; see `orders.services.display_status` for the precedence.
    """

    PENDING = "pending", "Pending"
    PAID = "paid", "Paid"
    DELIVERED = "delivered", "Delivered"
    CANCELLED = "cancelled", "Cancelled"


class PaymentMethod(models.TextChoices):
    CASH_ON_DELIVERY = "CashOnDelivery", "Cash on delivery"
    CARD = "Card", "Card"
    BANK_TRANSFER = "BankTransfer", "Bank transfer"


class NotificationType(models.TextChoices):
    """Categories for in-app notifications."""

    ORDER = "order", "Order"
    SYSTEM = "system", "System"
    USER = "user", "User"
