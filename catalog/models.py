"""Catalog app models.

Reference data for the storefront: brands, categories, products and
customer reviews. Carts and orders point at products by id; an order line
keeps its own copy of name, price and image.
"""

from decimal import Decimal

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class TimeStampedModel(models.Model):
    """Abstract base model adding created/updated timestamps."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Brand(TimeStampedModel):
    name = models.CharField(max_length=120, unique=True)
    logo_url = models.URLField(max_length=500, blank=True)

    class Meta:
        ordering = ["name"]

    def save(self, *args, **kwargs):
        self.name = (self.name or "").strip()
        super().save(*args, **kwargs)

    def __str__(self) -> str:  # pragma: no cover
        return self.name


class Category(TimeStampedModel):
    """Product category; ``parent`` allows one level of nesting or more."""

    name = models.CharField(max_length=120, unique=True)
    parent = models.ForeignKey(
        "self",
        null=True,
        blank=True,
        related_name="children",
        on_delete=models.SET_NULL,
    )

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "categories"

    def save(self, *args, **kwargs):
        self.name = (self.name or "").strip()
        super().save(*args, **kwargs)

    def __str__(self) -> str:  # pragma: no cover
        return self.name


class Product(TimeStampedModel):
    """A camera, lens, drone or accessory for sale.

    ``specs`` holds the free-form spec sheet shown on the product page
    (``resolution``, ``video``, ``sensor``). ``rating`` and ``num_reviews``
    are denormalized from :class:`Review`.
    """

    name = models.CharField(max_length=200)
    brand = models.ForeignKey(Brand, related_name="products", on_delete=models.PROTECT)
    category = models.ForeignKey(
        Category,
        related_name="products",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
    )
    price = models.DecimalField(max_digits=12, decimal_places=2)
    description = models.TextField()
    image_url = models.CharField(max_length=500)
    specs = models.JSONField(default=dict, blank=True)
    in_stock = models.PositiveIntegerField(default=0)
    rating = models.DecimalField(max_digits=3, decimal_places=2, default=Decimal("0"))
    num_reviews = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["name"]
        constraints = [
            models.CheckConstraint(name="product_price_non_negative", condition=models.Q(price__gte=0)),
        ]
        indexes = [
            models.Index(fields=["brand", "category"], name="catalog_product_brand_cat_idx"),
            models.Index(fields=["price"], name="catalog_product_price_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return self.name


class Review(TimeStampedModel):
    product = models.ForeignKey(Product, related_name="reviews", on_delete=models.CASCADE)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, related_name="reviews", on_delete=models.CASCADE)
    name = models.CharField(max_length=150)
    rating = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])
    comment = models.TextField(blank=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["product", "user"], name="unique_review_per_user_product"),
            models.CheckConstraint(
                name="review_rating_between_1_and_5",
                condition=models.Q(rating__gte=1) & models.Q(rating__lte=5),
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.product_id}:{self.user_id} ({self.rating})"
