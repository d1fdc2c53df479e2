"""Catalog write services: reviews and image uploads."""

import base64
import binascii
import logging
import os
import uuid
from decimal import ROUND_HALF_UP, Decimal
from urllib.parse import urlparse

from common.exceptions import UpstreamError, ValidationError
from django.conf import settings
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from django.db import IntegrityError, transaction
from django.db.models import Avg, Count

from .models import Product, Review

logger = logging.getLogger("lumiere.catalog")

ALLOWED_IMAGE_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
    "image/gif": ".gif",
}


@transaction.atomic
def create_review(*, product: Product, user, rating: int, comment: str = "") -> Review:
    """Add a review and refresh the product's rating and review count.

    Each account may review a product once.
    """
    if Review.objects.filter(product=product, user=user).exists():
        raise ValidationError("Product already reviewed.")
    try:
        with transaction.atomic():
            review = Review.objects.create(
                product=product,
                user=user,
                name=user.display_name,
                rating=rating,
                comment=comment or "",
            )
    except IntegrityError as exc:
        raise ValidationError("Product already reviewed.") from exc

    refresh_rating(product)
    logger.info(
        "catalog.review_created",
        extra={"event": "catalog.review_created", "product_id": product.id, "user_id": user.id, "rating": rating},
    )
    return review


def refresh_rating(product: Product) -> Product:
    stats = Review.objects.filter(product=product).aggregate(avg=Avg("rating"), count=Count("id"))
    avg = Decimal(str(stats["avg"] or 0)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    product.rating = avg
    product.num_reviews = stats["count"] or 0
    product.save(update_fields=["rating", "num_reviews", "updated_at"])
    return product


def store_upload(*, filename: str, content_type: str, data: str) -> str:
    """Decode a base64 image and persist it through the default storage.

    Returns the public URL of the stored file.
    """
    if not filename or not data:
        raise ValidationError("Filename and data are required.")
    content_type = (content_type or "image/jpeg").lower()
    if content_type not in ALLOWED_IMAGE_TYPES:
        raise ValidationError("Only image uploads are allowed.")
    if "," in data and data.lstrip().startswith("data:"):
        data = data.split(",", 1)[1]
    try:
        raw = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValidationError("Upload data is not valid base64.") from exc
    if not raw:
        raise ValidationError("Upload is empty.")
    if len(raw) > settings.UPLOAD_MAX_BYTES:
        raise ValidationError("Upload is too large.")

    ext = os.path.splitext(filename)[1].lower() or ALLOWED_IMAGE_TYPES[content_type]
    name = f"uploads/{uuid.uuid4().hex}{ext}"
    try:
        stored = default_storage.save(name, ContentFile(raw))
        url = default_storage.url(stored)
    except OSError as exc:
        logger.warning("catalog.upload_failed", extra={"event": "catalog.upload_failed", "error": str(exc)})
        raise UpstreamError("Failed to upload image.") from exc
    logger.info("catalog.upload_stored", extra={"event": "catalog.upload_stored", "path": stored, "size": len(raw)})
    return url


def storage_name_for_url(url: str) -> str:
    """Translate a public media URL back to its storage name."""
    path = urlparse(url or "").path
    prefix = urlparse(settings.MEDIA_URL).path
    if not path.startswith(prefix) or len(path) == len(prefix):
        raise ValidationError("URL does not point at an uploaded file.")
    return path[len(prefix) :]


def delete_upload(*, url: str) -> None:
    if not url:
        raise ValidationError("URL is required.")
    name = storage_name_for_url(url)
    try:
        default_storage.delete(name)
    except OSError as exc:
        logger.warning("catalog.upload_delete_failed", extra={"event": "catalog.upload_delete_failed", "error": str(exc)})
        raise UpstreamError("Failed to delete image.") from exc
    logger.info("catalog.upload_deleted", extra={"event": "catalog.upload_deleted", "path": name})
