"""User model for shop accounts.

Accounts come from three places: self-registration with a password, Google
sign-in (linked by ``google_id`` or by email) and the ``create_admin``
command. An administrator is simply a staff user.
"""

from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """Shop account with a unique email, display name and postal address.

    Fields:
    - email: unique and stored lowercase.
    - name: display name shown on orders and in the back office.
    - google_id: subject of the Google identity, unique when set.
    - street, city, postal_code, country: default shipping address.
    - wishlist: products saved for later, no duplicates.
    """

    email = models.EmailField(unique=True)
    name = models.CharField(max_length=150, blank=True)
    phone = models.CharField(max_length=32, blank=True)
    google_id = models.CharField(max_length=255, unique=True, null=True, blank=True)
    picture = models.URLField(max_length=500, blank=True)

    street = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=120, blank=True)
    postal_code = models.CharField(max_length=20, blank=True)
    country = models.CharField(max_length=120, blank=True)

    wishlist = models.ManyToManyField("catalog.Product", related_name="wishlisted_by", blank=True)

    def save(self, *args, **kwargs):
        """Normalize email and phone before persisting."""
        if self.email:
            self.email = self.email.strip().lower()
        if self.phone:
            self.phone = self.phone.strip()
        if not self.google_id:
            self.google_id = None
        super().save(*args, **kwargs)

    @property
    def is_admin(self) -> bool:
        return self.is_staff

    @property
    def display_name(self) -> str:
        return self.name or self.get_full_name() or self.username

    @property
    def address(self) -> dict:
        return {
            "street": self.street,
            "city": self.city,
            "postal_code": self.postal_code,
            "country": self.country,
        }

    def __str__(self) -> str:
        return self.email or self.username
