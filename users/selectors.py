"""Read-only account queries."""

from django.contrib.auth import get_user_model


def list_users():
    return get_user_model().objects.order_by("-date_joined")


def wishlist_for(user):
    return user.wishlist.select_related("brand", "category").order_by("name")
