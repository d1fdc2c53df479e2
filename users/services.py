"""Account services: registration, sign-in, profile and wishlist.

Views stay thin and call into these functions; every function takes the
account explicitly.
"""

import logging

from catalog.models import Product
from common.exceptions import AuthorizationError, NotFoundError, ValidationError
from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.utils.crypto import get_random_string
from rest_framework_simplejwt.tokens import RefreshToken

from .identity import GoogleIdentity, verify_google_token

logger = logging.getLogger("auth")

User = get_user_model()


def issue_tokens(user) -> dict:
    """Return a fresh JWT pair for ``user``."""
    refresh = RefreshToken.for_user(user)
    return {"access": str(refresh.access_token), "refresh": str(refresh)}


def username_from_email(email: str) -> str:
    """Derive an unused username from the local part of an email."""
    base = (email.split("@", 1)[0] or "user")[:140]
    candidate = base
    while User.objects.filter(username__iexact=candidate).exists():
        candidate = f"{base}-{get_random_string(6).lower()}"
    return candidate


@transaction.atomic
def register_user(*, first_name: str, last_name: str, email: str, password: str, phone: str = ""):
    email = email.strip().lower()
    if User.objects.filter(email=email).exists():
        raise ValidationError("User already exists.")
    user = User(
        username=username_from_email(email),
        email=email,
        first_name=first_name.strip(),
        last_name=last_name.strip(),
        name=f"{first_name.strip()} {last_name.strip()}".strip(),
        phone=phone or "",
    )
    try:
        validate_password(password, user=user)
    except DjangoValidationError as exc:
        raise ValidationError(" ".join(exc.messages)) from exc
    user.set_password(password)
    user.save()
    return user


def authenticate_identifier(identifier: str, password: str):
    """Resolve an account by email or username and check its password."""
    identifier = (identifier or "").strip()
    if not identifier or not password:
        raise ValidationError("Email and password are required.")
    if "@" in identifier:
        user = User.objects.filter(email=identifier.lower()).first()
    else:
        user = User.objects.filter(username=identifier).first()
    if user is None or not user.is_active or not user.check_password(password):
        raise AuthorizationError("Invalid email or password.")
    return user


def authenticate_admin(username: str, password: str):
    user = User.objects.filter(username=(username or "").strip()).first()
    if user is None or not user.is_active:
        raise AuthorizationError("Invalid credentials.")
    if not user.is_staff:
        raise AuthorizationError("Not authorized as admin.")
    if not user.check_password(password or ""):
        raise AuthorizationError("Invalid credentials.")
    return user


@transaction.atomic
def sign_in_with_google(token: str):
    """Find or create the account behind a Google ID token.

    Lookup order is ``google_id`` first, then an existing account with the same
    email (which gets linked), otherwise a new non-admin account. Name and
    picture are refreshed from Google on every sign-in.
    """
    identity: GoogleIdentity = verify_google_token(token)

    user = User.objects.select_for_update().filter(google_id=identity.subject).first()
    created = False
    if user is None:
        user = User.objects.select_for_update().filter(email=identity.email).first()
        if user is None:
            user = User(
                username=username_from_email(identity.email),
                email=identity.email,
                google_id=identity.subject,
            )
            user.set_unusable_password()
            created = True
        else:
            user.google_id = identity.subject

    if identity.name:
        user.name = identity.name
    if identity.picture:
        user.picture = identity.picture
    user.save()
    logger.info(
        "auth.google_signin",
        extra={"event": "auth.google_signin", "user_id": user.id, "created": created},
    )
    return user


@transaction.atomic
def update_profile(user, *, data: dict):
    """Apply a partial profile update.

    Only non-empty values overwrite stored ones. A password change requires
    ``current_password`` to match.
    """
    for field in ("name", "phone"):
        if data.get(field):
            setattr(user, field, data[field])
    address = data.get("address") or {}
    for field in ("street", "city", "postal_code", "country"):
        if address.get(field):
            setattr(user, field, address[field])

    new_password = data.get("password")
    if new_password:
        current = data.get("current_password") or ""
        if not user.has_usable_password():
            raise ValidationError("User has no password set.")
        if not user.check_password(current):
            raise AuthorizationError("Invalid current password.")
        try:
            validate_password(new_password, user=user)
        except DjangoValidationError as exc:
            raise ValidationError(" ".join(exc.messages)) from exc
        user.set_password(new_password)

    user.save()
    return user


def add_to_wishlist(user, product_id: int):
    product = Product.objects.filter(pk=product_id).first()
    if product is None:
        raise NotFoundError("Product not found.")
    # M2M add ignores rows that already exist
    user.wishlist.add(product)
    return user


def remove_from_wishlist(user, product_id: int):
    user.wishlist.remove(*Product.objects.filter(pk=product_id))
    return user


@transaction.atomic
def ensure_admin(*, username: str, email: str, password: str, name: str = "Admin User"):
    """Create the admin account or reset its password and staff flag."""
    user = User.objects.filter(username=username).first()
    created = user is None
    if created:
        user = User(username=username, email=email, name=name)
    user.is_staff = True
    user.is_superuser = True
    user.is_active = True
    user.set_password(password)
    user.save()
    return user, created
