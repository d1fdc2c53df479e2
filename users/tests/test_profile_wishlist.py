import pytest
from catalog.tests.factories import ProductFactory
from django.contrib.auth import get_user_model
from django.core.management import call_command
from rest_framework.test import APIClient
from users.tests.factories import PASSWORD, AdminFactory, UserFactory


@pytest.mark.django_db
def test_profile_update_keeps_blank_values_and_sets_address():
    user = UserFactory(name="Sami", phone="+21611111111")
    client = APIClient()
    client.force_authenticate(user=user)

    resp = client.patch(
        "/api/v1/account/profile/",
        {"name": "", "phone": "+21622222222", "address": {"street": "1 Rue de Marseille", "city": "Tunis"}},
        format="json",
    )
    assert resp.status_code == 200
    assert resp.data["name"] == "Sami"
    assert resp.data["phone"] == "+21622222222"
    assert resp.data["address"]["city"] == "Tunis"
    assert resp.data["address"]["country"] == ""


@pytest.mark.django_db
def test_profile_password_change_requires_current_password():
    user = UserFactory()
    client = APIClient()
    client.force_authenticate(user=user)

    missing = client.patch("/api/v1/account/profile/", {"password": "NewStrongPass456!"}, format="json")
    assert missing.status_code == 400

    wrong = client.patch(
        "/api/v1/account/profile/",
        {"password": "NewStrongPass456!", "current_password": "wrong"},
        format="json",
    )
    assert wrong.status_code == 401

    ok = client.patch(
        "/api/v1/account/profile/",
        {"password": "NewStrongPass456!", "current_password": PASSWORD},
        format="json",
    )
    assert ok.status_code == 200
    user.refresh_from_db()
    assert user.check_password("NewStrongPass456!")


@pytest.mark.django_db
def test_wishlist_add_is_deduplicated_and_remove_works():
    user = UserFactory()
    product = ProductFactory(name="X-T5")
    client = APIClient()
    client.force_authenticate(user=user)

    first = client.post(f"/api/v1/account/wishlist/{product.id}/")
    second = client.post(f"/api/v1/account/wishlist/{product.id}/")
    assert first.status_code == 200
    assert [p["id"] for p in second.data] == [product.id]

    listing = client.get("/api/v1/account/wishlist/")
    assert listing.data[0]["name"] == "X-T5"

    removed = client.delete(f"/api/v1/account/wishlist/{product.id}/")
    assert removed.status_code == 200
    assert removed.data == []


@pytest.mark.django_db
def test_wishlist_unknown_product_is_404():
    client = APIClient()
    client.force_authenticate(user=UserFactory())
    resp = client.post("/api/v1/account/wishlist/999999/")
    assert resp.status_code == 404


@pytest.mark.django_db
def test_admin_user_list_is_staff_only():
    UserFactory.create_batch(2)
    client = APIClient()

    client.force_authenticate(user=UserFactory())
    assert client.get("/api/v1/admin/users/").status_code == 403

    client.force_authenticate(user=AdminFactory())
    resp = client.get("/api/v1/admin/users/")
    assert resp.status_code == 200
    assert resp.data["count"] == 4


@pytest.mark.django_db
def test_create_admin_command_creates_then_resets():
    call_command("create_admin", username="boss", email="boss@lumiere.com", password="first-Pass-123")
    call_command("create_admin", username="boss", email="boss@lumiere.com", password="second-Pass-456")

    admin = get_user_model().objects.get(username="boss")
    assert admin.is_staff
    assert admin.check_password("second-Pass-456")
