from decimal import Decimal

import pytest
from cart.models import CartItem
from catalog.tests.factories import ProductFactory
from orders.models import Order
from rest_framework.test import APIClient
from users.tests.factories import UserFactory

SHIPPING = {"street": "12 Rue de Marseille", "city": "Tunis", "postal_code": "1000", "country": "Tunisia"}


def _client(user=None) -> APIClient:
    client = APIClient()
    if user is not None:
        client.force_authenticate(user=user)
    return client


@pytest.mark.django_db
def test_cart_detail_initial_empty():
    resp = _client(UserFactory()).get("/api/v1/cart/")

    assert resp.status_code == 200
    body = resp.json()
    assert body["items"] == []
    assert body["item_count"] == 0
    assert body["subtotal"] == "0.00"
    assert body["is_guest"] is False


@pytest.mark.django_db
def test_cart_endpoints_require_auth_except_guest_pricing():
    client = _client()
    assert client.get("/api/v1/cart/").status_code == 401
    assert client.post("/api/v1/cart/add/", {"product_id": 1}, format="json").status_code == 401
    assert client.post("/api/v1/cart/sync/", {"items": [1]}, format="json").status_code == 401

    product = ProductFactory(price=Decimal("80.00"))
    resp = client.post("/api/v1/cart/guest/", {"items": [product.id, product.id]}, format="json")
    assert resp.status_code == 200
    body = resp.json()
    assert body["is_guest"] is True
    assert body["items"][0]["quantity"] == 2
    assert body["subtotal"] == "160.00"


@pytest.mark.django_db
def test_add_and_remove_endpoints_return_updated_cart():
    user = UserFactory()
    product = ProductFactory(price=Decimal("1200.00"))
    client = _client(user)

    client.post("/api/v1/cart/add/", {"product_id": product.id}, format="json")
    resp = client.post("/api/v1/cart/add/", {"product_id": product.id}, format="json")
    assert resp.status_code == 200
    line = resp.json()["items"][0]
    assert line["product"]["name"] == product.name
    assert line["quantity"] == 2
    assert line["line_total"] == "2400.00"

    resp = client.post("/api/v1/cart/remove/", {"product_id": product.id}, format="json")
    assert resp.json()["items"][0]["quantity"] == 1
    resp = client.post("/api/v1/cart/remove/", {"product_id": product.id}, format="json")
    assert resp.json()["items"] == []


@pytest.mark.django_db
def test_add_rejects_malformed_product_id():
    resp = _client(UserFactory()).post("/api/v1/cart/add/", {"product_id": "abc"}, format="json")
    assert resp.status_code == 400


@pytest.mark.django_db
def test_sync_endpoint_sums_into_account_cart():
    user = UserFactory()
    a = ProductFactory()
    client = _client(user)
    client.post("/api/v1/cart/add/", {"product_id": a.id}, format="json")

    resp = client.post("/api/v1/cart/sync/", {"items": [{"_id": a.id}, a.id]}, format="json")

    assert resp.status_code == 200
    assert resp.json()["items"][0]["quantity"] == 3


@pytest.mark.django_db
def test_dangling_line_renders_null_product():
    user = UserFactory()
    client = _client(user)
    client.post("/api/v1/cart/add/", {"product_id": 987654}, format="json")

    body = client.get("/api/v1/cart/").json()

    assert body["items"][0]["product"] is None
    assert body["items"][0]["line_total"] == "0.00"
    assert body["item_count"] == 1


@pytest.mark.django_db
def test_checkout_empty_cart_is_rejected():
    resp = _client(UserFactory()).post("/api/v1/cart/checkout/", {"shipping_address": SHIPPING}, format="json")

    assert resp.status_code == 400
    assert resp.json()["detail"] == "No order items."
    assert Order.objects.count() == 0


@pytest.mark.django_db
def test_checkout_with_dangling_line_keeps_cart():
    user = UserFactory()
    client = _client(user)
    client.post("/api/v1/cart/add/", {"product_id": 555555}, format="json")

    resp = client.post("/api/v1/cart/checkout/", {"shipping_address": SHIPPING}, format="json")

    assert resp.status_code == 400
    assert CartItem.objects.filter(cart__user=user).count() == 1
    assert Order.objects.count() == 0


@pytest.mark.django_db
def test_checkout_creates_order_and_clears_cart():
    user = UserFactory()
    product = ProductFactory(price=Decimal("400.00"))
    client = _client(user)
    client.post("/api/v1/cart/add/", {"product_id": product.id}, format="json")

    resp = client.post(
        "/api/v1/cart/checkout/",
        {"shipping_address": SHIPPING, "payment_method": "CashOnDelivery"},
        format="json",
    )

    assert resp.status_code == 201
    body = resp.json()
    assert body["status"] == "pending"
    assert body["items"][0]["price"] == "400.00"
    assert body["shipping_address"]["city"] == "Tunis"
    assert not CartItem.objects.filter(cart__user=user).exists()
