import pytest
from catalog.models import Brand, Product
from catalog.tests.factories import BrandFactory, CategoryFactory, ProductFactory
from rest_framework.test import APIClient
from users.tests.factories import AdminFactory, UserFactory


@pytest.mark.django_db
def test_admin_create_product_requires_staff():
    brand = BrandFactory(name="Panasonic")
    category = CategoryFactory(name="Cameras")
    payload = {
        "name": "Lumix S5IIX",
        "brand": brand.id,
        "category": category.id,
        "price": "2199.00",
        "description": "A hybrid powerhouse",
        "image_url": "https://images.example.com/s5iix.jpg",
        "specs": {"resolution": "24.2MP", "video": "6K 30p / 4K 60p", "sensor": "Full-Frame CMOS"},
        "in_stock": 15,
    }
    client = APIClient()

    client.force_authenticate(user=UserFactory())
    forbidden = client.post("/api/v1/admin/catalog/products/", payload, format="json")
    assert forbidden.status_code == 403

    client.force_authenticate(user=AdminFactory())
    resp = client.post("/api/v1/admin/catalog/products/", payload, format="json")
    assert resp.status_code == 201
    assert resp.data["specs"]["sensor"] == "Full-Frame CMOS"
    assert Product.objects.filter(name="Lumix S5IIX", brand=brand).exists()


@pytest.mark.django_db
def test_admin_rejects_negative_price():
    client = APIClient()
    client.force_authenticate(user=AdminFactory())
    resp = client.post(
        "/api/v1/admin/catalog/products/",
        {
            "name": "Broken",
            "brand": BrandFactory().id,
            "price": "-1",
            "description": "x",
            "image_url": "https://images.example.com/x.jpg",
        },
        format="json",
    )
    assert resp.status_code == 400
    assert "price" in resp.data


@pytest.mark.django_db
def test_admin_update_and_delete_product():
    product = ProductFactory(in_stock=3)
    client = APIClient()
    client.force_authenticate(user=AdminFactory())

    resp = client.patch(f"/api/v1/admin/catalog/products/{product.id}/", {"in_stock": 7}, format="json")
    assert resp.status_code == 200
    assert resp.data["in_stock"] == 7

    deleted = client.delete(f"/api/v1/admin/catalog/products/{product.id}/")
    assert deleted.status_code == 204
    assert not Product.objects.filter(pk=product.id).exists()


@pytest.mark.django_db
def test_admin_brand_crud_and_protected_delete():
    client = APIClient()
    client.force_authenticate(user=AdminFactory())

    created = client.post("/api/v1/admin/catalog/brands/", {"name": "  Sigma "}, format="json")
    assert created.status_code == 201
    brand = Brand.objects.get(pk=created.data["id"])
    assert brand.name == "Sigma"

    duplicate = client.post("/api/v1/admin/catalog/brands/", {"name": "Sigma"}, format="json")
    assert duplicate.status_code == 400

    ProductFactory(brand=brand)
    blocked = client.delete(f"/api/v1/admin/catalog/brands/{brand.id}/")
    assert blocked.status_code == 400
    assert Brand.objects.filter(pk=brand.id).exists()


@pytest.mark.django_db
def test_admin_category_cannot_parent_itself():
    category = CategoryFactory(name="Lenses")
    client = APIClient()
    client.force_authenticate(user=AdminFactory())

    resp = client.patch(f"/api/v1/admin/catalog/categories/{category.id}/", {"parent": category.id}, format="json")
    assert resp.status_code == 400
