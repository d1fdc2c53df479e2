from decimal import Decimal

import pytest
from catalog.tests.factories import BrandFactory, CategoryFactory, ProductFactory, ReviewFactory
from rest_framework.test import APIClient


@pytest.mark.django_db
def test_products_list_filters_ordering_and_keyword():
    cameras = CategoryFactory(name="Cameras")
    lenses = CategoryFactory(name="Lenses")
    sony = BrandFactory(name="Sony")
    canon = BrandFactory(name="Canon")

    a7 = ProductFactory(name="Alpha 7 IV", brand=sony, category=cameras, price=Decimal("2498"))
    r6 = ProductFactory(name="EOS R6 Mark II", brand=canon, category=cameras, price=Decimal("2499"))
    gm = ProductFactory(name="FE 50mm f/1.2 GM", brand=sony, category=lenses, price=Decimal("1998"))

    client = APIClient()

    resp = client.get("/api/v1/catalog/products/")
    assert resp.status_code == 200
    assert resp.data["count"] == 3
    first = resp.data["results"][0]
    assert {"id", "name", "brand", "category", "price", "image_url", "specs", "in_stock", "rating"} <= set(first)

    by_category = client.get(f"/api/v1/catalog/products/?category={lenses.id}")
    assert [p["id"] for p in by_category.data["results"]] == [gm.id]

    by_brand = client.get(f"/api/v1/catalog/products/?brand={sony.id}")
    assert {p["id"] for p in by_brand.data["results"]} == {a7.id, gm.id}

    by_keyword = client.get("/api/v1/catalog/products/?keyword=mark")
    assert [p["id"] for p in by_keyword.data["results"]] == [r6.id]

    by_brand_name = client.get("/api/v1/catalog/products/?keyword=canon")
    assert [p["id"] for p in by_brand_name.data["results"]] == [r6.id]

    ordered = client.get("/api/v1/catalog/products/?ordering=-price")
    assert [p["id"] for p in ordered.data["results"]] == [r6.id, a7.id, gm.id]


@pytest.mark.django_db
def test_products_out_of_range_page_is_404():
    ProductFactory()
    resp = APIClient().get("/api/v1/catalog/products/?page=9999")
    assert resp.status_code == 404


@pytest.mark.django_db
def test_product_detail_includes_brand_category_and_reviews():
    product = ProductFactory(name="Lumix S5IIX")
    ReviewFactory(product=product, rating=4, comment="Great video")

    resp = APIClient().get(f"/api/v1/catalog/products/{product.id}/")
    assert resp.status_code == 200
    assert resp.data["name"] == "Lumix S5IIX"
    assert resp.data["brand"]["name"] == product.brand.name
    assert resp.data["category"]["name"] == product.category.name
    assert resp.data["reviews"][0]["comment"] == "Great video"


@pytest.mark.django_db
def test_product_detail_unknown_id_is_404():
    resp = APIClient().get("/api/v1/catalog/products/999999/")
    assert resp.status_code == 404


@pytest.mark.django_db
def test_product_without_category_serializes_null():
    product = ProductFactory(category=None)
    resp = APIClient().get(f"/api/v1/catalog/products/{product.id}/")
    assert resp.status_code == 200
    assert resp.data["category"] is None


@pytest.mark.django_db
def test_brands_and_categories_lists():
    BrandFactory(name="Nikon")
    parent = CategoryFactory(name="Cameras")
    CategoryFactory(name="Mirrorless", parent=parent)
    client = APIClient()

    brands = client.get("/api/v1/catalog/brands/")
    assert brands.status_code == 200
    assert [b["name"] for b in brands.data] == ["Nikon"]

    categories = client.get("/api/v1/catalog/categories/")
    assert categories.status_code == 200
    mirrorless = next(c for c in categories.data if c["name"] == "Mirrorless")
    assert mirrorless["parent"] == parent.id
    assert mirrorless["parent_name"] == "Cameras"
