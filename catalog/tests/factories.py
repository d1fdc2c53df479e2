from decimal import Decimal

import factory
from catalog.models import Brand, Category, Product, Review
from factory import Faker
from factory.django import DjangoModelFactory


class BrandFactory(DjangoModelFactory):
    class Meta:
        model = Brand
        django_get_or_create = ("name",)

    name = factory.Sequence(lambda n: f"Brand {n}")
    logo_url = ""


class CategoryFactory(DjangoModelFactory):
    class Meta:
        model = Category
        django_get_or_create = ("name",)

    name = factory.Sequence(lambda n: f"Category {n}")


class ProductFactory(DjangoModelFactory):
    class Meta:
        model = Product

    name = factory.Sequence(lambda n: f"Camera {n}")
    brand = factory.SubFactory(BrandFactory)
    category = factory.SubFactory(CategoryFactory)
    price = Decimal("1000.00")
    description = Faker("sentence")
    image_url = factory.Sequence(lambda n: f"https://images.example.com/camera-{n}.jpg")
    specs = factory.LazyFunction(lambda: {"resolution": "24.2MP", "video": "4K 60p", "sensor": "Full-Frame CMOS"})
    in_stock = 10


class ReviewFactory(DjangoModelFactory):
    class Meta:
        model = Review

    product = factory.SubFactory(ProductFactory)
    user = factory.SubFactory("users.tests.factories.UserFactory")
    name = factory.LazyAttribute(lambda o: o.user.display_name)
    rating = 5
    comment = Faker("sentence")
