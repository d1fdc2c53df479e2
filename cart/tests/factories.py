import factory
from cart.models import Cart, CartItem
from factory.django import DjangoModelFactory


class CartFactory(DjangoModelFactory):
    class Meta:
        model = Cart
        django_get_or_create = ("user",)

    user = factory.SubFactory("users.tests.factories.UserFactory")


class CartItemFactory(DjangoModelFactory):
    class Meta:
        model = CartItem

    cart = factory.SubFactory(CartFactory)
    product = factory.SubFactory("catalog.tests.factories.ProductFactory")
    quantity = 1
