from decimal import Decimal

import factory
from factory.django import DjangoModelFactory
from orders.models import Order, OrderItem


class OrderFactory(DjangoModelFactory):
    class Meta:
        model = Order

    user = factory.SubFactory("users.tests.factories.UserFactory")
    shipping_street = "12 Rue de Marseille"
    shipping_city = "Tunis"
    shipping_postal_code = "1000"
    shipping_country = "Tunisia"
    items_price = Decimal("1000.00")
    tax_price = Decimal("150.00")
    shipping_price = Decimal("50.00")
    total_price = Decimal("1200.00")


class OrderItemFactory(DjangoModelFactory):
    class Meta:
        model = OrderItem

    order = factory.SubFactory(OrderFactory)
    product = factory.SubFactory("catalog.tests.factories.ProductFactory")
    name = factory.LazyAttribute(lambda o: o.product.name)
    image = factory.LazyAttribute(lambda o: o.product.image_url)
    price = factory.LazyAttribute(lambda o: o.product.price)
    quantity = 1
