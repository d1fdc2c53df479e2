from decimal import Decimal

import pytest
from cart.services import checkout_cart, load_cart, merge_guest_cart
from cart.tests.factories import CartItemFactory
from catalog.tests.factories import ProductFactory
from users.tests.factories import UserFactory

SHIPPING = {"street": "5 Avenue Habib Bourguiba", "city": "Sousse", "postal_code": "4000", "country": "Tunisia"}


@pytest.mark.django_db
def test_guest_merge_then_checkout_freezes_prices(settings):
    settings.ORDER_TAX_RATE = Decimal("0")
    settings.ORDER_SHIPPING_FEE = Decimal("0")
    product_a = ProductFactory(price=Decimal("1500.00"))
    product_b = ProductFactory(price=Decimal("250.00"))
    user = UserFactory()
    CartItemFactory(cart__user=user, product=product_b, quantity=1)

    guest = [product_a.id, product_a.id, product_b.id]
    assert load_cart(guest_entries=guest).quantities() == {product_a.id: 2, product_b.id: 1}

    merged = merge_guest_cart(user=user, guest_entries=guest)
    assert merged.quantities() == {product_a.id: 2, product_b.id: 2}

    order = checkout_cart(user=user, shipping_address=SHIPPING, payment_method="CashOnDelivery")

    lines = {item.product_id: item for item in order.items.all()}
    assert len(lines) == 2
    assert lines[product_a.id].quantity == 2
    assert lines[product_b.id].quantity == 2
    assert order.total_price == Decimal("3500.00")
    assert load_cart(user=user).lines == ()

    product_a.price = Decimal("1.00")
    product_a.save(update_fields=["price"])
    order.refresh_from_db()
    assert order.total_price == Decimal("3500.00")
    assert order.items.get(product_id=product_a.id).price == Decimal("1500.00")
