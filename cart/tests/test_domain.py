from decimal import Decimal

from cart.domain import CartLine, CartView, collapse_guest_entries, product_ref


def test_collapse_counts_repeated_references_in_first_seen_order():
    counts = collapse_guest_entries([5, 3, 5, 5, 3, 9])

    assert counts == {5: 3, 3: 2, 9: 1}
    assert list(counts) == [5, 3, 9]


def test_collapse_accepts_product_objects_and_string_ids():
    entries = [{"_id": 4}, {"id": "4"}, {"product": {"id": 7}}, "7", 7]

    assert collapse_guest_entries(entries) == {4: 2, 7: 3}


def test_collapse_drops_unusable_entries():
    entries = [None, "abc", {"name": "no id"}, -1, 0, True, 2]

    assert collapse_guest_entries(entries) == {2: 1}
    assert collapse_guest_entries([]) == {}
    assert collapse_guest_entries(None) == {}


def test_product_ref_prefers_id_keys():
    assert product_ref({"id": 3, "_id": 8}) == 3
    assert product_ref({"_id": 8}) == 8
    assert product_ref(" 12 ") == 12
    assert product_ref(3.0) is None


def test_cart_view_totals_skip_missing_products():
    view = CartView(
        lines=(
            CartLine(product_id=1, quantity=2, product=object(), unit_price=Decimal("10.50")),
            CartLine(product_id=2, quantity=3),
        ),
        account_id=None,
    )

    assert view.is_guest
    assert view.item_count == 5
    assert view.subtotal == Decimal("21.00")
    assert view.quantities() == {1: 2, 2: 3}
