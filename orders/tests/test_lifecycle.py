from decimal import Decimal
from unittest.mock import patch

import pytest
from catalog.tests.factories import ProductFactory
from common.exceptions import AuthorizationError, InvalidStateError, NotFoundError, ValidationError
from django.db import transaction
from notifications.models import Notification
from orders.models import Order
from orders.pricing import PriceBreakdown
from orders.services import cancel_order, create_order, mark_delivered, mark_paid, place_order, snapshot_lines
from orders.tests.factories import OrderFactory
from users.tests.factories import AdminFactory, UserFactory

SHIPPING = {"street": "12 Rue de Marseille", "city": "Tunis", "postal_code": "1000", "country": "Tunisia"}
ZERO = PriceBreakdown(items=Decimal("0"), shipping=Decimal("0"), tax=Decimal("0"), total=Decimal("0"))


@pytest.mark.django_db
def test_create_rejects_empty_snapshot():
    with pytest.raises(ValidationError):
        create_order(user=UserFactory(), items=[], shipping_address=SHIPPING, payment_method="Card", prices=ZERO)
    with pytest.raises(ValidationError):
        place_order(user=UserFactory(), lines={}, shipping_address=SHIPPING, payment_method="Card")
    assert Order.objects.count() == 0


@pytest.mark.django_db
def test_place_order_snapshots_catalog_and_quotes(settings):
    settings.ORDER_TAX_RATE = Decimal("0.10")
    settings.ORDER_SHIPPING_FEE = Decimal("50.00")
    product = ProductFactory(name="Fujifilm X-T5", price=Decimal("300.00"))

    order = place_order(user=UserFactory(), lines={product.id: 2}, shipping_address=SHIPPING, payment_method="Card")

    item = order.items.get()
    assert (item.name, item.price, item.quantity, item.image) == (
        "Fujifilm X-T5",
        Decimal("300.00"),
        2,
        product.image_url,
    )
    assert order.items_price == Decimal("600.00")
    assert order.tax_price == Decimal("60.00")
    assert order.shipping_price == Decimal("50.00")
    assert order.total_price == Decimal("710.00")
    assert order.shipping_address["city"] == "Tunis"


@pytest.mark.django_db
def test_catalog_changes_do_not_touch_placed_order():
    product = ProductFactory(price=Decimal("800.00"))
    order = place_order(user=UserFactory(), lines={product.id: 1}, shipping_address=SHIPPING, payment_method="Card")
    total = order.total_price

    product.price = Decimal("10.00")
    product.name = "Renamed"
    product.save()
    order.refresh_from_db()

    assert order.total_price == total
    assert order.items.get().price == Decimal("800.00")
    assert order.items.get().name != "Renamed"


@pytest.mark.django_db
def test_snapshot_rejects_missing_product():
    with pytest.raises(ValidationError):
        snapshot_lines({123456: 1})


@pytest.mark.django_db
def test_create_notifies_admins_and_emails_owner(mailoutbox, settings, django_capture_on_commit_callbacks):
    settings.ADMIN_NOTIFICATION_EMAIL = "owner@lumiere.test"
    product = ProductFactory()

    with django_capture_on_commit_callbacks(execute=True):
        order = place_order(
            user=UserFactory(), lines={product.id: 1}, shipping_address=SHIPPING, payment_method="Card"
        )

    note = Notification.objects.get()
    assert note.recipient is None
    assert f"#{order.id}" in note.message
    assert len(mailoutbox) == 1
    assert mailoutbox[0].to == ["owner@lumiere.test"]


@pytest.mark.django_db
def test_create_survives_notification_failure():
    product = ProductFactory()
    with patch("notifications.services.Notification.objects.create", side_effect=RuntimeError("db down")):
        order = place_order(
            user=UserFactory(), lines={product.id: 1}, shipping_address=SHIPPING, payment_method="Card"
        )
    assert Order.objects.filter(pk=order.pk).exists()


@pytest.mark.django_db
def test_no_order_email_when_transaction_rolls_back(mailoutbox, django_capture_on_commit_callbacks):
    product = ProductFactory()

    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        with pytest.raises(RuntimeError):
            with transaction.atomic():
                place_order(
                    user=UserFactory(), lines={product.id: 1}, shipping_address=SHIPPING, payment_method="Card"
                )
                raise RuntimeError("checkout aborted")

    assert callbacks == []
    assert mailoutbox == []
    assert Order.objects.count() == 0


@pytest.mark.django_db
def test_create_rejects_total_beyond_money_columns():
    product = ProductFactory(price=Decimal("99999999.99"))
    with pytest.raises(ValidationError):
        place_order(user=UserFactory(), lines={product.id: 1000}, shipping_address=SHIPPING, payment_method="Card")
    assert Order.objects.count() == 0


@pytest.mark.django_db
def test_mark_paid_is_admin_only_and_overwrites():
    order = OrderFactory()
    with pytest.raises(AuthorizationError):
        mark_paid(order_id=order.id, actor=order.user, payment_result={"id": "x"})

    admin = AdminFactory()
    first = mark_paid(order_id=order.id, actor=admin, payment_result={"id": "p1", "status": "COMPLETED"})
    first_paid_at = first.paid_at
    second = mark_paid(order_id=order.id, actor=admin, payment_result={"id": "p2"})

    assert second.is_paid
    assert second.payment_result == {"id": "p2"}
    assert second.paid_at >= first_paid_at


@pytest.mark.django_db
def test_mark_delivered_emails_owner_and_notifies(mailoutbox, django_capture_on_commit_callbacks):
    order = OrderFactory(user__email="buyer@example.com")

    with django_capture_on_commit_callbacks(execute=True):
        updated = mark_delivered(order_id=order.id, actor=AdminFactory())

    assert updated.is_delivered and updated.delivered_at is not None
    assert [m.to for m in mailoutbox] == [["buyer@example.com"]]
    assert "Shipped" in mailoutbox[0].subject
    assert Notification.objects.get().recipient == order.user


@pytest.mark.django_db
def test_mark_delivered_swallows_email_failure(django_capture_on_commit_callbacks):
    order = OrderFactory()
    with patch("orders.emails.send_mail", side_effect=OSError("smtp down")) as send:
        with django_capture_on_commit_callbacks(execute=True):
            updated = mark_delivered(order_id=order.id, actor=AdminFactory())
    assert send.called
    assert updated.is_delivered
    order.refresh_from_db()
    assert order.is_delivered


@pytest.mark.django_db
def test_delivery_email_runs_on_daemon_thread_when_async(settings, django_capture_on_commit_callbacks):
    settings.ORDER_EMAILS_ASYNC = True
    order = OrderFactory()
    with patch("orders.emails.threading.Thread") as thread:
        with django_capture_on_commit_callbacks(execute=True):
            mark_delivered(order_id=order.id, actor=AdminFactory())
    assert thread.call_args.kwargs["daemon"] is True
    thread.return_value.start.assert_called_once()


@pytest.mark.django_db
def test_flags_are_independent():
    order = OrderFactory()
    admin = AdminFactory()
    mark_delivered(order_id=order.id, actor=admin)
    mark_paid(order_id=order.id, actor=admin)

    order.refresh_from_db()
    assert order.is_delivered and order.is_paid


@pytest.mark.django_db
def test_cancel_guards():
    admin = AdminFactory()
    stranger = UserFactory()

    delivered = OrderFactory(is_delivered=True)
    for actor in (delivered.user, admin, stranger):
        with pytest.raises(InvalidStateError):
            cancel_order(order_id=delivered.id, actor=actor)

    pending = OrderFactory()
    with pytest.raises(AuthorizationError):
        cancel_order(order_id=pending.id, actor=stranger)
    pending.refresh_from_db()
    assert not pending.is_cancelled

    with pytest.raises(NotFoundError):
        cancel_order(order_id=999999, actor=admin)


@pytest.mark.django_db
@pytest.mark.parametrize("by_admin", [False, True])
def test_cancel_by_owner_or_admin_is_stable(by_admin):
    order = OrderFactory(is_paid=True)
    actor = AdminFactory() if by_admin else order.user

    first = cancel_order(order_id=order.id, actor=actor)
    second = cancel_order(order_id=order.id, actor=actor)

    assert first.is_cancelled and second.is_cancelled
    assert second.cancelled_at == first.cancelled_at
    assert Notification.objects.filter(recipient__isnull=True).count() == 1
