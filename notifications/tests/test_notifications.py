import pytest
from common.exceptions import NotFoundError
from notifications.models import Notification
from notifications.services import mark_read, notify_admins, notify_user
from notifications.tests.factories import NotificationFactory
from rest_framework.test import APIClient
from users.tests.factories import AdminFactory, UserFactory


def _client(user=None) -> APIClient:
    client = APIClient()
    if user is not None:
        client.force_authenticate(user=user)
    return client


@pytest.mark.django_db
def test_notify_helpers_target_admins_or_user():
    user = UserFactory()
    for_admins = notify_admins(message="New order")
    for_user = notify_user(user=user, message="Shipped", type="user")

    assert for_admins.recipient is None
    assert for_user.recipient == user
    assert for_user.type == "user"


@pytest.mark.django_db
def test_admins_see_broadcasts_customers_only_their_own():
    admin = AdminFactory()
    customer = UserFactory()
    broadcast = NotificationFactory()
    own = NotificationFactory(recipient=customer)
    NotificationFactory(recipient=UserFactory())

    admin_ids = [n["id"] for n in _client(admin).get("/api/v1/notifications/").json()]
    customer_ids = [n["id"] for n in _client(customer).get("/api/v1/notifications/").json()]

    assert admin_ids == [broadcast.id]
    assert customer_ids == [own.id]


@pytest.mark.django_db
def test_list_is_newest_first_and_capped(settings):
    settings.NOTIFICATIONS_LIST_LIMIT = 3
    admin = AdminFactory()
    created = [NotificationFactory() for _ in range(5)]

    body = _client(admin).get("/api/v1/notifications/").json()

    assert [n["id"] for n in body] == [n.id for n in reversed(created)][:3]


@pytest.mark.django_db
def test_mark_read_and_read_all():
    admin = AdminFactory()
    first, second = NotificationFactory(), NotificationFactory()
    client = _client(admin)

    resp = client.post(f"/api/v1/notifications/{first.id}/read/")
    assert resp.status_code == 200
    assert resp.json()["is_read"] is True

    resp = client.post("/api/v1/notifications/read-all/")
    assert resp.status_code == 200
    assert resp.json()["updated"] == 1
    second.refresh_from_db()
    assert second.is_read


@pytest.mark.django_db
def test_cannot_read_someone_elses_notification():
    other = NotificationFactory(recipient=UserFactory())
    with pytest.raises(NotFoundError):
        mark_read(user=UserFactory(), notification_id=other.id)

    resp = _client(UserFactory()).post(f"/api/v1/notifications/{other.id}/read/")
    assert resp.status_code == 404
    assert not Notification.objects.get(pk=other.pk).is_read


@pytest.mark.django_db
def test_notifications_require_auth():
    assert _client().get("/api/v1/notifications/").status_code == 401
