import factory
from factory.django import DjangoModelFactory
from notifications.models import Notification


class NotificationFactory(DjangoModelFactory):
    class Meta:
        model = Notification

    recipient = None
    message = factory.Sequence(lambda n: f"New Order #{n}")
    link = "/admin/orders"
