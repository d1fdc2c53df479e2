"""URL routes for the orders app (v1)."""

from django.urls import path

from .views import (
    MyOrdersView,
    OrderCancelView,
    OrderDeliverView,
    OrderDetailView,
    OrderListCreateView,
    OrderPayView,
)

app_name = "orders"

urlpatterns = [
    path("", OrderListCreateView.as_view(), name="order-list"),
    path("mine/", MyOrdersView.as_view(), name="order-mine"),
    path("<int:order_id>/", OrderDetailView.as_view(), name="order-detail"),
    path("<int:order_id>/pay/", OrderPayView.as_view(), name="order-pay"),
    path("<int:order_id>/deliver/", OrderDeliverView.as_view(), name="order-deliver"),
    path("<int:order_id>/cancel/", OrderCancelView.as_view(), name="order-cancel"),
]
