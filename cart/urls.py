"""Cart URL routes (v1)."""

from django.urls import path

from .views import CartAddView, CartCheckoutView, CartDetailView, CartRemoveView, CartSyncView, GuestCartView

app_name = "cart"

urlpatterns = [
    path("", CartDetailView.as_view(), name="cart-detail"),
    path("guest/", GuestCartView.as_view(), name="guest-cart"),
    path("sync/", CartSyncView.as_view(), name="cart-sync"),
    path("add/", CartAddView.as_view(), name="cart-add"),
    path("remove/", CartRemoveView.as_view(), name="cart-remove"),
    path("checkout/", CartCheckoutView.as_view(), name="cart-checkout"),
]
