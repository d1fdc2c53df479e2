"""Account routes under /api/v1/: ``auth/``, ``account/`` and ``admin/users/``."""

from django.urls import path

from .views import (
    AdminSignInView,
    AdminUserListView,
    GoogleSignInView,
    ProfileView,
    RefreshView,
    RegisterView,
    SignInView,
    SignOutView,
    VerifyView,
    WishlistItemView,
    WishlistView,
)

urlpatterns = [
    path("auth/google/", GoogleSignInView.as_view(), name="google_signin"),
    path("auth/signin/", SignInView.as_view(), name="signin"),
    path("auth/admin-signin/", AdminSignInView.as_view(), name="admin_signin"),
    path("auth/register/", RegisterView.as_view(), name="register"),
    path("auth/refresh/", RefreshView.as_view(), name="token_refresh"),
    path("auth/verify/", VerifyView.as_view(), name="token_verify"),
    path("auth/signout/", SignOutView.as_view(), name="signout"),
    path("account/profile/", ProfileView.as_view(), name="profile"),
    path("account/wishlist/", WishlistView.as_view(), name="wishlist"),
    path("account/wishlist/<int:product_id>/", WishlistItemView.as_view(), name="wishlist_item"),
    path("admin/users/", AdminUserListView.as_view(), name="admin_users"),
]
