"""Admin router for catalog write endpoints."""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .admin_views import BrandAdminViewSet, CategoryAdminViewSet, ProductAdminViewSet, UploadView

router = SimpleRouter()
router.register(r"brands", BrandAdminViewSet, basename="admin-brand")
router.register(r"categories", CategoryAdminViewSet, basename="admin-category")
router.register(r"products", ProductAdminViewSet, basename="admin-product")

urlpatterns = [
    path("uploads/", UploadView.as_view(), name="admin-uploads"),
    path("", include(router.urls)),
]
