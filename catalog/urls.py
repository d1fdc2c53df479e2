"""URL routes for the catalog app."""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .views import BrandViewSet, CategoryViewSet, ProductViewSet

router = SimpleRouter()
router.register(r"products", ProductViewSet, basename="product")
router.register(r"brands", BrandViewSet, basename="brand")
router.register(r"categories", CategoryViewSet, basename="category")

urlpatterns = [path("", include(router.urls))]
