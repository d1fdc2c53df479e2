"""Admin endpoints for the catalog: CRUD on reference data and image uploads.

Endpoints are restricted to staff users and use scoped throttling.
"""

from common.exceptions import UpstreamError, ValidationError
from django.db.models import ProtectedError
from drf_spectacular.utils import OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import permissions, status, viewsets
from rest_framework.response import Response
from rest_framework.views import APIView

from . import services
from .admin_serializers import (
    BrandAdminSerializer,
    CategoryAdminSerializer,
    ProductAdminSerializer,
    UploadDeleteSerializer,
    UploadSerializer,
)
from .models import Brand, Category, Product


class AdminBaseViewSet(viewsets.ModelViewSet):
    permission_classes = [permissions.IsAdminUser]
    throttle_scope = "catalog_admin_write"


@extend_schema_view(
    list=extend_schema(tags=["Admin Endpoints"], summary="List brands (admin)"),
    retrieve=extend_schema(tags=["Admin Endpoints"], summary="Get brand (admin)"),
    create=extend_schema(tags=["Admin Endpoints"], summary="Create brand"),
    update=extend_schema(tags=["Admin Endpoints"], summary="Update brand"),
    partial_update=extend_schema(tags=["Admin Endpoints"], summary="Partial update brand"),
    destroy=extend_schema(tags=["Admin Endpoints"], summary="Delete brand"),
)
class BrandAdminViewSet(AdminBaseViewSet):
    queryset = Brand.objects.all().order_by("name")
    serializer_class = BrandAdminSerializer

    def destroy(self, request, *args, **kwargs):
        try:
            return super().destroy(request, *args, **kwargs)
        except ProtectedError:
            return Response(
                {"detail": "Brand still has products."},
                status=status.HTTP_400_BAD_REQUEST,
            )


@extend_schema_view(
    list=extend_schema(tags=["Admin Endpoints"], summary="List categories (admin)"),
    retrieve=extend_schema(tags=["Admin Endpoints"], summary="Get category (admin)"),
    create=extend_schema(tags=["Admin Endpoints"], summary="Create category"),
    update=extend_schema(tags=["Admin Endpoints"], summary="Update category"),
    partial_update=extend_schema(tags=["Admin Endpoints"], summary="Partial update category"),
    destroy=extend_schema(tags=["Admin Endpoints"], summary="Delete category"),
)
class CategoryAdminViewSet(AdminBaseViewSet):
    queryset = Category.objects.select_related("parent").order_by("name")
    serializer_class = CategoryAdminSerializer


@extend_schema_view(
    list=extend_schema(tags=["Admin Endpoints"], summary="List products (admin)"),
    retrieve=extend_schema(tags=["Admin Endpoints"], summary="Get product (admin)"),
    create=extend_schema(tags=["Admin Endpoints"], summary="Create product"),
    update=extend_schema(tags=["Admin Endpoints"], summary="Update product"),
    partial_update=extend_schema(tags=["Admin Endpoints"], summary="Partial update product"),
    destroy=extend_schema(tags=["Admin Endpoints"], summary="Delete product"),
)
class ProductAdminViewSet(AdminBaseViewSet):
    queryset = Product.objects.select_related("brand", "category").order_by("name")
    serializer_class = ProductAdminSerializer


class UploadView(APIView):
    """Store product images in the media storage and remove them again."""

    permission_classes = [permissions.IsAdminUser]
    throttle_scope = "uploads"

    @extend_schema(
        tags=["Admin Endpoints"],
        summary="Upload an image",
        description="Accepts a base64 encoded image and returns its public URL.",
        request=UploadSerializer,
        responses={
            201: OpenApiResponse(description="Stored; body is {url}"),
            400: OpenApiResponse(description="Missing data, not an image or too large"),
            502: OpenApiResponse(description="Storage failure"),
        },
    )
    def post(self, request):
        serializer = UploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            url = services.store_upload(**serializer.validated_data)
        except ValidationError as e:
            return Response({"detail": e.detail}, status=status.HTTP_400_BAD_REQUEST)
        except UpstreamError as e:
            return Response({"detail": e.detail}, status=status.HTTP_502_BAD_GATEWAY)
        return Response({"url": url}, status=status.HTTP_201_CREATED)

    @extend_schema(
        tags=["Admin Endpoints"],
        summary="Delete an uploaded image",
        request=UploadDeleteSerializer,
        responses={200: OpenApiResponse(description="Deleted"), 400: OpenApiResponse(description="Bad URL")},
    )
    def delete(self, request):
        serializer = UploadDeleteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            services.delete_upload(url=serializer.validated_data["url"])
        except ValidationError as e:
            return Response({"detail": e.detail}, status=status.HTTP_400_BAD_REQUEST)
        except UpstreamError as e:
            return Response({"detail": e.detail}, status=status.HTTP_502_BAD_GATEWAY)
        return Response({"detail": "Image deleted."})
