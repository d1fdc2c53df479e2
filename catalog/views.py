"""Public catalog endpoints: products, brands, categories and reviews."""

from common.exceptions import ValidationError
from django.db.models import Q
from django_filters import rest_framework as filters
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import filters as drf_filters
from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from . import selectors, services
from .models import Product
from .serializers import (
    BrandSerializer,
    CategorySerializer,
    ProductDetailSerializer,
    ProductSerializer,
    ReviewCreateSerializer,
    ReviewSerializer,
)


@extend_schema_view(
    list=extend_schema(summary="List brands", tags=["Catalog Endpoints"]),
    retrieve=extend_schema(summary="Get brand", tags=["Catalog Endpoints"]),
)
class BrandViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = selectors.list_brands()
    serializer_class = BrandSerializer
    pagination_class = None
    throttle_scope = "catalog"


@extend_schema_view(
    list=extend_schema(summary="List categories", tags=["Catalog Endpoints"]),
    retrieve=extend_schema(summary="Get category", tags=["Catalog Endpoints"]),
)
class CategoryViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = selectors.list_categories()
    serializer_class = CategorySerializer
    pagination_class = None
    throttle_scope = "catalog"


class ProductFilterSet(filters.FilterSet):
    category = filters.NumberFilter(field_name="category_id")
    brand = filters.NumberFilter(field_name="brand_id")
    keyword = filters.CharFilter(method="filter_keyword")
    min_price = filters.NumberFilter(field_name="price", lookup_expr="gte")
    max_price = filters.NumberFilter(field_name="price", lookup_expr="lte")

    class Meta:
        model = Product
        fields = ["category", "brand"]

    def filter_keyword(self, queryset, name, value):
        return queryset.filter(
            Q(name__icontains=value) | Q(description__icontains=value) | Q(brand__name__icontains=value)
        )


@extend_schema_view(
    list=extend_schema(
        summary="List products",
        description=(
            "Returns products with brand and category. Supports filtering by `category` and `brand` id, "
            "a free-text `keyword`, a price range and ordering by `price`, `name`, `rating` or `created_at`."
        ),
        tags=["Catalog Endpoints"],
        parameters=[
            OpenApiParameter("category", OpenApiTypes.INT, location="query", description="Filter by category id"),
            OpenApiParameter("brand", OpenApiTypes.INT, location="query", description="Filter by brand id"),
            OpenApiParameter("keyword", OpenApiTypes.STR, location="query", description="Search name/description"),
            OpenApiParameter("ordering", OpenApiTypes.STR, location="query", description="e.g. `price`, `-price`"),
        ],
    ),
    retrieve=extend_schema(
        summary="Get product",
        description="Returns a product with its reviews",
        tags=["Catalog Endpoints"],
    ),
)
class ProductViewSet(viewsets.ReadOnlyModelViewSet):
    filterset_class = ProductFilterSet
    filter_backends = [filters.DjangoFilterBackend, drf_filters.OrderingFilter]
    ordering_fields = ["price", "name", "rating", "created_at"]
    ordering = ["name"]
    throttle_scope = "catalog"

    def get_queryset(self):
        if self.action == "retrieve":
            return selectors.list_products().prefetch_related("reviews")
        return selectors.list_products()

    def get_serializer_class(self):
        return ProductDetailSerializer if self.action == "retrieve" else ProductSerializer

    def get_permissions(self):
        if self.action == "reviews":
            return [permissions.IsAuthenticated()]
        return [permissions.AllowAny()]

    @extend_schema(
        tags=["Catalog Endpoints"],
        summary="Review a product",
        description="Adds the caller's review. A second review of the same product is rejected.",
        request=ReviewCreateSerializer,
        responses={
            201: OpenApiResponse(response=ReviewSerializer),
            400: OpenApiResponse(description="Invalid rating or already reviewed"),
            401: OpenApiResponse(description="Unauthorized"),
            404: OpenApiResponse(description="Product not found"),
        },
    )
    @action(detail=True, methods=["post"], url_path="reviews")
    def reviews(self, request, pk=None):
        product = self.get_object()
        serializer = ReviewCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            review = services.create_review(
                product=product,
                user=request.user,
                rating=serializer.validated_data["rating"],
                comment=serializer.validated_data.get("comment", ""),
            )
        except ValidationError as e:
            return Response({"detail": e.detail}, status=status.HTTP_400_BAD_REQUEST)
        return Response(ReviewSerializer(review).data, status=status.HTTP_201_CREATED)
