"""DRF views for cart operations.

- ``GET /cart/``: the account cart, created on first access.
- ``POST /cart/guest/``: price a guest snapshot without persisting it.
- ``POST /cart/sync/``: add a guest snapshot onto the account cart.
- ``POST /cart/add/`` and ``POST /cart/remove/``: one unit at a time.
- ``POST /cart/checkout/``: place an order for the cart and empty it.
"""

from common.exceptions import ValidationError
from drf_spectacular.utils import OpenApiExample, OpenApiResponse, extend_schema
from orders.serializers import CheckoutSerializer, OrderSerializer
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from . import services
from .serializers import CartReadSerializer, GuestEntriesSerializer, ProductRefSerializer

CART_EXAMPLE = {
    "items": [
        {
            "product_id": 3,
            "product": {
                "id": 3,
                "name": "Sony Alpha a7 IV",
                "brand": "Sony",
                "price": "2499.00",
                "image_url": "/images/a7iv.jpg",
                "in_stock": 4,
            },
            "quantity": 2,
            "unit_price": "2499.00",
            "line_total": "4998.00",
        },
        {"product_id": 99, "product": None, "quantity": 1, "unit_price": "0.00", "line_total": "0.00"},
    ],
    "item_count": 3,
    "subtotal": "4998.00",
    "is_guest": False,
}


class CartDetailView(APIView):
    """Return the authenticated user's cart."""

    permission_classes = [IsAuthenticated]
    throttle_scope = "cart"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Get cart",
        description="Returns the account cart priced against the current catalog. Unknown products render as null.",
        responses={200: CartReadSerializer},
        examples=[OpenApiExample("Cart", value=CART_EXAMPLE, response_only=True)],
    )
    def get(self, request):
        view = services.load_cart(user=request.user)
        return Response(CartReadSerializer.from_view(view).data, status=status.HTTP_200_OK)


class GuestCartView(APIView):
    """Price a guest cart held by the client."""

    permission_classes = [AllowAny]
    throttle_scope = "cart"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Price guest cart",
        description="Collapses repeated entries into quantities and prices them. Nothing is stored.",
        request=GuestEntriesSerializer,
        responses={200: CartReadSerializer},
        examples=[OpenApiExample("Guest snapshot", value={"items": [3, 3, {"_id": 5}]}, request_only=True)],
    )
    def post(self, request):
        serializer = GuestEntriesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        view = services.load_cart(user=None, guest_entries=serializer.validated_data["items"])
        return Response(CartReadSerializer.from_view(view).data, status=status.HTTP_200_OK)


class CartSyncView(APIView):
    """Merge a guest cart into the account cart."""

    permission_classes = [IsAuthenticated]
    throttle_scope = "cart_write"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Merge guest cart",
        description=(
            "Adds each guest product's count to the account cart. Quantities are summed, so sending the same "
            "snapshot twice adds it twice; clear the local guest cart once this succeeds."
        ),
        request=GuestEntriesSerializer,
        responses={200: CartReadSerializer},
    )
    def post(self, request):
        serializer = GuestEntriesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        view = services.merge_guest_cart(user=request.user, guest_entries=serializer.validated_data["items"])
        return Response(CartReadSerializer.from_view(view).data, status=status.HTTP_200_OK)


class CartAddView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "cart_write"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Add one unit",
        request=ProductRefSerializer,
        responses={200: CartReadSerializer},
    )
    def post(self, request):
        serializer = ProductRefSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        view = services.add_one(user=request.user, product=serializer.validated_data["product_id"])
        return Response(CartReadSerializer.from_view(view).data, status=status.HTTP_200_OK)


class CartRemoveView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "cart_write"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Remove one unit",
        description="Decrements the line; the last unit removes it. Unknown products are ignored.",
        request=ProductRefSerializer,
        responses={200: CartReadSerializer},
    )
    def post(self, request):
        serializer = ProductRefSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        view = services.remove_one(user=request.user, product=serializer.validated_data["product_id"])
        return Response(CartReadSerializer.from_view(view).data, status=status.HTTP_200_OK)


class CartCheckoutView(APIView):
    """Place an order for the cart's contents."""

    permission_classes = [IsAuthenticated]
    throttle_scope = "cart_write"

    @extend_schema(
        tags=["Cart Endpoints"],
        summary="Checkout cart",
        description="Creates an order from the current cart and clears the cart lines.",
        request=CheckoutSerializer,
        responses={201: OrderSerializer, 400: OpenApiResponse(description="Empty cart or unavailable product")},
        examples=[OpenApiExample("Mutation Error", value={"detail": "No order items."}, response_only=True)],
    )
    def post(self, request):
        serializer = CheckoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            order = services.checkout_cart(user=request.user, **serializer.validated_data)
        except ValidationError as e:
            return Response({"detail": e.detail}, status=status.HTTP_400_BAD_REQUEST)
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)
