"""Orders API endpoints.

- ``/orders/``: place an order (any account) or list all orders (admin).
- ``/orders/mine/``: the caller's orders.
- ``/orders/<id>/``: detail for the owner or an admin.
- ``/orders/<id>/pay|deliver|cancel/``: lifecycle transitions.
"""

from common.exceptions import AuthorizationError, InvalidStateError, NotFoundError, ValidationError
from drf_spectacular.utils import OpenApiExample, OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAdminUser, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from . import services
from .filters import AdminOrderFilterSet
from .pagination import AdminOrderPagination
from .selectors import get_order_for_actor, orders_for_user, search_orders
from .serializers import (
    AdminOrderListSerializer,
    OrderCreateSerializer,
    OrderSerializer,
    PaymentResultSerializer,
)

ORDER_EXAMPLE = {
    "id": 42,
    "user": {"id": 7, "name": "Amira Ben Salem", "email": "amira@example.com"},
    "items": [
        {
            "id": 90,
            "product": 3,
            "name": "Sony Alpha a7 IV",
            "image": "/images/a7iv.jpg",
            "price": "2499.00",
            "quantity": 1,
            "line_total": "2499.00",
        }
    ],
    "shipping_address": {
        "street": "12 Rue de Marseille",
        "city": "Tunis",
        "postal_code": "1000",
        "country": "Tunisia",
        "phone": "+21620000000",
    },
    "payment_method": "CashOnDelivery",
    "items_price": "2499.00",
    "tax_price": "374.85",
    "shipping_price": "0.00",
    "total_price": "2873.85",
    "is_paid": False,
    "is_delivered": False,
    "is_cancelled": False,
    "status": "pending",
    "status_display": "Pending",
}


class OrderListCreateView(APIView):
    throttle_scope = "orders"

    def get_permissions(self):
        if self.request.method == "GET":
            return [IsAdminUser()]
        return [IsAuthenticated()]

    def get_throttles(self):
        if self.request.method == "POST":
            self.throttle_scope = "orders_write"
        return super().get_throttles()

    @extend_schema(
        tags=["Order Endpoints"],
        summary="List all orders (admin)",
        parameters=[
            OpenApiParameter(name="keyword", description="Order id, customer name or email", required=False, type=str),
            OpenApiParameter(name="is_paid", required=False, type=bool),
            OpenApiParameter(name="is_delivered", required=False, type=bool),
            OpenApiParameter(name="is_cancelled", required=False, type=bool),
            OpenApiParameter(name="page", required=False, type=int),
            OpenApiParameter(name="page_size", required=False, type=int),
        ],
        responses={200: AdminOrderListSerializer},
    )
    def get(self, request):
        filterset = AdminOrderFilterSet(request.query_params, queryset=search_orders())
        if not filterset.is_valid():
            return Response(filterset.errors, status=status.HTTP_400_BAD_REQUEST)
        paginator = AdminOrderPagination()
        page = paginator.paginate_queryset(filterset.qs, request, view=self)
        return paginator.get_paginated_response(OrderSerializer(page, many=True).data)

    @extend_schema(
        tags=["Order Endpoints"],
        summary="Place an order",
        description=(
            "Creates an order from product ids and quantities. Names, images and prices are copied from the "
            "catalog at this moment and the totals are quoted by the server."
        ),
        request=OrderCreateSerializer,
        responses={201: OrderSerializer, 400: OpenApiResponse(description="No order items or unknown product")},
        examples=[OpenApiExample("Created", value=ORDER_EXAMPLE, response_only=True)],
    )
    def post(self, request):
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            order = services.place_order(
                user=request.user,
                lines=data["order_items"],
                shipping_address=data["shipping_address"],
                payment_method=data["payment_method"],
            )
        except ValidationError as e:
            return Response({"detail": e.detail}, status=status.HTTP_400_BAD_REQUEST)
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)


class MyOrdersView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "orders"

    @extend_schema(
        tags=["Order Endpoints"],
        summary="List my orders",
        description="Most recently updated first.",
        responses={200: OrderSerializer(many=True)},
    )
    def get(self, request):
        return Response(OrderSerializer(orders_for_user(user=request.user), many=True).data)


class OrderDetailView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "orders"

    @extend_schema(
        tags=["Order Endpoints"],
        summary="Get order detail",
        description="Visible to the order's owner and to admins; anyone else gets 404.",
        responses={200: OrderSerializer, 404: OpenApiResponse(description="Order not found")},
        examples=[OpenApiExample("Order", value=ORDER_EXAMPLE, response_only=True)],
    )
    def get(self, request, order_id: int):
        order = get_order_for_actor(order_id=order_id, actor=request.user)
        if order is None:
            return Response({"detail": "Order not found."}, status=status.HTTP_404_NOT_FOUND)
        return Response(OrderSerializer(order).data)


class OrderPayView(APIView):
    permission_classes = [IsAdminUser]
    throttle_scope = "orders_write"

    @extend_schema(
        tags=["Order Endpoints"],
        summary="Mark order paid (admin)",
        description="Sets the paid flag and stores the payment result. Repeating it overwrites both.",
        request=PaymentResultSerializer,
        responses={200: OrderSerializer, 404: OpenApiResponse(description="Order not found")},
    )
    def post(self, request, order_id: int):
        serializer = PaymentResultSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            order = services.mark_paid(order_id=order_id, actor=request.user, payment_result=serializer.validated_data)
        except NotFoundError as e:
            return Response({"detail": e.detail}, status=status.HTTP_404_NOT_FOUND)
        except AuthorizationError as e:
            return Response({"detail": e.detail}, status=status.HTTP_403_FORBIDDEN)
        return Response(OrderSerializer(order).data)

    put = post


class OrderDeliverView(APIView):
    permission_classes = [IsAdminUser]
    throttle_scope = "orders_write"

    @extend_schema(
        tags=["Order Endpoints"],
        summary="Mark order delivered (admin)",
        description="Sets the delivered flag; the customer is emailed in the background.",
        request=None,
        responses={200: OrderSerializer, 404: OpenApiResponse(description="Order not found")},
    )
    def post(self, request, order_id: int):
        try:
            order = services.mark_delivered(order_id=order_id, actor=request.user)
        except NotFoundError as e:
            return Response({"detail": e.detail}, status=status.HTTP_404_NOT_FOUND)
        except AuthorizationError as e:
            return Response({"detail": e.detail}, status=status.HTTP_403_FORBIDDEN)
        return Response(OrderSerializer(order).data)

    put = post


class OrderCancelView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "orders_write"

    @extend_schema(
        tags=["Order Endpoints"],
        summary="Cancel order",
        description=(
            "Owner or admin only. Delivered orders cannot be cancelled. Cancelling twice is a no-op. "
            "A caller who is neither owner nor admin receives 401."
        ),
        request=None,
        responses={
            200: OrderSerializer,
            400: OpenApiResponse(description="Order already delivered"),
            401: OpenApiResponse(description="Not the owner and not an admin"),
            404: OpenApiResponse(description="Order not found"),
        },
    )
    def post(self, request, order_id: int):
        try:
            order = services.cancel_order(order_id=order_id, actor=request.user)
        except NotFoundError as e:
            return Response({"detail": e.detail}, status=status.HTTP_404_NOT_FOUND)
        except InvalidStateError as e:
            return Response({"detail": e.detail}, status=status.HTTP_400_BAD_REQUEST)
        except AuthorizationError as e:
            return Response({"detail": e.detail}, status=status.HTTP_401_UNAUTHORIZED)
        return Response(OrderSerializer(order).data)

    put = post
