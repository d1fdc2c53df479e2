"""Notification endpoints for the signed-in account."""

from common.exceptions import NotFoundError
from drf_spectacular.utils import OpenApiResponse, extend_schema, inline_serializer
from rest_framework import serializers as rf_serializers
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from . import services
from .selectors import latest_for
from .serializers import NotificationSerializer


class NotificationListView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "notifications"

    @extend_schema(
        tags=["Notification Endpoints"],
        summary="List notifications",
        description="Newest first. Admins also see notifications addressed to all admins.",
        responses={200: NotificationSerializer(many=True)},
    )
    def get(self, request):
        return Response(NotificationSerializer(latest_for(user=request.user), many=True).data)


class NotificationReadView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "notifications"

    @extend_schema(
        tags=["Notification Endpoints"],
        summary="Mark a notification read",
        request=None,
        responses={200: NotificationSerializer, 404: OpenApiResponse(description="Notification not found")},
    )
    def post(self, request, notification_id: int):
        try:
            notification = services.mark_read(user=request.user, notification_id=notification_id)
        except NotFoundError as e:
            return Response({"detail": e.detail}, status=status.HTTP_404_NOT_FOUND)
        return Response(NotificationSerializer(notification).data)

    put = post


class NotificationReadAllView(APIView):
    permission_classes = [IsAuthenticated]
    throttle_scope = "notifications"

    @extend_schema(
        tags=["Notification Endpoints"],
        summary="Mark all notifications read",
        request=None,
        responses={
            200: inline_serializer(
                name="NotificationsReadAll",
                fields={"detail": rf_serializers.CharField(), "updated": rf_serializers.IntegerField()},
            )
        },
    )
    def post(self, request):
        updated = services.mark_all_read(user=request.user)
        return Response({"detail": "All notifications marked as read.", "updated": updated})

    put = post
