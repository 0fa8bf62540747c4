from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema, inline_serializer
from rest_framework import serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from activity.api.serializers import NotificationSerializer
from infrastructure.container import container
from marketplace.api.serializers import ErrorResponseSerializer
from utils.api import error_response


class NotificationViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="notifications_list",
        parameters=[OpenApiParameter(name="limit", type=int, description="Default: 20")],
        responses={200: NotificationSerializer(many=True)},
        tags=["Notifications"],
    )
    def list(self, request):
        try:
            limit = int(request.query_params.get("limit", 20))
        except ValueError:
            return Response({"detail": "limit must be an integer"}, status=status.HTTP_400_BAD_REQUEST)

        result = container.notification_service().list_for(request.user, limit=limit)
        if not result.ok:
            return error_response(result)
        return Response(NotificationSerializer(result.value, many=True).data)

    @extend_schema(
        operation_id="notifications_mark_read",
        request=None,
        responses={200: NotificationSerializer, 404: OpenApiResponse(response=ErrorResponseSerializer)},
        tags=["Notifications"],
    )
    def partial_update(self, request, pk=None):
        result = container.notification_service().mark_read(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(NotificationSerializer(result.value).data)

    @extend_schema(
        operation_id="notifications_destroy",
        responses={204: OpenApiResponse(description="Deleted"), 404: OpenApiResponse(response=ErrorResponseSerializer)},
        tags=["Notifications"],
    )
    def destroy(self, request, pk=None):
        result = container.notification_service().delete(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        operation_id="notifications_mark_all_read",
        request=None,
        responses={200: inline_serializer(name="MarkAllReadResponse", fields={"updated": serializers.IntegerField()})},
        tags=["Notifications"],
    )
    @action(detail=False, methods=["post"], url_path="mark-all-read")
    def mark_all_read(self, request):
        result = container.notification_service().mark_all_read(request.user)
        if not result.ok:
            return error_response(result)
        return Response(result.value)

    @extend_schema(
        operation_id="notifications_unread_count",
        responses={200: inline_serializer(name="UnreadCountResponse", fields={"unread": serializers.IntegerField()})},
        tags=["Notifications"],
    )
    @action(detail=False, methods=["get"], url_path="unread-count")
    def unread_count(self, request):
        return Response({"unread": container.notification_service().unread_count(request.user)})
