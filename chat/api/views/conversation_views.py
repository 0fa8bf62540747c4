from drf_spectacular.utils import OpenApiResponse, extend_schema, inline_serializer
from rest_framework import permissions, serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from chat.api.serializers import (
    ConversationSummarySerializer,
    MessageSerializer,
    SendMessageSerializer,
    StartConversationSerializer,
)
from infrastructure.container import container
from marketplace.api.serializers import ErrorResponseSerializer
from utils.api import error_response


class ConversationViewSet(viewsets.ViewSet):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="conversations_list",
        responses={200: ConversationSummarySerializer(many=True)},
        tags=["Chat"],
    )
    def list(self, request):
        result = container.chat_service().list_conversations(request.user)
        if not result.ok:
            return error_response(result)
        return Response(result.value)

    @extend_schema(
        operation_id="conversations_start",
        summary="Open the 1:1 conversation with another user",
        request=StartConversationSerializer,
        responses={
            200: inline_serializer(
                name="ConversationStartResponse",
                fields={"conversation_id": serializers.UUIDField(), "is_new": serializers.BooleanField()},
            ),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Talking to yourself"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="User not found"),
        },
        tags=["Chat"],
    )
    def create(self, request):
        serializer = StartConversationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = container.chat_service().get_or_create_conversation(
            request.user, serializer.validated_data["user_id"]
        )
        if not result.ok:
            return error_response(result)

        created = result.value["created"]
        return Response(
            {"conversation_id": str(result.value["conversation"].pk), "is_new": created},
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )

    @extend_schema(
        operation_id="conversations_messages",
        request=SendMessageSerializer,
        responses={
            200: MessageSerializer(many=True),
            201: MessageSerializer,
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not a participant"),
        },
        tags=["Chat"],
    )
    @action(detail=True, methods=["get", "post"])
    def messages(self, request, pk=None):
        service = container.chat_service()

        if request.method == "GET":
            result = service.list_messages(request.user, pk)
            if not result.ok:
                return error_response(result)
            return Response(MessageSerializer(result.value, many=True).data)

        serializer = SendMessageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = service.send_message(
            request.user, pk, serializer.validated_data.get("body"), serializer.validated_data.get("image")
        )
        if not result.ok:
            return error_response(result)
        return Response(MessageSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="conversations_mark_read",
        request=None,
        responses={200: inline_serializer(name="MarkReadResponse", fields={"marked_read": serializers.IntegerField()})},
        tags=["Chat"],
    )
    @action(detail=True, methods=["post"], url_path="mark-read")
    def mark_read(self, request, pk=None):
        result = container.chat_service().mark_read(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(result.value)
