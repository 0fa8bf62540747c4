import logging

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema, inline_serializer
from rest_framework import serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated, IsAuthenticatedOrReadOnly
from rest_framework.response import Response

from activity.api.serializers import CommentCreateSerializer, CommentSerializer, PostCreateSerializer, PostSerializer
from infrastructure.container import container
from marketplace.api.serializers import ErrorResponseSerializer
from utils.api import error_response

logger = logging.getLogger(__name__)


class PostViewSet(viewsets.ViewSet):
    """
    The social feed. Reading is public; an anonymous viewer asking for the
    following, likes or bookmarks feed gets an empty list.
    """

    permission_classes = [IsAuthenticatedOrReadOnly]

    def get_permissions(self):
        if self.action in ["like", "bookmark", "hide"]:
            return [IsAuthenticated()]
        return super().get_permissions()

    @extend_schema(
        operation_id="posts_list",
        parameters=[
            OpenApiParameter(name="user_id", type=str),
            OpenApiParameter(name="category", type=str),
            OpenApiParameter(name="location_value", type=str),
            OpenApiParameter(name="state", type=str),
            OpenApiParameter(name="city", type=str),
            OpenApiParameter(name="start_date", type=str, description="Used only together with end_date"),
            OpenApiParameter(name="end_date", type=str),
            OpenApiParameter(name="order", type=str, enum=["asc", "desc"]),
            OpenApiParameter(name="filter", type=str, enum=["following", "likes", "bookmarks"]),
        ],
        responses={200: PostSerializer(many=True)},
        tags=["Feed"],
    )
    def list(self, request):
        result = container.feed_service().get_posts(request.user, request.query_params.dict())
        if not result.ok:
            return error_response(result)
        return Response(PostSerializer(result.value, many=True).data)

    @extend_schema(
        operation_id="posts_retrieve",
        responses={200: PostSerializer, 404: OpenApiResponse(response=ErrorResponseSerializer)},
        tags=["Feed"],
    )
    def retrieve(self, request, pk=None):
        result = container.feed_service().get_post(pk)
        if not result.ok:
            return error_response(result)
        return Response(PostSerializer(result.value).data)

    @extend_schema(
        operation_id="posts_create",
        request=PostCreateSerializer,
        responses={201: PostSerializer, 400: OpenApiResponse(response=ErrorResponseSerializer)},
        tags=["Feed"],
    )
    def create(self, request):
        result = container.feed_service().create_post(request.user, request.data)
        if not result.ok:
            return error_response(result)
        return Response(PostSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="posts_destroy",
        responses={
            204: OpenApiResponse(description="Post deleted"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not the author"),
        },
        tags=["Feed"],
    )
    def destroy(self, request, pk=None):
        result = container.feed_service().delete_post(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        operation_id="posts_like",
        request=None,
        responses={
            200: inline_serializer(
                name="PostLikeResponse",
                fields={"liked": serializers.BooleanField(), "likes_count": serializers.IntegerField()},
            )
        },
        tags=["Feed"],
    )
    @action(detail=True, methods=["post"])
    def like(self, request, pk=None):
        result = container.feed_service().toggle_like(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(result.value)

    @extend_schema(
        operation_id="posts_bookmark",
        request=None,
        responses={
            200: inline_serializer(
                name="PostBookmarkResponse",
                fields={"bookmarked": serializers.BooleanField(), "bookmarks_count": serializers.IntegerField()},
            )
        },
        tags=["Feed"],
    )
    @action(detail=True, methods=["post"])
    def bookmark(self, request, pk=None):
        result = container.feed_service().toggle_bookmark(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(result.value)

    @extend_schema(methods=["POST"], operation_id="posts_hide", request=None, tags=["Feed"])
    @extend_schema(
        methods=["DELETE"],
        operation_id="posts_unhide",
        request=None,
        description="Show a previously hidden post in the caller's feed again.",
        tags=["Feed"],
    )
    @action(detail=True, methods=["post", "delete"])
    def hide(self, request, pk=None):
        if request.method == "DELETE":
            result = container.feed_service().unhide_post(request.user, pk)
        else:
            result = container.feed_service().hide_post(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(result.value)

    @extend_schema(
        operation_id="posts_comments",
        request=CommentCreateSerializer,
        responses={200: CommentSerializer(many=True), 201: CommentSerializer},
        tags=["Feed"],
    )
    @action(detail=True, methods=["get", "post"])
    def comments(self, request, pk=None):
        service = container.comment_service()

        if request.method == "GET":
            result = service.list(pk)
            if not result.ok:
                return error_response(result)
            return Response(CommentSerializer(result.value, many=True).data)

        result = service.create(request.user, pk, request.data.get("content"))
        if not result.ok:
            return error_response(result)
        logger.info(f"Comment {result.value.pk} added to post {pk}")
        return Response(CommentSerializer(result.value).data, status=status.HTTP_201_CREATED)
