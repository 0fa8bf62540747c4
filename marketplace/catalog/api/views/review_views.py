from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema, inline_serializer
from rest_framework import serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated, IsAuthenticatedOrReadOnly
from rest_framework.response import Response

from infrastructure.container import container
from marketplace.api.serializers import ErrorResponseSerializer
from marketplace.catalog.api.serializers import ReviewCreateSerializer, ReviewListResponseSerializer, ReviewSerializer
from utils.api import error_response


class ReviewViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticatedOrReadOnly]

    def get_permissions(self):
        if self.action in ["create", "helpful"]:
            return [IsAuthenticated()]
        return super().get_permissions()

    @extend_schema(
        operation_id="reviews_list",
        parameters=[
            OpenApiParameter(name="target_type", type=str, enum=["user", "listing"], required=True),
            OpenApiParameter(name="target_user_id", type=str),
            OpenApiParameter(name="target_listing_id", type=str),
            OpenApiParameter(name="limit", type=int, description="Default: 20"),
            OpenApiParameter(name="offset", type=int, description="Default: 0"),
        ],
        responses={
            200: ReviewListResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid target"),
        },
        tags=["Reviews"],
    )
    def list(self, request):
        params = request.query_params
        target_type = params.get("target_type")
        target_id = params.get("target_user_id") if target_type == "user" else params.get("target_listing_id")

        try:
            limit = int(params.get("limit", 20))
            offset = int(params.get("offset", 0))
        except ValueError:
            return Response({"detail": "limit and offset must be integers"}, status=status.HTTP_400_BAD_REQUEST)

        result = container.review_service().list_reviews(target_type, target_id, limit=limit, offset=offset)
        if not result.ok:
            return error_response(result)
        return Response(ReviewListResponseSerializer(result.value).data)

    @extend_schema(
        operation_id="reviews_create",
        request=ReviewCreateSerializer,
        responses={
            201: ReviewSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid or duplicate review"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Target not found"),
        },
        tags=["Reviews"],
    )
    def create(self, request):
        serializer = ReviewCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = container.review_service().create_review(request.user, serializer.validated_data)
        if not result.ok:
            return error_response(result)

        data = ReviewSerializer(
            result.value["review"], context={"is_verified_booking": result.value["is_verified_booking"]}
        ).data
        return Response(data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="reviews_helpful",
        request=None,
        responses={
            200: inline_serializer(
                name="ReviewHelpfulResponse",
                fields={"helpful": serializers.BooleanField(), "helpful_count": serializers.IntegerField()},
            ),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Own review"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Review not found"),
        },
        tags=["Reviews"],
    )
    @action(detail=True, methods=["post"])
    def helpful(self, request, pk=None):
        result = container.review_service().toggle_helpful(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(result.value)
