import logging

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated, IsAuthenticatedOrReadOnly
from rest_framework.response import Response

from infrastructure.container import container
from marketplace.api.serializers import ErrorResponseSerializer
from marketplace.listings.api.serializers import (
    GalleryActionSerializer,
    ListingCreateSerializer,
    ListingDetailSerializer,
    ListingSerializer,
    ListingUpdateSerializer,
)
from utils.api import error_response

logger = logging.getLogger(__name__)


class ListingViewSet(viewsets.ViewSet):
    """
    Business/service listings. Reads are public; creating, editing and
    deleting need an authenticated owner.
    """

    permission_classes = [IsAuthenticatedOrReadOnly]

    def get_permissions(self):
        if self.action in ["create", "update", "partial_update", "destroy"]:
            return [IsAuthenticated()]
        return super().get_permissions()

    @extend_schema(
        operation_id="listings_list",
        parameters=[
            OpenApiParameter(name="user_id", type=str, description="Only listings owned by this user"),
            OpenApiParameter(name="category", type=str),
            OpenApiParameter(name="location_value", type=str, description='Exact location, e.g. "Austin, TX"'),
            OpenApiParameter(name="state", type=str, description="Case-insensitive location fragment"),
            OpenApiParameter(name="city", type=str, description="Case-insensitive location fragment"),
            OpenApiParameter(name="min_price", type=float),
            OpenApiParameter(name="max_price", type=float),
            OpenApiParameter(name="order", type=str, enum=["asc", "desc"]),
        ],
        responses={
            200: ListingSerializer(many=True),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid filter"),
        },
        tags=["Listings"],
    )
    def list(self, request):
        result = container.listing_service().list_listings(request.query_params.dict())
        if not result.ok:
            return error_response(result)
        return Response(ListingSerializer(result.value, many=True).data)

    @extend_schema(
        operation_id="listings_retrieve",
        responses={
            200: ListingDetailSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Listing not found"),
        },
        tags=["Listings"],
    )
    def retrieve(self, request, pk=None):
        result = container.listing_service().get_listing(pk)
        if not result.ok:
            return error_response(result)
        return Response(ListingDetailSerializer(result.value).data)

    @extend_schema(
        operation_id="listings_create",
        request=ListingCreateSerializer,
        responses={
            201: ListingDetailSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Missing or invalid fields"),
        },
        tags=["Listings"],
    )
    def create(self, request):
        result = container.listing_service().create_listing(request.user, request.data)
        if not result.ok:
            return error_response(result)

        logger.info(f"Listing {result.value.pk} created by {request.user.pk}")
        return Response(ListingDetailSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="listings_destroy",
        responses={
            204: OpenApiResponse(description="Listing deleted"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not the listing owner"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Listing not found"),
        },
        tags=["Listings"],
    )
    def destroy(self, request, pk=None):
        result = container.listing_service().delete_listing(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        operation_id="listings_update",
        request=ListingUpdateSerializer,
        responses={
            200: ListingDetailSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid fields or unknown employees"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not the listing owner"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Listing not found"),
        },
        tags=["Listings"],
    )
    def update(self, request, pk=None):
        result = container.listing_service().update_listing(request.user, pk, request.data)
        if not result.ok:
            return error_response(result)

        logger.info(f"Listing {pk} updated by {request.user.pk}")
        return Response(ListingDetailSerializer(result.value).data)

    @extend_schema(
        operation_id="listings_gallery_update",
        request=GalleryActionSerializer,
        responses={
            200: ListingDetailSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid action or missing image"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not the listing owner"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Listing not found"),
        },
        tags=["Listings"],
    )
    def partial_update(self, request, pk=None):
        result = container.listing_service().update_gallery(
            request.user,
            pk,
            request.data.get("action"),
            image=request.data.get("image"),
            image_index=request.data.get("image_index"),
        )
        if not result.ok:
            return error_response(result)
        return Response(ListingDetailSerializer(result.value).data)
