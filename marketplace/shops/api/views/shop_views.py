import logging

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema, inline_serializer
from rest_framework import serializers, status, viewsets
from rest_framework.permissions import IsAuthenticated, IsAuthenticatedOrReadOnly
from rest_framework.response import Response

from infrastructure.container import container
from marketplace.api.serializers import ErrorResponseSerializer
from marketplace.shops.api.serializers import ProductSerializer, ShopCreateSerializer, ShopSerializer
from utils.api import error_response

logger = logging.getLogger(__name__)


class ShopViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticatedOrReadOnly]

    def get_permissions(self):
        if self.action in ["create", "destroy"]:
            return [IsAuthenticated()]
        return super().get_permissions()

    @extend_schema(
        operation_id="shops_list",
        parameters=[
            OpenApiParameter(name="user_id", type=str),
            OpenApiParameter(name="category", type=str),
            OpenApiParameter(name="is_verified", type=bool),
            OpenApiParameter(name="location_value", type=str),
            OpenApiParameter(name="state", type=str),
            OpenApiParameter(name="city", type=str),
            OpenApiParameter(name="has_products", type=bool, description="Only shops with at least one product"),
            OpenApiParameter(name="limit", type=int),
            OpenApiParameter(name="sort", type=str, enum=["newest"]),
            OpenApiParameter(name="order", type=str, enum=["asc", "desc"]),
        ],
        responses={200: ShopSerializer(many=True)},
        tags=["Shops"],
    )
    def list(self, request):
        result = container.shop_service().list_shops(request.query_params.dict())
        if not result.ok:
            return error_response(result)
        return Response(ShopSerializer(result.value, many=True).data)

    @extend_schema(
        operation_id="shops_retrieve",
        responses={
            200: ShopSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Shop not found"),
        },
        tags=["Shops"],
    )
    def retrieve(self, request, pk=None):
        result = container.shop_service().get_shop(pk)
        if not result.ok:
            return error_response(result)
        return Response(ShopSerializer(result.value).data)

    @extend_schema(
        operation_id="shops_create",
        request=ShopCreateSerializer,
        responses={
            201: inline_serializer(
                name="ShopCreateResponse",
                fields={
                    "shop": ShopSerializer(),
                    "products": ProductSerializer(many=True),
                    "skipped": serializers.IntegerField(),
                },
            ),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Missing or invalid fields"),
        },
        tags=["Shops"],
    )
    def create(self, request):
        result = container.shop_service().create_shop(request.user, request.data)
        if not result.ok:
            return error_response(result)

        # Re-read so the embedded products reflect the batch
        shop = container.shop_service().get_shop(result.value["shop"].pk).value
        return Response(
            {
                "shop": ShopSerializer(shop).data,
                "products": ProductSerializer(result.value["products"], many=True).data,
                "skipped": result.value["skipped"],
            },
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        operation_id="shops_destroy",
        responses={
            204: OpenApiResponse(description="Shop deleted"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not the shop owner"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Shop not found"),
        },
        tags=["Shops"],
    )
    def destroy(self, request, pk=None):
        result = container.shop_service().delete_shop(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)
