from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import AllowAny, IsAuthenticated, IsAuthenticatedOrReadOnly
from rest_framework.response import Response
from rest_framework.views import APIView

from infrastructure.container import container
from marketplace.api.serializers import ErrorResponseSerializer
from marketplace.shops.api.serializers import CategorySerializer, ProductCreateSerializer, ProductSerializer
from utils.api import error_response


class ProductViewSet(viewsets.ViewSet):
    """
    Shop products. Anyone can browse published products; only the shop
    owner can add, change or remove them.
    """

    permission_classes = [IsAuthenticatedOrReadOnly]

    def get_permissions(self):
        if self.action in ["create", "partial_update", "destroy"]:
            return [IsAuthenticated()]
        return super().get_permissions()

    @extend_schema(
        operation_id="products_list",
        parameters=[
            OpenApiParameter(name="shop_id", type=str),
            OpenApiParameter(name="product_id", type=str),
            OpenApiParameter(name="category_id", type=str),
            OpenApiParameter(name="featured", type=bool),
            OpenApiParameter(name="published", type=bool, description="Default: published only"),
            OpenApiParameter(name="min_price", type=float),
            OpenApiParameter(name="max_price", type=float),
            OpenApiParameter(name="search", type=str),
            OpenApiParameter(name="in_stock", type=bool),
        ],
        responses={
            200: ProductSerializer(many=True),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid filter"),
        },
        tags=["Products"],
    )
    def list(self, request):
        result = container.product_service().list_products(request.query_params.dict())
        if not result.ok:
            return error_response(result)
        return Response(ProductSerializer(result.value, many=True).data)

    @extend_schema(
        operation_id="products_retrieve",
        responses={
            200: ProductSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Products"],
    )
    def retrieve(self, request, pk=None):
        result = container.product_service().get_product(pk)
        if not result.ok:
            return error_response(result)
        return Response(ProductSerializer(result.value).data)

    @extend_schema(
        operation_id="products_create",
        request=ProductCreateSerializer,
        responses={
            201: ProductSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid data"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not the shop owner"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Shop or category not found"),
        },
        tags=["Products"],
    )
    def create(self, request):
        result = container.product_service().create_product(request.user, request.data)
        if not result.ok:
            return error_response(result)
        return Response(ProductSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="products_partial_update",
        request=ProductCreateSerializer,
        responses={
            200: ProductSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid data"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not the shop owner"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Products"],
    )
    def partial_update(self, request, pk=None):
        result = container.product_service().update_product(request.user, pk, request.data)
        if not result.ok:
            return error_response(result)
        return Response(ProductSerializer(result.value).data)

    @extend_schema(
        operation_id="products_destroy",
        responses={
            204: OpenApiResponse(description="Product deleted"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not the shop owner"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
        },
        tags=["Products"],
    )
    def destroy(self, request, pk=None):
        result = container.product_service().delete_product(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)


class CategoryListView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(operation_id="product_categories_list", responses={200: CategorySerializer(many=True)}, tags=["Products"])
    def get(self, request):
        result = container.product_service().list_categories()
        return Response(CategorySerializer(result.value, many=True).data)
