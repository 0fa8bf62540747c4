from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from infrastructure.container import container
from marketplace.api.serializers import ErrorResponseSerializer
from marketplace.catalog.api.serializers import FavoriteToggleSerializer
from marketplace.listings.api.serializers import EmployeeSerializer, ListingSerializer
from marketplace.shops.api.serializers import ProductSerializer, ShopSerializer
from utils.api import error_response

SERIALIZERS = {
    "listing": ListingSerializer,
    "shop": ShopSerializer,
    "product": ProductSerializer,
    "employee": EmployeeSerializer,
}


class FavoriteListView(APIView):
    """The signed-in user's favorites of one kind (listing, shop, product or employee)."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="favorites_list",
        responses={400: OpenApiResponse(response=ErrorResponseSerializer, description="Unknown kind")},
        tags=["Favorites"],
    )
    def get(self, request, kind):
        result = container.favorite_service().list(request.user, kind)
        if not result.ok:
            return error_response(result)
        return Response(SERIALIZERS[kind](result.value, many=True).data)


class FavoriteToggleView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="favorites_toggle",
        request=None,
        responses={
            200: FavoriteToggleSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Unknown kind"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Target not found"),
        },
        tags=["Favorites"],
    )
    def post(self, request, kind, target_id):
        result = container.favorite_service().toggle(request.user, kind, target_id)
        if not result.ok:
            return error_response(result)
        return Response(FavoriteToggleSerializer(result.value).data)
