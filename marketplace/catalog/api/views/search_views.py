from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from infrastructure.container import container
from marketplace.catalog.api.serializers import SearchResponseSerializer


class GlobalSearchView(APIView):
    """Search box across users, listings, posts, shops, products, employees and services."""

    permission_classes = [AllowAny]

    @extend_schema(
        operation_id="global_search",
        parameters=[OpenApiParameter(name="q", type=str, description="At least 2 characters")],
        responses={200: SearchResponseSerializer, 500: SearchResponseSerializer},
        tags=["Search"],
    )
    def get(self, request):
        result = container.search_service().search(request.query_params.get("q", ""))
        if not result.ok:
            return Response({"results": []}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"results": result.value})
