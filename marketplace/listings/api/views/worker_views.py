from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema, inline_serializer
from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from infrastructure.container import container
from marketplace.api.serializers import ErrorResponseSerializer
from marketplace.listings.api.serializers import (
    ServiceSerializer,
    WorkerServicesInputSerializer,
    WorkerServicesResponseSerializer,
)
from utils.api import error_response


class WorkerServicesView(APIView):
    """Service menu of an independent worker. Anyone can read it; workers save their own."""

    def get_permissions(self):
        if self.request.method == "POST":
            return [permissions.IsAuthenticated()]
        return [permissions.AllowAny()]

    @extend_schema(
        operation_id="employee_services_list",
        parameters=[OpenApiParameter(name="user_id", type=str, required=True)],
        responses={
            200: inline_serializer(name="WorkerServicesList", fields={"services": ServiceSerializer(many=True)}),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Missing user_id"),
        },
        tags=["Listings"],
    )
    def get(self, request):
        result = container.worker_service().list_services(request.query_params.get("user_id"))
        if not result.ok:
            return error_response(result)
        return Response({"services": ServiceSerializer(result.value, many=True).data})

    @extend_schema(
        operation_id="employee_services_save",
        request=WorkerServicesInputSerializer,
        responses={
            200: WorkerServicesResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Services array required"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="No independent employee record"),
        },
        tags=["Listings"],
    )
    def post(self, request):
        result = container.worker_service().replace_services(request.user, request.data.get("services"))
        if not result.ok:
            return error_response(result)
        return Response({"success": True, "services": ServiceSerializer(result.value, many=True).data})
