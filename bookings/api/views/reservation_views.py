import logging

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema, inline_serializer
from rest_framework import serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from bookings.api.serializers import ReservationCreateSerializer, ReservationSerializer, ReservationStatusSerializer
from infrastructure.container import container
from marketplace.api.serializers import ErrorResponseSerializer
from utils.api import error_response

logger = logging.getLogger(__name__)


class ReservationViewSet(viewsets.ViewSet):
    """
    Reservations for the signed-in user.

    ``GET /reservations/`` lists the user's own bookings (trips); pass
    ``scope=provider`` to list bookings made on the user's listings instead.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="reservations_list",
        parameters=[OpenApiParameter(name="scope", type=str, enum=["trips", "provider"], description="Default: trips")],
        responses={200: ReservationSerializer(many=True)},
        tags=["Reservations"],
    )
    def list(self, request):
        service = container.reservation_service()
        scope = request.query_params.get("scope", "trips")
        if scope == "provider":
            result = service.list_for_provider(request.user)
        elif scope == "trips":
            result = service.list_trips(request.user)
        else:
            return Response({"detail": "scope must be 'trips' or 'provider'"}, status=status.HTTP_400_BAD_REQUEST)

        if not result.ok:
            return error_response(result)
        return Response(ReservationSerializer(result.value, many=True).data)

    @extend_schema(
        operation_id="reservations_create",
        request=ReservationCreateSerializer,
        responses={
            201: ReservationSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Missing or invalid fields"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Listing, service or employee not found"),
        },
        tags=["Reservations"],
    )
    def create(self, request):
        serializer = ReservationCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = container.reservation_service().create(request.user, serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(ReservationSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="reservations_cancel",
        responses={
            200: inline_serializer(name="ReservationCancelResponse", fields={"message": serializers.CharField()}),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not the customer or listing owner"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Reservation not found"),
        },
        tags=["Reservations"],
    )
    def destroy(self, request, pk=None):
        result = container.reservation_service().cancel(request.user, pk)
        if not result.ok:
            return error_response(result)
        return Response(result.value)

    @extend_schema(
        operation_id="reservations_update_status",
        request=ReservationStatusSerializer,
        responses={
            200: ReservationSerializer,
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not the listing owner"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Transition not allowed"),
        },
        tags=["Reservations"],
    )
    @action(detail=True, methods=["patch"], url_path="status")
    def update_status(self, request, pk=None):
        serializer = ReservationStatusSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = container.reservation_service().update_status(request.user, pk, serializer.validated_data["status"])
        if not result.ok:
            return error_response(result)

        logger.info(f"Reservation {pk} set to {result.value.status} by {request.user.pk}")
        return Response(ReservationSerializer(result.value).data)
