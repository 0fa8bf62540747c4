from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from infrastructure.container import container
from marketplace.api.serializers import ErrorResponseSerializer
from utils.api import error_response
from waitlist.api.serializers import (
    DemoRequestInputSerializer,
    SignupCountSerializer,
    SignupResponseSerializer,
    WaitlistSignupInputSerializer,
)

SIGNUP_ERRORS = {
    400: OpenApiResponse(response=ErrorResponseSerializer, description="Missing or malformed field"),
    409: OpenApiResponse(response=ErrorResponseSerializer, description="Concurrent signup for the same email"),
}


def _signup_response(result) -> Response:
    if not result.ok:
        return error_response(result)
    return Response({"message": result.value["message"], "data": result.value["data"]})


class WaitlistView(APIView):
    """Public pre-launch waitlist."""

    permission_classes = [AllowAny]

    @extend_schema(operation_id="waitlist_count", responses={200: SignupCountSerializer}, tags=["Waitlist"])
    def get(self, request):
        result = container.waitlist_service().count()
        if not result.ok:
            return error_response(result)
        return Response({"message": "Waitlist count retrieved", "count": result.value})

    @extend_schema(
        operation_id="waitlist_join",
        request=WaitlistSignupInputSerializer,
        responses={200: SignupResponseSerializer, **SIGNUP_ERRORS},
        tags=["Waitlist"],
    )
    def post(self, request):
        result = container.waitlist_service().join(request.data.get("email"), request.data.get("source"))
        return _signup_response(result)


class DemoRequestView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(operation_id="demo_request_count", responses={200: SignupCountSerializer}, tags=["Waitlist"])
    def get(self, request):
        result = container.waitlist_service().demo_count()
        if not result.ok:
            return error_response(result)
        return Response({"message": "Demo request count retrieved", "count": result.value})

    @extend_schema(
        operation_id="demo_request_submit",
        summary="Request a product demo; a confirmation email is queued",
        request=DemoRequestInputSerializer,
        responses={200: SignupResponseSerializer, **SIGNUP_ERRORS},
        tags=["Waitlist"],
    )
    def post(self, request):
        data = request.data
        result = container.waitlist_service().request_demo(data.get("name"), data.get("email"), data.get("source"))
        return _signup_response(result)
