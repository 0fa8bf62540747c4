from drf_spectacular.utils import extend_schema
from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.api.serializers import PlanSelectionSerializer, UserSerializer
from infrastructure.container import container
from utils.api import error_response


class SubscriptionSelectView(APIView):
    """Switch to a free plan. Paid plans are purchased through the payment provider."""

    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(request=PlanSelectionSerializer, responses={200: UserSerializer}, tags=["Accounts"])
    def post(self, request):
        serializer = PlanSelectionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = container.subscription_service().select_plan(
            request.user,
            serializer.validated_data["plan"],
            serializer.validated_data.get("interval"),
        )
        if not result.ok:
            return error_response(result)
        return Response({"success": True, "user": UserSerializer(result.value).data})
