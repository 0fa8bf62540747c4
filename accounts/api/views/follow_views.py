from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.api.serializers import FollowToggleSerializer
from infrastructure.container import container
from utils.api import error_response


class FollowToggleView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="accounts_follow_toggle",
        summary="Follow or unfollow a user, listing or shop",
        parameters=[OpenApiParameter(name="type", type=str, enum=["user", "listing", "shop"])],
        request=None,
        responses={200: FollowToggleSerializer},
        tags=["Accounts"],
    )
    def post(self, request, target_id):
        result = container.follow_service().toggle(
            request.user, target_id, request.query_params.get("type", "user")
        )
        if not result.ok:
            return error_response(result)
        return Response(FollowToggleSerializer(result.value).data)
