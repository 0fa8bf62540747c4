from rest_framework import serializers

from accounts.api.serializers import UserSummarySerializer
from bookings.domain.models import Reservation
from marketplace.listings.domain.models import Listing


class ReservationListingSerializer(serializers.ModelSerializer):
    owner_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = Listing
        fields = ("id", "title", "category", "location", "image_src", "owner_id")


class ReservationSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(source="customer", read_only=True)
    listing = ReservationListingSerializer(read_only=True)
    service_id = serializers.UUIDField(read_only=True, allow_null=True)
    employee_id = serializers.UUIDField(read_only=True, allow_null=True)
    employee_name = serializers.CharField(source="employee.full_name", read_only=True, default=None)

    class Meta:
        model = Reservation
        fields = (
            "id",
            "user",
            "listing",
            "service_id",
            "service_name",
            "employee_id",
            "employee_name",
            "date",
            "time",
            "note",
            "total_price",
            "status",
            "payment_status",
            "created_at",
        )
        read_only_fields = fields


class ReservationCreateSerializer(serializers.Serializer):
    listing_id = serializers.UUIDField()
    service_id = serializers.UUIDField()
    employee_id = serializers.UUIDField()
    service_name = serializers.CharField(max_length=200)
    date = serializers.CharField(help_text="ISO date or datetime")
    time = serializers.CharField(max_length=20)
    total_price = serializers.IntegerField(min_value=0)
    note = serializers.CharField(required=False, allow_blank=True)


class ReservationStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=["accepted", "declined", "completed"])
