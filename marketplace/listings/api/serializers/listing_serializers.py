from rest_framework import serializers

from accounts.api.serializers import UserSummarySerializer
from marketplace.listings.domain.models import Employee, Listing, Service, StoreHour


class ServiceSerializer(serializers.ModelSerializer):
    class Meta:
        model = Service
        fields = ("id", "service_name", "price", "category", "listing_id")


class StoreHourSerializer(serializers.ModelSerializer):
    class Meta:
        model = StoreHour
        fields = ("day_of_week", "open_time", "close_time", "is_closed")


class EmployeeSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Employee
        fields = ("id", "full_name")


class EmployeeSerializer(serializers.ModelSerializer):
    user_id = serializers.UUIDField(read_only=True)
    image = serializers.CharField(source="user.image", read_only=True)
    service_ids = serializers.SerializerMethodField()

    class Meta:
        model = Employee
        fields = (
            "id",
            "full_name",
            "job_title",
            "user_id",
            "image",
            "listing_id",
            "is_active",
            "is_independent",
            "service_ids",
        )

    def get_service_ids(self, obj):
        return [str(service.pk) for service in obj.services.all()]


class ListingSerializer(serializers.ModelSerializer):
    """Listing card for feeds and search pages."""

    owner_id = serializers.UUIDField(read_only=True)
    favorite_ids = serializers.SerializerMethodField()
    employees = EmployeeSummarySerializer(many=True, read_only=True)
    store_hours = StoreHourSerializer(many=True, read_only=True)
    services = ServiceSerializer(many=True, read_only=True)

    class Meta:
        model = Listing
        fields = (
            "id",
            "owner_id",
            "title",
            "description",
            "image_src",
            "category",
            "location",
            "address",
            "zip_code",
            "phone_number",
            "website",
            "gallery_images",
            "favorite_ids",
            "employees",
            "store_hours",
            "services",
            "created_at",
        )
        read_only_fields = fields

    def get_favorite_ids(self, obj):
        return [str(listing.pk) for listing in obj.owner.favorite_listings.all()]


class ListingDetailSerializer(ListingSerializer):
    owner = UserSummarySerializer(read_only=True)
    employees = EmployeeSerializer(many=True, read_only=True)
    followers_count = serializers.IntegerField(source="followers.count", read_only=True)

    class Meta(ListingSerializer.Meta):
        fields = ListingSerializer.Meta.fields + ("owner", "followers_count")
        read_only_fields = fields


class ListingCreateSerializer(serializers.Serializer):
    """Request body for the listing wizard. ``services`` and ``store_hours`` may also be JSON strings."""

    title = serializers.CharField(max_length=200)
    description = serializers.CharField()
    image_src = serializers.CharField(max_length=500)
    category = serializers.CharField(max_length=100)
    location = serializers.CharField(max_length=200)
    address = serializers.CharField(max_length=255)
    zip_code = serializers.CharField(max_length=20)
    phone_number = serializers.CharField(required=False, allow_blank=True)
    website = serializers.CharField(required=False, allow_blank=True)
    gallery_images = serializers.ListField(child=serializers.CharField())
    services = serializers.ListField(child=serializers.DictField())
    store_hours = serializers.ListField(child=serializers.DictField())
    employees = serializers.ListField(child=serializers.DictField(), required=False)


class ListingUpdateSerializer(serializers.Serializer):
    """
    Request body for a full listing edit. Services carrying an ``id`` are
    updated in place; store hours and the employee roster are replaced.
    """

    title = serializers.CharField(max_length=200, required=False)
    description = serializers.CharField(required=False)
    image_src = serializers.CharField(max_length=500, required=False)
    category = serializers.CharField(max_length=100, required=False)
    location = serializers.CharField(max_length=200, required=False, allow_blank=True)
    address = serializers.CharField(max_length=255, required=False, allow_blank=True)
    zip_code = serializers.CharField(max_length=20, required=False, allow_blank=True)
    phone_number = serializers.CharField(required=False, allow_blank=True)
    website = serializers.CharField(required=False, allow_blank=True)
    gallery_images = serializers.ListField(child=serializers.CharField(), required=False)
    services = serializers.ListField(child=serializers.DictField(), required=False)
    store_hours = serializers.ListField(child=serializers.DictField(), required=False)
    employees = serializers.ListField(child=serializers.DictField(), required=False)


class GalleryActionSerializer(serializers.Serializer):
    action = serializers.ChoiceField(choices=["addImage", "removeImage"])
    image = serializers.CharField(max_length=500, required=False)
    image_index = serializers.IntegerField(required=False, min_value=0)


class WorkerServicesInputSerializer(serializers.Serializer):
    services = serializers.ListField(child=serializers.DictField())


class WorkerServicesResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    services = ServiceSerializer(many=True)
