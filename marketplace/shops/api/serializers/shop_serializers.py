from rest_framework import serializers

from accounts.api.serializers import UserSummarySerializer
from marketplace.shops.domain.models import Shop

from .product_serializers import ProductSerializer


def split_location(location: str):
    """Split "City, State" into (city, state). Missing parts are None."""
    parts = [part.strip() for part in (location or "").split(",")]
    city = parts[0] or None
    state = (parts[1] or None) if len(parts) > 1 else None
    return city, state


class ShopSerializer(serializers.ModelSerializer):
    owner = UserSummarySerializer(read_only=True)
    listing_id = serializers.UUIDField(read_only=True, allow_null=True)
    city = serializers.SerializerMethodField()
    state = serializers.SerializerMethodField()
    products = ProductSerializer(many=True, read_only=True)
    followers_count = serializers.IntegerField(source="followers.count", read_only=True)

    class Meta:
        model = Shop
        fields = (
            "id",
            "owner",
            "listing_id",
            "name",
            "description",
            "category",
            "logo",
            "cover_image",
            "gallery_images",
            "location",
            "city",
            "state",
            "address",
            "zip_code",
            "is_online_only",
            "coordinates",
            "store_url",
            "socials",
            "is_verified",
            "shop_enabled",
            "featured_products",
            "followers_count",
            "products",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields

    def get_city(self, obj):
        return split_location(obj.location)[0]

    def get_state(self, obj):
        return split_location(obj.location)[1]


class ShopCreateSerializer(serializers.Serializer):
    """Request body for the shop wizard; ``products`` is the optional first batch."""

    name = serializers.CharField(max_length=200)
    description = serializers.CharField()
    logo = serializers.CharField(max_length=500)
    category = serializers.CharField(max_length=100)
    cover_image = serializers.CharField(required=False, allow_blank=True)
    location = serializers.CharField(required=False, allow_blank=True)
    address = serializers.CharField(required=False, allow_blank=True)
    zip_code = serializers.CharField(required=False, allow_blank=True)
    is_online_only = serializers.BooleanField(required=False)
    coordinates = serializers.JSONField(required=False)
    socials = serializers.JSONField(required=False)
    store_url = serializers.CharField(required=False, allow_blank=True)
    listing_id = serializers.UUIDField(required=False, allow_null=True)
    products = serializers.JSONField(required=False)
