from rest_framework import serializers

from marketplace.shops.domain.models import Product, ProductCategory, Shop

PLACEHOLDER_IMAGE = "/images/placeholder.jpg"


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductCategory
        fields = ("id", "name", "description")


class MinimalCategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductCategory
        fields = ("id", "name")


class MinimalShopSerializer(serializers.ModelSerializer):
    class Meta:
        model = Shop
        fields = ("id", "name")


class ProductSerializer(serializers.ModelSerializer):
    category = MinimalCategorySerializer(read_only=True)
    shop = MinimalShopSerializer(read_only=True)
    main_image = serializers.SerializerMethodField()
    is_low_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = Product
        fields = (
            "id",
            "name",
            "description",
            "price",
            "compare_at_price",
            "main_image",
            "gallery_images",
            "sku",
            "barcode",
            "tags",
            "weight",
            "options",
            "variants",
            "inventory",
            "low_stock_threshold",
            "is_low_stock",
            "is_published",
            "is_featured",
            "category",
            "shop",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields

    def get_main_image(self, obj):
        return obj.main_image or PLACEHOLDER_IMAGE


class ProductCreateSerializer(serializers.Serializer):
    """Request body for adding a product to a shop. JSON-ish fields may also be JSON strings."""

    shop_id = serializers.UUIDField()
    category_id = serializers.UUIDField()
    name = serializers.CharField(max_length=200)
    description = serializers.CharField()
    price = serializers.CharField(help_text="Non-negative number")
    compare_at_price = serializers.CharField(required=False, allow_blank=True)
    main_image = serializers.CharField(max_length=500)
    gallery_images = serializers.JSONField(required=False)
    tags = serializers.JSONField(required=False)
    options = serializers.JSONField(required=False)
    variants = serializers.JSONField(required=False)
    sku = serializers.CharField(required=False, allow_blank=True)
    barcode = serializers.CharField(required=False, allow_blank=True)
    inventory = serializers.IntegerField(required=False, min_value=0)
    low_stock_threshold = serializers.IntegerField(required=False, min_value=0)
    is_published = serializers.BooleanField(required=False)
    is_featured = serializers.BooleanField(required=False)
