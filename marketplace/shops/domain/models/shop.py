import uuid

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


class Shop(models.Model):
    """A storefront that sells products, optionally attached to a listing."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="shops")
    listing = models.ForeignKey(
        "marketplace.Listing", on_delete=models.SET_NULL, null=True, blank=True, related_name="shops"
    )

    name = models.CharField(max_length=200)
    description = models.TextField()
    category = models.CharField(max_length=100, blank=True)
    logo = models.CharField(max_length=500)
    cover_image = models.CharField(max_length=500, blank=True)
    gallery_images = models.JSONField(default=list, blank=True)

    # Location
    location = models.CharField(max_length=200, blank=True)
    address = models.CharField(max_length=255, blank=True)
    zip_code = models.CharField(max_length=20, blank=True)
    is_online_only = models.BooleanField(default=False)
    coordinates = models.JSONField(null=True, blank=True, help_text='{"lat": .., "lng": ..}')

    store_url = models.CharField(max_length=255, blank=True)
    socials = models.JSONField(default=dict, blank=True)

    is_verified = models.BooleanField(default=False)
    shop_enabled = models.BooleanField(default=True)
    featured_products = models.JSONField(default=list, blank=True, help_text="Product ids")

    followers = models.ManyToManyField(settings.AUTH_USER_MODEL, related_name="followed_shops", blank=True)
    favorited_by = models.ManyToManyField(settings.AUTH_USER_MODEL, related_name="favorite_shops", blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "marketplace"
        indexes = [
            models.Index(fields=["owner", "-created_at"], name="mkt_shop_owner_created_idx"),
            models.Index(fields=["category"], name="mkt_shop_category_idx"),
            models.Index(fields=["is_verified"], name="mkt_shop_verified_idx"),
        ]

    def __str__(self):
        return self.name


class ProductCategory(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]
        app_label = "marketplace"
        verbose_name_plural = "product categories"

    def __str__(self):
        return self.name


class Product(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    shop = models.ForeignKey(Shop, on_delete=models.CASCADE, related_name="products")
    category = models.ForeignKey(
        ProductCategory, on_delete=models.SET_NULL, null=True, blank=True, related_name="products"
    )

    name = models.CharField(max_length=200)
    description = models.TextField()

    # Pricing and Inventory
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(0)])
    compare_at_price = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True, validators=[MinValueValidator(0)]
    )
    inventory = models.PositiveIntegerField(default=0)
    low_stock_threshold = models.PositiveIntegerField(default=5)
    sku = models.CharField(max_length=100, blank=True)
    barcode = models.CharField(max_length=100, blank=True)
    weight = models.DecimalField(max_digits=8, decimal_places=2, null=True, blank=True)

    # Media
    main_image = models.CharField(max_length=500, blank=True)
    gallery_images = models.JSONField(default=list, blank=True)

    # Attributes: options is [{"name": "Size", "values": [...]}], variants carry optionValues
    tags = models.JSONField(default=list, blank=True)
    options = models.JSONField(default=list, blank=True)
    variants = models.JSONField(default=list, blank=True)

    # Status and Visibility
    is_published = models.BooleanField(default=True)
    is_featured = models.BooleanField(default=False)

    favorited_by = models.ManyToManyField(settings.AUTH_USER_MODEL, related_name="favorite_products", blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "marketplace"
        indexes = [
            models.Index(fields=["shop", "is_published", "-created_at"], name="mkt_product_shop_pub_idx"),
            models.Index(fields=["category", "is_published"], name="mkt_product_category_pub_idx"),
            models.Index(fields=["is_featured", "is_published"], name="mkt_product_featured_pub_idx"),
        ]

    def __str__(self):
        return self.name

    @property
    def is_low_stock(self) -> bool:
        return self.inventory <= self.low_stock_threshold
