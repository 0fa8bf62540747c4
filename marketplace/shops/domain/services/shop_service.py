"""
ShopService - storefront listing and creation.

Creating a shop can carry a batch of products. The batch is best effort:
invalid items are skipped and counted, and an error on one item is logged
without undoing the shop or the products created before it.
"""

from decimal import Decimal, InvalidOperation
from typing import List

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Prefetch, QuerySet

from marketplace.infra.observability.metrics import shop_batch_products_total
from marketplace.shops.domain.models import Product, ProductCategory, Shop
from utils.lookups import get_or_none, missing_fields, parse_bool, parse_json_value
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

REQUIRED_SHOP_FIELDS = ("name", "description", "logo", "category")
ONLINE_SHOP_LOCATION = "Online Shop"
DEFAULT_PRODUCT_CATEGORY = "Uncategorized"
BATCH_PRODUCT_INVENTORY = 10
BATCH_LOW_STOCK_THRESHOLD = 5


class ShopService(BaseService):
    def base_queryset(self) -> QuerySet:
        return Shop.objects.select_related("owner").prefetch_related(
            Prefetch("products", queryset=Product.objects.select_related("category", "shop"))
        )

    @BaseService.log_performance
    def list_shops(self, params: dict = None) -> ServiceResult[List[Shop]]:
        """
        Args:
            params: user_id, category, is_verified, location_value, state, city,
                    has_products, limit, sort ("newest"), order ("asc" | "desc")
        """
        params = params or {}

        limit = params.get("limit")
        if limit not in (None, ""):
            try:
                limit = max(0, int(limit))
            except (TypeError, ValueError):
                return service_err(ErrorCodes.INVALID_INPUT, "limit must be an integer")
        else:
            limit = None

        try:
            queryset = self.base_queryset()

            if params.get("user_id"):
                queryset = queryset.filter(owner_id=params["user_id"])
            if params.get("category"):
                queryset = queryset.filter(category=params["category"])

            is_verified = parse_bool(params.get("is_verified"))
            if is_verified is not None:
                queryset = queryset.filter(is_verified=is_verified)

            location_filter = params.get("state") or params.get("city")
            if location_filter:
                queryset = queryset.filter(location__icontains=location_filter)
            elif params.get("location_value"):
                queryset = queryset.filter(location=params["location_value"])

            if parse_bool(params.get("has_products"), False):
                queryset = queryset.filter(products__isnull=False).distinct()

            if params.get("sort") == "newest":
                queryset = queryset.order_by("-created_at")
            else:
                queryset = queryset.order_by("created_at" if params.get("order") == "asc" else "-created_at")

            if limit is not None:
                queryset = queryset[:limit]

            return service_ok(list(queryset))

        except ValidationError as e:
            return service_err(ErrorCodes.INVALID_INPUT, "; ".join(e.messages))
        except Exception as e:
            self.logger.error(f"Error listing shops: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def get_shop(self, shop_id) -> ServiceResult[Shop]:
        shop = get_or_none(self.base_queryset(), pk=shop_id)
        if shop is None:
            return service_err(ErrorCodes.SHOP_NOT_FOUND, "Shop not found")
        return service_ok(shop)

    @BaseService.log_performance
    def create_shop(self, owner, data: dict) -> ServiceResult[dict]:
        """
        Create a shop and, optionally, its first products.

        Returns:
            ServiceResult with {"shop": Shop, "products": [Product], "skipped": int}
        """
        missing = missing_fields(data, REQUIRED_SHOP_FIELDS)
        if missing:
            return service_err(ErrorCodes.INVALID_INPUT, f"Missing required fields: {', '.join(missing)}")

        is_online_only = parse_bool(data.get("is_online_only"), False)
        if not is_online_only and missing_fields(data, ("address", "zip_code")):
            return service_err(ErrorCodes.INVALID_INPUT, "Address and zip code are required for physical shops")

        try:
            socials = parse_json_value(data.get("socials"), {})
            coordinates = parse_json_value(data.get("coordinates"), None)
            gallery_images = parse_json_value(data.get("gallery_images"), [])
            products_data = parse_json_value(data.get("products"), [])
        except ValueError:
            return service_err(ErrorCodes.INVALID_INPUT, "Invalid JSON in socials, coordinates, gallery or products")

        if not isinstance(products_data, list):
            return service_err(ErrorCodes.INVALID_INPUT, "products must be an array")

        listing_id = data.get("listing_id") or None
        if listing_id:
            listing = get_or_none(owner.listings.all(), pk=listing_id)
            if listing is None:
                return service_err(ErrorCodes.LISTING_NOT_FOUND, "Listing not found")

        try:
            with transaction.atomic():
                shop = Shop.objects.create(
                    owner=owner,
                    listing_id=listing_id,
                    name=data["name"],
                    description=data["description"],
                    category=data.get("category") or "",
                    logo=data["logo"],
                    cover_image=data.get("cover_image") or "",
                    gallery_images=gallery_images,
                    location=ONLINE_SHOP_LOCATION if is_online_only else (data.get("location") or ""),
                    address="" if is_online_only else data["address"],
                    zip_code="" if is_online_only else data["zip_code"],
                    is_online_only=is_online_only,
                    coordinates=None if is_online_only else coordinates,
                    store_url=data.get("store_url") or "",
                    socials=socials,
                )
        except Exception as e:
            self.logger.error(f"Error creating shop: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

        products, skipped = self._create_batch_products(shop, products_data)
        if products:
            shop.featured_products = list(shop.featured_products) + [str(product.pk) for product in products]
            shop.save(update_fields=["featured_products", "updated_at"])

        self.logger.info(f"Created shop {shop.pk} with {len(products)} products ({skipped} skipped)")
        return service_ok({"shop": shop, "products": products, "skipped": skipped})

    @BaseService.log_performance
    def delete_shop(self, user, shop_id) -> ServiceResult[bool]:
        shop = get_or_none(Shop, pk=shop_id)
        if shop is None:
            return service_err(ErrorCodes.SHOP_NOT_FOUND, "Shop not found")
        if shop.owner_id != user.pk:
            return service_err(ErrorCodes.PERMISSION_DENIED, "You can only delete your own shops")

        shop.delete()
        return service_ok(True)

    def _create_batch_products(self, shop: Shop, items: list):
        created = []
        skipped = 0

        for index, item in enumerate(items):
            if not isinstance(item, dict) or missing_fields(item, ("name", "description", "price")):
                self.logger.warning(f"Skipping product #{index} for shop {shop.pk}: missing name, description or price")
                shop_batch_products_total.labels(outcome="skipped", reason="missing_fields").inc()
                skipped += 1
                continue

            images = [image for image in (item.get("images") or []) if image]
            main_image = item.get("image") or (images[0] if images else None)
            if not main_image:
                self.logger.warning(f"Skipping product #{index} for shop {shop.pk}: no image")
                shop_batch_products_total.labels(outcome="skipped", reason="missing_image").inc()
                skipped += 1
                continue

            try:
                with transaction.atomic():
                    created.append(self._create_batch_product(shop, item, main_image, images))
                shop_batch_products_total.labels(outcome="created", reason="").inc()
            except (InvalidOperation, ValueError, TypeError, ValidationError) as e:
                self.logger.warning(f"Skipping product #{index} for shop {shop.pk}: {e}")
                shop_batch_products_total.labels(outcome="skipped", reason="invalid").inc()
                skipped += 1
            except Exception as e:
                self.logger.error(f"Failed to create product #{index} for shop {shop.pk}: {e}", exc_info=True)
                shop_batch_products_total.labels(outcome="skipped", reason="error").inc()
                skipped += 1

        return created, skipped

    @staticmethod
    def _create_batch_product(shop: Shop, item: dict, main_image: str, images: list) -> Product:
        price = Decimal(str(item["price"]))
        if price < 0:
            raise ValueError("price must not be negative")

        category_name = item.get("category") or DEFAULT_PRODUCT_CATEGORY
        category, _ = ProductCategory.objects.get_or_create(
            name=category_name, defaults={"description": f"Default category for {category_name} products"}
        )

        sizes = [size for size in (item.get("sizes") or []) if size]
        options = [{"name": "Size", "values": sizes}] if sizes else []
        variants = [
            {"price": float(price), "inventory": BATCH_PRODUCT_INVENTORY, "optionValues": {"Size": size}}
            for size in sizes
        ]

        return Product.objects.create(
            shop=shop,
            category=category,
            name=item["name"],
            description=item["description"],
            price=price,
            main_image=main_image,
            gallery_images=[image for image in images if image != main_image],
            tags=[category_name],
            options=options,
            variants=variants,
            is_published=True,
            is_featured=True,
            inventory=BATCH_PRODUCT_INVENTORY,
            low_stock_threshold=BATCH_LOW_STOCK_THRESHOLD,
        )
