"""
ProductService - shop product catalogue.

Only the owner of a shop can add or change its products. Prices arrive from
forms as strings and are validated as non-negative decimals.
"""

from decimal import Decimal, InvalidOperation
from typing import Optional

from django.db.models import QuerySet

from marketplace.filters import ProductFilter
from marketplace.shops.domain.models import Product, ProductCategory, Shop
from utils.lookups import get_or_none, missing_fields, parse_bool, parse_json_value
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

REQUIRED_PRODUCT_FIELDS = ("name", "description", "price", "main_image", "shop_id", "category_id")

UPDATABLE_FIELDS = (
    "name",
    "description",
    "main_image",
    "gallery_images",
    "tags",
    "sku",
    "barcode",
    "is_published",
    "is_featured",
    "inventory",
    "low_stock_threshold",
    "options",
    "variants",
)


class PriceError(ValueError):
    pass


def parse_price(value, label: str = "Price") -> Optional[Decimal]:
    """Parse a non-negative price. Empty values give None."""
    if value in (None, ""):
        return None
    try:
        price = Decimal(str(value))
    except InvalidOperation:
        raise PriceError(f"{label} must be a valid number")
    if not price.is_finite() or price < 0:
        raise PriceError(f"{label} must be a non-negative number")
    return price.quantize(Decimal("0.01"))


class ProductService(BaseService):
    def base_queryset(self) -> QuerySet:
        return Product.objects.select_related("shop", "category")

    @BaseService.log_performance
    def list_products(self, filters: dict = None) -> ServiceResult[QuerySet]:
        """
        Args:
            filters: shop_id, product_id, category_id, featured, published,
                     min_price, max_price, search, in_stock
        """
        product_filter = ProductFilter(data=filters or {}, queryset=self.base_queryset())
        if not product_filter.is_valid():
            errors = "; ".join(f"{field}: {', '.join(messages)}" for field, messages in product_filter.errors.items())
            return service_err(ErrorCodes.INVALID_INPUT, errors)

        try:
            return service_ok(product_filter.qs.order_by("-created_at"))
        except Exception as e:
            self.logger.error(f"Error listing products: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def get_product(self, product_id) -> ServiceResult[Product]:
        product = get_or_none(self.base_queryset(), pk=product_id)
        if product is None:
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, "Product not found")
        return service_ok(product)

    @BaseService.log_performance
    def create_product(self, user, data: dict) -> ServiceResult[Product]:
        missing = missing_fields(data, REQUIRED_PRODUCT_FIELDS)
        if missing:
            return service_err(ErrorCodes.INVALID_INPUT, f"Missing required fields: {', '.join(missing)}")

        try:
            price = parse_price(data["price"])
            compare_at_price = parse_price(data.get("compare_at_price"), "Compare at price")
        except PriceError as e:
            return service_err(ErrorCodes.INVALID_INPUT, str(e))

        shop = get_or_none(Shop, pk=data["shop_id"])
        if shop is None:
            return service_err(ErrorCodes.SHOP_NOT_FOUND, "Shop not found")
        if shop.owner_id != user.pk:
            return service_err(ErrorCodes.PERMISSION_DENIED, "You can only add products to your own shop")

        category = get_or_none(ProductCategory, pk=data["category_id"])
        if category is None:
            return service_err(ErrorCodes.CATEGORY_NOT_FOUND, "Category not found")

        try:
            options = parse_json_value(data.get("options"), [])
            variants = parse_json_value(data.get("variants"), [])
            gallery_images = parse_json_value(data.get("gallery_images"), [])
            tags = parse_json_value(data.get("tags"), [])
        except ValueError:
            return service_err(ErrorCodes.INVALID_INPUT, "Invalid JSON in options, variants, gallery_images or tags")

        try:
            inventory = int(data.get("inventory") or 0)
            threshold = data.get("low_stock_threshold")
            low_stock_threshold = 5 if threshold in (None, "") else int(threshold)
            weight = parse_price(data.get("weight"), "Weight")
        except (TypeError, ValueError) as e:
            return service_err(ErrorCodes.INVALID_INPUT, str(e) or "Invalid inventory values")
        if inventory < 0 or low_stock_threshold < 0:
            return service_err(ErrorCodes.INVALID_INPUT, "Inventory values must not be negative")

        try:
            product = Product.objects.create(
                shop=shop,
                category=category,
                name=data["name"],
                description=data["description"],
                price=price,
                compare_at_price=compare_at_price,
                main_image=data["main_image"],
                gallery_images=gallery_images,
                tags=tags,
                sku=data.get("sku") or "",
                barcode=data.get("barcode") or "",
                weight=weight,
                options=options,
                variants=variants,
                is_published=parse_bool(data.get("is_published"), True),
                is_featured=parse_bool(data.get("is_featured"), False),
                inventory=inventory,
                low_stock_threshold=low_stock_threshold,
            )
            self.logger.info(f"Created product {product.pk} in shop {shop.pk}")
            return service_ok(product)
        except Exception as e:
            self.logger.error(f"Error creating product: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def update_product(self, user, product_id, data: dict) -> ServiceResult[Product]:
        product = get_or_none(self.base_queryset(), pk=product_id)
        if product is None:
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, "Product not found")
        if product.shop.owner_id != user.pk:
            return service_err(ErrorCodes.PERMISSION_DENIED, "You can only update products in your own shop")

        changes = {}
        try:
            if "price" in data:
                changes["price"] = parse_price(data["price"])
                if changes["price"] is None:
                    return service_err(ErrorCodes.INVALID_INPUT, "Price must not be empty")
            if "compare_at_price" in data:
                changes["compare_at_price"] = parse_price(data["compare_at_price"], "Compare at price")
        except PriceError as e:
            return service_err(ErrorCodes.INVALID_INPUT, str(e))

        if data.get("category_id"):
            category = get_or_none(ProductCategory, pk=data["category_id"])
            if category is None:
                return service_err(ErrorCodes.CATEGORY_NOT_FOUND, "Category not found")
            changes["category"] = category

        try:
            for field in UPDATABLE_FIELDS:
                if field not in data:
                    continue
                value = data[field]
                if field in ("options", "variants", "gallery_images", "tags"):
                    value = parse_json_value(value, [])
                elif field in ("is_published", "is_featured"):
                    value = parse_bool(value, False)
                elif field in ("inventory", "low_stock_threshold"):
                    value = int(value)
                    if value < 0:
                        return service_err(ErrorCodes.INVALID_INPUT, f"{field} must not be negative")
                changes[field] = value
        except (TypeError, ValueError):
            return service_err(ErrorCodes.INVALID_INPUT, "Invalid product data")

        try:
            for field, value in changes.items():
                setattr(product, field, value)
            product.save()
            self.logger.info(f"Updated product {product.pk}: {sorted(changes)}")
            return service_ok(product)
        except Exception as e:
            self.logger.error(f"Error updating product {product_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def delete_product(self, user, product_id) -> ServiceResult[bool]:
        product = get_or_none(self.base_queryset(), pk=product_id)
        if product is None:
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, "Product not found")
        if product.shop.owner_id != user.pk:
            return service_err(ErrorCodes.PERMISSION_DENIED, "You can only delete products in your own shop")

        product.delete()
        return service_ok(True)

    def list_categories(self) -> ServiceResult[QuerySet]:
        return service_ok(ProductCategory.objects.all())
