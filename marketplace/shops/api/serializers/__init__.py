from .product_serializers import (
    CategorySerializer,
    MinimalCategorySerializer,
    MinimalShopSerializer,
    ProductCreateSerializer,
    ProductSerializer,
)
from .shop_serializers import ShopCreateSerializer, ShopSerializer, split_location

__all__ = [
    "CategorySerializer",
    "MinimalCategorySerializer",
    "MinimalShopSerializer",
    "ProductCreateSerializer",
    "ProductSerializer",
    "ShopCreateSerializer",
    "ShopSerializer",
    "split_location",
]
