from .product_views import CategoryListView, ProductViewSet
from .shop_views import ShopViewSet

__all__ = ["CategoryListView", "ProductViewSet", "ShopViewSet"]
