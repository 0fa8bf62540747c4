from .product_service import PriceError, ProductService, parse_price
from .shop_service import ShopService

__all__ = ["PriceError", "ProductService", "ShopService", "parse_price"]
