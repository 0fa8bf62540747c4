from .shop import Product, ProductCategory, Shop


__all__ = ["Shop", "ProductCategory", "Product"]
