from marketplace.catalog.domain.models import Review
from marketplace.listings.domain.models import Employee, Listing, Service, StoreHour
from marketplace.shops.domain.models import Product, ProductCategory, Shop


__all__ = [
    "Listing",
    "Service",
    "Employee",
    "StoreHour",
    "Shop",
    "ProductCategory",
    "Product",
    "Review",
]
