"""
Marketplace Service Layer

Domain services for listings, shops, products, favorites, reviews, global
search and the provider analytics dashboard. Views get instances from
``infrastructure.container``.

Usage:
    from marketplace.services import ListingService

    result = ListingService().list_listings({"category": "Barber"})
    if result.ok:
        listings = result.value
"""

from marketplace.catalog.domain.services import AnalyticsService, FavoriteService, ReviewService, SearchService
from marketplace.listings.domain.services import IndependentWorkerService, ListingService
from marketplace.shops.domain.services import ProductService, ShopService
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

__all__ = [
    # Base classes
    "BaseService",
    "ServiceResult",
    "ErrorCodes",
    "service_ok",
    "service_err",
    # Services
    "ListingService",
    "IndependentWorkerService",
    "ShopService",
    "ProductService",
    "FavoriteService",
    "ReviewService",
    "SearchService",
    "AnalyticsService",
]
