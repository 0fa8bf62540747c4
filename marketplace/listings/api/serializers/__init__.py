from .listing_serializers import (
    EmployeeSerializer,
    EmployeeSummarySerializer,
    GalleryActionSerializer,
    ListingCreateSerializer,
    ListingDetailSerializer,
    ListingSerializer,
    ListingUpdateSerializer,
    ServiceSerializer,
    StoreHourSerializer,
    WorkerServicesInputSerializer,
    WorkerServicesResponseSerializer,
)

__all__ = [
    "EmployeeSerializer",
    "EmployeeSummarySerializer",
    "GalleryActionSerializer",
    "ListingCreateSerializer",
    "ListingDetailSerializer",
    "ListingSerializer",
    "ListingUpdateSerializer",
    "ServiceSerializer",
    "StoreHourSerializer",
    "WorkerServicesInputSerializer",
    "WorkerServicesResponseSerializer",
]
