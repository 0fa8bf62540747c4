from .reservation_serializers import (
    ReservationCreateSerializer,
    ReservationListingSerializer,
    ReservationSerializer,
    ReservationStatusSerializer,
)


__all__ = [
    "ReservationCreateSerializer",
    "ReservationListingSerializer",
    "ReservationSerializer",
    "ReservationStatusSerializer",
]
